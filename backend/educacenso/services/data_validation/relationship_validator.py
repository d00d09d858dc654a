# educacenso/services/data_validation/relationship_validator.py
"""Cross-reference checks between classes, schools, academic years and stages."""

from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from ...schemas.census import (
    AcademicYear,
    Classroom,
    CurriculumStage,
    School,
    Teacher,
)


@dataclass
class RelationshipValidationResult:
    valid: bool
    errors: List[str] = field(default_factory=list)

    @classmethod
    def ok(cls) -> "RelationshipValidationResult":
        return cls(valid=True)

    @classmethod
    def failed(cls, *errors: str) -> "RelationshipValidationResult":
        return cls(valid=False, errors=list(errors))


def find_curriculum_stage(
    stage_id: Optional[str], stages: Sequence[CurriculumStage]
) -> Optional[CurriculumStage]:
    if not stage_id:
        return None
    return next((stage for stage in stages if stage.id == stage_id), None)


def validate_classroom_belongs_to_school(
    classroom: Classroom, school_id: str
) -> RelationshipValidationResult:
    # Classes nested under a school without their own school id are taken as owned
    if classroom.school_id and classroom.school_id != school_id:
        return RelationshipValidationResult.failed("Turma não pertence à escola selecionada")
    return RelationshipValidationResult.ok()


def validate_classroom_belongs_to_academic_year(
    classroom: Classroom, academic_year: AcademicYear
) -> RelationshipValidationResult:
    if not any(item.id == classroom.id for item in academic_year.classes):
        return RelationshipValidationResult.failed(
            "Turma não pertence ao ano letivo selecionado"
        )
    return RelationshipValidationResult.ok()


def validate_grade_level_belongs_to_stage(
    grade_level_id: str, stage: CurriculumStage
) -> RelationshipValidationResult:
    if not any(level.id == grade_level_id for level in stage.grade_levels):
        return RelationshipValidationResult.failed(
            "Série/Ano não pertence à etapa de ensino selecionada"
        )
    return RelationshipValidationResult.ok()


def validate_teacher_enabled_for_subject(
    teacher: Teacher, subject: str
) -> RelationshipValidationResult:
    if subject not in (teacher.enabled_subjects or []):
        return RelationshipValidationResult.failed(
            "Professor não está habilitado para esta disciplina"
        )
    return RelationshipValidationResult.ok()


def validate_classroom_relationships(
    classroom: Classroom,
    school: School,
    academic_year: AcademicYear,
    stages: Sequence[CurriculumStage],
) -> RelationshipValidationResult:
    """All relationship checks for one class, errors accumulated."""
    errors: List[str] = []

    errors.extend(validate_classroom_belongs_to_school(classroom, school.id).errors)
    errors.extend(
        validate_classroom_belongs_to_academic_year(classroom, academic_year).errors
    )

    if classroom.grade_level_id:
        stage = find_curriculum_stage(classroom.curriculum_stage_id, stages)
        if stage is None:
            errors.append("Etapa de ensino não encontrada")
        else:
            errors.extend(
                validate_grade_level_belongs_to_stage(classroom.grade_level_id, stage).errors
            )

    return RelationshipValidationResult(valid=not errors, errors=errors)
