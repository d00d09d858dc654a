# backend/educacenso/services/export/inconsistency_reporter.py
"""
Inconsistency report over a census snapshot.

Four passes (schools, students, teachers, classes) apply the validation rules
and turn every failure into an ``Inconsistency``. Nothing here raises for bad
data: a rule that cannot be evaluated is skipped.
"""

import logging
from datetime import date
from typing import Any, Dict, List, Optional, Sequence

from ...schemas.census import (
    Classroom,
    CurriculumStage,
    Enrollment,
    School,
    Student,
    Teacher,
)
from ...schemas.export import (
    EntityType,
    Inconsistency,
    InconsistencyReport,
    InconsistencySummary,
    Severity,
    SeverityCounts,
)
from ..data_validation.age_grade_validator import (
    DISTORTION_HIGH,
    extract_grade_number,
    validate_age_grade,
)
from ..data_validation.document_validator import validate_cpf
from ..data_validation.enrollment_validator import (
    is_active_enrollment,
    resolve_enrollment,
    validate_enrollment_complete,
)
from ..data_validation.inep_code_validator import (
    validate_curriculum_stage_code,
    validate_school_inep_code,
)
from ..data_validation.relationship_validator import (
    find_curriculum_stage,
    validate_classroom_relationships,
)
from ..data_validation.required_fields_validator import (
    RequiredFieldsResult,
    validate_classroom_required_fields,
    validate_school_required_fields,
    validate_student_required_fields,
    validate_teacher_required_fields,
)
from .csv_exporter import CSVExporter

logger = logging.getLogger(__name__)

CSV_COLUMNS = [
    "type",
    "entity",
    "entity_id",
    "entity_name",
    "field",
    "message",
    "suggestion",
]
CSV_HEADERS = {
    "type": "Tipo",
    "entity": "Entidade",
    "entity_id": "ID",
    "entity_name": "Nome",
    "field": "Campo",
    "message": "Mensagem",
    "suggestion": "Sugestão",
}
CSV_QUOTED_COLUMNS = ("entity_name", "message", "suggestion")

SUMMARY_KEYS = {
    EntityType.SCHOOL: "schools",
    EntityType.STUDENT: "students",
    EntityType.TEACHER: "teachers",
    EntityType.CLASSROOM: "classrooms",
    EntityType.ENROLLMENT: "enrollments",
}


def _finding(
    severity: Severity,
    entity: EntityType,
    entity_id: str,
    entity_name: str,
    field: Optional[str],
    message: str,
    suggestion: Optional[str] = None,
) -> Inconsistency:
    return Inconsistency(
        type=severity,
        entity=entity,
        entity_id=entity_id,
        entity_name=entity_name,
        field=field,
        message=message,
        suggestion=suggestion,
    )


def _required_field_findings(
    result: RequiredFieldsResult,
    entity: EntityType,
    entity_id: str,
    entity_name: str,
    skip_fields: Sequence[str] = (),
) -> List[Inconsistency]:
    return [
        _finding(
            Severity.ERROR,
            entity,
            entity_id,
            entity_name,
            error.field,
            error.message,
            f"Preencha o campo {error.field}",
        )
        for error in result.errors
        if error.field not in skip_fields
    ]


# --- Passes ---
def validate_schools(
    schools: Sequence[School], curriculum_stages: Sequence[CurriculumStage]
) -> List[Inconsistency]:
    findings: List[Inconsistency] = []

    for school in schools:
        if school.inep_code:
            inep = validate_school_inep_code(school.inep_code)
            if not inep.valid:
                findings.append(
                    _finding(
                        Severity.ERROR,
                        EntityType.SCHOOL,
                        school.id,
                        school.name,
                        "inepCode",
                        inep.error or "Código INEP inválido",
                        "Verifique o código INEP da escola",
                    )
                )
        else:
            findings.append(
                _finding(
                    Severity.ERROR,
                    EntityType.SCHOOL,
                    school.id,
                    school.name,
                    "inepCode",
                    "Código INEP não cadastrado",
                    "Cadastre o código INEP da escola",
                )
            )

        # The INEP code has its own finding above
        findings.extend(
            _required_field_findings(
                validate_school_required_fields(school),
                EntityType.SCHOOL,
                school.id,
                school.name,
                skip_fields=("inepCode",),
            )
        )

        for year in school.academic_years:
            for classroom in year.classes:
                relationships = validate_classroom_relationships(
                    classroom, school, year, curriculum_stages
                )
                for error in relationships.errors:
                    findings.append(
                        _finding(
                            Severity.ERROR,
                            EntityType.CLASSROOM,
                            classroom.id,
                            classroom.name,
                            "relationships",
                            error,
                            "Verifique os relacionamentos da turma",
                        )
                    )

    return findings


def _age_grade_findings(
    student: Student,
    schools: Sequence[School],
    reference_date: Optional[date],
) -> List[Inconsistency]:
    active = next((e for e in student.enrollments if is_active_enrollment(e)), None)
    if active is None or not student.birth_date:
        return []

    _, _, classroom = resolve_enrollment(active, schools)
    grade = extract_grade_number(classroom.grade_level_name) if classroom else None
    if not grade:
        return []

    findings: List[Inconsistency] = []
    result = validate_age_grade(
        student.birth_date, grade, allow_exceptions=True, reference_date=reference_date
    )
    if not result.valid and result.error:
        findings.append(
            _finding(
                Severity.ERROR,
                EntityType.STUDENT,
                student.id,
                student.name,
                "birthDate",
                result.error,
                "Verifique a data de nascimento e a série do aluno",
            )
        )
    elif result.warning:
        findings.append(
            _finding(
                Severity.WARNING,
                EntityType.STUDENT,
                student.id,
                student.name,
                "birthDate",
                result.warning,
                "Considere verificar a adequação idade-série",
            )
        )

    if result.distortion == DISTORTION_HIGH:
        findings.append(
            _finding(
                Severity.WARNING,
                EntityType.STUDENT,
                student.id,
                student.name,
                "ageGradeDistortion",
                f"Distorção idade-série alta detectada ({result.distortion})",
                "Avalie a necessidade de adequação da série do aluno",
            )
        )
    return findings


def _enrollment_findings(
    student: Student,
    all_enrollments: Sequence[Enrollment],
    schools: Sequence[School],
) -> List[Inconsistency]:
    findings: List[Inconsistency] = []
    for enrollment in student.enrollments:
        stamped = enrollment.model_copy(update={"student_id": student.id})
        result = validate_enrollment_complete(
            stamped, student.id, all_enrollments, schools, enrollment.id
        )
        entity_name = f"{student.name} - {enrollment.grade or 'Sem série'}"
        for error in result.errors:
            findings.append(
                _finding(
                    Severity.ERROR,
                    EntityType.ENROLLMENT,
                    enrollment.id,
                    entity_name,
                    "validation",
                    error,
                    "Verifique os dados da matrícula",
                )
            )
        for warning in result.warnings:
            findings.append(
                _finding(
                    Severity.WARNING,
                    EntityType.ENROLLMENT,
                    enrollment.id,
                    entity_name,
                    "validation",
                    warning,
                    "Atenção aos avisos da matrícula",
                )
            )
    return findings


def validate_students(
    students: Sequence[Student],
    schools: Sequence[School],
    all_enrollments: Sequence[Enrollment],
    reference_date: Optional[date] = None,
) -> List[Inconsistency]:
    findings: List[Inconsistency] = []

    for student in students:
        if student.cpf:
            cpf = validate_cpf(student.cpf)
            if not cpf.valid:
                findings.append(
                    _finding(
                        Severity.ERROR,
                        EntityType.STUDENT,
                        student.id,
                        student.name,
                        "cpf",
                        cpf.error or "CPF inválido",
                        "Verifique o CPF do aluno",
                    )
                )

        findings.extend(
            _required_field_findings(
                validate_student_required_fields(student),
                EntityType.STUDENT,
                student.id,
                student.name,
            )
        )
        findings.extend(_age_grade_findings(student, schools, reference_date))
        findings.extend(_enrollment_findings(student, all_enrollments, schools))

    return findings


def validate_teachers(teachers: Sequence[Teacher]) -> List[Inconsistency]:
    findings: List[Inconsistency] = []

    for teacher in teachers:
        if teacher.cpf:
            cpf = validate_cpf(teacher.cpf)
            if not cpf.valid:
                findings.append(
                    _finding(
                        Severity.ERROR,
                        EntityType.TEACHER,
                        teacher.id,
                        teacher.name,
                        "cpf",
                        cpf.error or "CPF inválido",
                        "Verifique o CPF do professor",
                    )
                )

        findings.extend(
            _required_field_findings(
                validate_teacher_required_fields(teacher),
                EntityType.TEACHER,
                teacher.id,
                teacher.name,
            )
        )

    return findings


def validate_classrooms(
    classrooms: Sequence[Classroom], curriculum_stages: Sequence[CurriculumStage]
) -> List[Inconsistency]:
    findings: List[Inconsistency] = []

    for classroom in classrooms:
        findings.extend(
            _required_field_findings(
                validate_classroom_required_fields(classroom, classroom.is_multi_grade),
                EntityType.CLASSROOM,
                classroom.id,
                classroom.name,
            )
        )

        if not classroom.curriculum_stage_id:
            continue

        stage = find_curriculum_stage(classroom.curriculum_stage_id, curriculum_stages)
        if stage is None:
            findings.append(
                _finding(
                    Severity.ERROR,
                    EntityType.CLASSROOM,
                    classroom.id,
                    classroom.name,
                    "etapaEnsinoId",
                    "Etapa de ensino não encontrada",
                    "Verifique a etapa de ensino da turma",
                )
            )
            continue

        code = validate_curriculum_stage_code(stage.census_code)
        if not code.valid:
            findings.append(
                _finding(
                    Severity.ERROR,
                    EntityType.CLASSROOM,
                    classroom.id,
                    classroom.name,
                    "etapaEnsinoId",
                    code.error or "Código de etapa de ensino inválido",
                    "Verifique o código da etapa de ensino",
                )
            )

    return findings


# --- Report ---
def summarize(inconsistencies: Sequence[Inconsistency]) -> InconsistencySummary:
    summary = InconsistencySummary()
    for item in inconsistencies:
        counts: SeverityCounts = getattr(summary, SUMMARY_KEYS[item.entity])
        if item.type == Severity.ERROR:
            counts.errors += 1
        elif item.type == Severity.WARNING:
            counts.warnings += 1
        else:
            counts.info += 1
    return summary


def build_report(inconsistencies: List[Inconsistency]) -> InconsistencyReport:
    return InconsistencyReport(
        total_errors=sum(1 for i in inconsistencies if i.type == Severity.ERROR),
        total_warnings=sum(1 for i in inconsistencies if i.type == Severity.WARNING),
        total_info=sum(1 for i in inconsistencies if i.type == Severity.INFO),
        inconsistencies=inconsistencies,
        summary=summarize(inconsistencies),
    )


def generate_inconsistency_report(
    schools: Sequence[School],
    students: Sequence[Student],
    teachers: Sequence[Teacher],
    curriculum_stages: Sequence[CurriculumStage],
    reference_date: Optional[date] = None,
) -> InconsistencyReport:
    """
    Run every pass and aggregate the findings.

    Enrollments are compared across the whole network, each stamped with the
    id of the student it belongs to. ``reference_date`` drives the age
    calculation and defaults to today.
    """
    logger.info(
        f"Generating inconsistency report for {len(schools)} school(s), "
        f"{len(students)} student(s), {len(teachers)} teacher(s)"
    )

    all_enrollments = [
        enrollment.model_copy(update={"student_id": student.id})
        for student in students
        for enrollment in student.enrollments
    ]
    all_classrooms = [
        classroom
        for school in schools
        for year in school.academic_years
        for classroom in year.classes
    ]

    inconsistencies: List[Inconsistency] = [
        *validate_schools(schools, curriculum_stages),
        *validate_students(students, schools, all_enrollments, reference_date),
        *validate_teachers(teachers),
        *validate_classrooms(all_classrooms, curriculum_stages),
    ]

    report = build_report(inconsistencies)
    logger.info(
        f"Inconsistency report ready: {report.total_errors} error(s), "
        f"{report.total_warnings} warning(s), {report.total_info} info"
    )
    return report


def filter_inconsistencies(
    report: InconsistencyReport,
    type: Optional[Severity] = None,
    entity: Optional[EntityType] = None,
) -> List[Inconsistency]:
    """Findings matching the given severity and/or entity type."""
    return [
        item
        for item in report.inconsistencies
        if (type is None or item.type == type) and (entity is None or item.entity == entity)
    ]


def report_rows(inconsistencies: Sequence[Inconsistency]) -> List[Dict[str, Any]]:
    """Flat rows keyed by ``CSV_COLUMNS`` for the report renderers."""
    return [
        {
            "type": item.type.value,
            "entity": item.entity.value,
            "entity_id": item.entity_id,
            "entity_name": item.entity_name,
            "field": item.field or "",
            "message": item.message,
            "suggestion": item.suggestion or "",
        }
        for item in inconsistencies
    ]


def export_inconsistency_report_to_csv(report: InconsistencyReport) -> str:
    """
    CSV text with the header ``Tipo,Entidade,ID,Nome,Campo,Mensagem,Sugestão``.

    Name, message and suggestion are always quoted; rows end with ``\\n``
    except the last one.
    """
    exporter = CSVExporter(
        fieldnames=CSV_COLUMNS, headers=CSV_HEADERS, quoted_fields=CSV_QUOTED_COLUMNS
    )
    return exporter.export_text(report_rows(report.inconsistencies))
