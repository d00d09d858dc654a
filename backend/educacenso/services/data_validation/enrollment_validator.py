# educacenso/services/data_validation/enrollment_validator.py
"""
Enrollment (matrícula) checks against the rest of the snapshot.

The checks read a flat list of every enrollment in the network, each stamped
with its student id, and the school tree (school -> academic years -> classes).
An enrollment is active when its status is the configured active status
(``Cursando``) or unset.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from ...config import get_settings
from ...schemas.census import AcademicYear, Classroom, Enrollment, School
from .date_validator import format_br, parse_date


@dataclass
class CheckResult:
    valid: bool
    error: Optional[str] = None


@dataclass
class CapacityCheckResult:
    valid: bool
    error: Optional[str] = None
    current_count: int = 0
    max_capacity: int = 0


@dataclass
class EnrollmentValidationResult:
    valid: bool
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


def is_active_enrollment(enrollment: Enrollment) -> bool:
    return not enrollment.status or enrollment.status == get_settings().ACTIVE_ENROLLMENT_STATUS


def _find_school(schools: Sequence[School], school_id: Optional[str]) -> Optional[School]:
    return next((school for school in schools if school.id == school_id), None)


def _find_year(school: School, year_id: Optional[str]) -> Optional[AcademicYear]:
    return next((year for year in school.academic_years if year.id == year_id), None)


def _find_classroom(year: AcademicYear, classroom_id: Optional[str]) -> Optional[Classroom]:
    return next((item for item in year.classes if item.id == classroom_id), None)


def resolve_enrollment(
    enrollment: Enrollment, schools: Sequence[School]
) -> Tuple[Optional[School], Optional[AcademicYear], Optional[Classroom]]:
    """Follow school -> academic year -> class as far as the ids resolve."""
    school = _find_school(schools, enrollment.school_id)
    year = _find_year(school, enrollment.academic_year_id) if school else None
    classroom = _find_classroom(year, enrollment.classroom_id) if year else None
    return school, year, classroom


def validate_duplicate_enrollment(
    student_id: str,
    academic_year_id: str,
    enrollments: Sequence[Enrollment],
    exclude_enrollment_id: Optional[str] = None,
) -> CheckResult:
    duplicate = next(
        (
            e
            for e in enrollments
            if e.student_id == student_id
            and e.academic_year_id == academic_year_id
            and is_active_enrollment(e)
            and e.id != exclude_enrollment_id
        ),
        None,
    )
    if duplicate is not None:
        return CheckResult(valid=False, error="Aluno já possui matrícula ativa neste ano letivo")
    return CheckResult(valid=True)


def validate_simultaneous_enrollments(
    student_id: str,
    school_id: str,
    enrollments: Sequence[Enrollment],
    exclude_enrollment_id: Optional[str] = None,
) -> CheckResult:
    other_schools = [
        e
        for e in enrollments
        if e.student_id == student_id
        and is_active_enrollment(e)
        and e.id != exclude_enrollment_id
        and e.school_id != school_id
    ]
    if other_schools:
        return CheckResult(
            valid=False,
            error=(
                "Aluno possui matrícula ativa em outra escola. "
                "Remova a matrícula anterior antes de criar nova."
            ),
        )
    return CheckResult(valid=True)


def validate_enrollment_relationships(
    enrollment: Enrollment, schools: Sequence[School]
) -> List[str]:
    """Errors for ids that do not resolve or point at another school's records."""
    errors: List[str] = []

    school = _find_school(schools, enrollment.school_id)
    if school is None:
        errors.append("Escola não encontrada")
        return errors

    if not enrollment.academic_year_id:
        return errors

    year = _find_year(school, enrollment.academic_year_id)
    if year is None:
        errors.append("Ano letivo não pertence à escola selecionada")
        return errors

    if enrollment.classroom_id:
        classroom = _find_classroom(year, enrollment.classroom_id)
        if classroom is None:
            errors.append("Turma não pertence ao ano letivo selecionado")
        elif classroom.school_id and classroom.school_id != enrollment.school_id:
            errors.append("Turma não pertence à escola selecionada")

    return errors


def validate_classroom_capacity(
    classroom_id: str,
    academic_year_id: str,
    school_id: str,
    enrollments: Sequence[Enrollment],
    schools: Sequence[School],
    exclude_enrollment_id: Optional[str] = None,
) -> CapacityCheckResult:
    """
    Whether the class has room for one more active enrollment.

    ``current_count`` counts the other active enrollments of the class; the
    enrollment being checked is left out so that existing data is judged the
    same way as a new placement.
    """
    school = _find_school(schools, school_id)
    if school is None:
        return CapacityCheckResult(valid=False, error="Escola não encontrada")

    year = _find_year(school, academic_year_id)
    if year is None:
        return CapacityCheckResult(valid=False, error="Ano letivo não encontrado")

    classroom = _find_classroom(year, classroom_id)
    if classroom is None:
        return CapacityCheckResult(valid=False, error="Turma não encontrada")

    max_capacity = classroom.max_capacity or get_settings().DEFAULT_CLASSROOM_CAPACITY
    current_count = sum(
        1
        for e in enrollments
        if e.classroom_id == classroom_id
        and e.academic_year_id == academic_year_id
        and is_active_enrollment(e)
        and e.id != exclude_enrollment_id
    )

    if current_count >= max_capacity:
        return CapacityCheckResult(
            valid=False,
            error=(
                f"Turma atingiu capacidade máxima ({max_capacity} alunos). "
                f"Atualmente: {current_count} alunos."
            ),
            current_count=current_count,
            max_capacity=max_capacity,
        )

    return CapacityCheckResult(
        valid=True, current_count=current_count, max_capacity=max_capacity
    )


def validate_enrollment_period(
    enrollment_date,
    academic_year_id: str,
    school_id: str,
    schools: Sequence[School],
) -> CheckResult:
    """The enrollment date must fall inside the academic year."""
    school = _find_school(schools, school_id)
    if school is None:
        return CheckResult(valid=False, error="Escola não encontrada")

    year = _find_year(school, academic_year_id)
    if year is None:
        return CheckResult(valid=False, error="Ano letivo não encontrado")

    enrolled_on = parse_date(enrollment_date)
    year_start = parse_date(year.start_date)
    year_end = parse_date(year.end_date)

    if enrolled_on is None:
        return CheckResult(valid=True)

    if year_start is not None and enrolled_on < year_start:
        return CheckResult(
            valid=False,
            error=(
                f"Data de matrícula ({format_br(enrolled_on)}) é anterior ao início "
                f"do ano letivo ({format_br(year_start)})"
            ),
        )

    if year_end is not None and enrolled_on > year_end:
        return CheckResult(
            valid=False,
            error=(
                f"Data de matrícula ({format_br(enrolled_on)}) é posterior ao fim "
                f"do ano letivo ({format_br(year_end)})"
            ),
        )

    return CheckResult(valid=True)


def validate_enrollment_complete(
    enrollment: Enrollment,
    student_id: str,
    enrollments: Sequence[Enrollment],
    schools: Sequence[School],
    exclude_enrollment_id: Optional[str] = None,
) -> EnrollmentValidationResult:
    """
    Run every enrollment check and collect errors and warnings.

    Duplicate, simultaneous and capacity checks only apply while the
    enrollment is active; a finished or transferred enrollment is history.
    """
    settings = get_settings()
    errors: List[str] = []
    warnings: List[str] = []
    active = is_active_enrollment(enrollment)

    if active and enrollment.academic_year_id:
        duplicate = validate_duplicate_enrollment(
            student_id, enrollment.academic_year_id, enrollments, exclude_enrollment_id
        )
        if not duplicate.valid:
            errors.append(duplicate.error or "Matrícula duplicada")

    if active and enrollment.school_id:
        simultaneous = validate_simultaneous_enrollments(
            student_id, enrollment.school_id, enrollments, exclude_enrollment_id
        )
        if not simultaneous.valid:
            errors.append(simultaneous.error or "Matrícula simultânea detectada")

    errors.extend(validate_enrollment_relationships(enrollment, schools))

    if (
        active
        and enrollment.classroom_id
        and enrollment.academic_year_id
        and enrollment.school_id
    ):
        capacity = validate_classroom_capacity(
            enrollment.classroom_id,
            enrollment.academic_year_id,
            enrollment.school_id,
            enrollments,
            schools,
            exclude_enrollment_id,
        )
        if capacity.max_capacity:
            if not capacity.valid:
                errors.append(capacity.error or "Capacidade da turma excedida")
            elif capacity.current_count:
                remaining = capacity.max_capacity - capacity.current_count
                if remaining <= settings.CLASSROOM_NEARLY_FULL_THRESHOLD:
                    warnings.append(
                        f"Turma quase lotada: {remaining} vaga(s) restante(s) "
                        f"de {capacity.max_capacity}"
                    )

    if enrollment.enrollment_date and enrollment.academic_year_id and enrollment.school_id:
        period = validate_enrollment_period(
            enrollment.enrollment_date,
            enrollment.academic_year_id,
            enrollment.school_id,
            schools,
        )
        # Unresolved school or year is already reported by the relationship check
        if not period.valid and _year_resolves(enrollment, schools):
            errors.append(period.error or "Período de matrícula inválido")

    return EnrollmentValidationResult(valid=not errors, errors=errors, warnings=warnings)


def _year_resolves(enrollment: Enrollment, schools: Sequence[School]) -> bool:
    school, year, _ = resolve_enrollment(enrollment, schools)
    return school is not None and year is not None
