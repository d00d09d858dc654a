# backend/educacenso/services/export/educacenso_exporter.py
"""
Educacenso (INEP school census) file export.

The file is plain text, one record per line, fields separated by ``|``. The
first field is the record type:

    00  school            10  student (one per active enrollment)
    20  teacher (one per subject)    30  class    40  infrastructure

For every school the records are written in the order 00, 40, 30, 10, 20.
Export is all-or-nothing: a hard validation error yields no content at all.
"""

import logging
import re
from datetime import date
from typing import Any, List, Optional, Sequence

from ...config import get_settings
from ...schemas.census import (
    AcademicYear,
    Classroom,
    CurriculumStage,
    Enrollment,
    School,
    SchoolInfrastructure,
    Student,
    Teacher,
)
from ...schemas.export import EducacensoExportOptions, EducacensoExportResult
from ..data_validation.date_validator import parse_date, today
from ..data_validation.enrollment_validator import is_active_enrollment
from ..data_validation.relationship_validator import find_curriculum_stage

logger = logging.getLogger(__name__)

FIELD_SEPARATOR = "|"
LINE_SEPARATOR = "\n"
FAILED_EXPORT_FILE_NAME = "educacenso_export.txt"

RECORD_SCHOOL = "00"
RECORD_STUDENT = "10"
RECORD_TEACHER = "20"
RECORD_CLASSROOM = "30"
RECORD_INFRASTRUCTURE = "40"

CPF_WIDTH = 11
INEP_WIDTH = 8

_NON_DIGITS = re.compile(r"\D")
_LAYOUT_BREAKERS = re.compile(r"[|\r\n]")


# --- Field normalisers ---
def digits_only(value: Optional[str]) -> str:
    if not value:
        return ""
    return _NON_DIGITS.sub("", str(value))


def clean_text(value: Any) -> str:
    """Text with the field separator and line breaks turned into spaces."""
    if value is None:
        return ""
    return _LAYOUT_BREAKERS.sub(" ", str(value))


def truncate(value: Optional[str], max_length: int) -> str:
    if not value:
        return ""
    return clean_text(value)[:max_length]


def _fixed_width_digits(value: Optional[str], width: int) -> str:
    digits = digits_only(value)
    if not digits:
        return ""
    return digits.zfill(width)[:width]


def format_date_for_educacenso(value: Any) -> str:
    """DDMMYYYY, or an empty string for a missing or unreadable date."""
    parsed = parse_date(value)
    if parsed is None:
        return ""
    return parsed.strftime("%d%m%Y")


def format_cpf_for_educacenso(cpf: Optional[str]) -> str:
    """Digits only, left-padded with zeros and cut to exactly 11 characters."""
    return _fixed_width_digits(cpf, CPF_WIDTH)


def format_inep_code(code: Optional[str]) -> str:
    """Digits only, left-padded with zeros and cut to exactly 8 characters."""
    return _fixed_width_digits(code, INEP_WIDTH)


def flag(value: Any) -> str:
    return "1" if value else "0"


def join_fields(fields: Sequence[Any]) -> str:
    return FIELD_SEPARATOR.join(clean_text(field) for field in fields)


# --- Record generators ---
def generate_school_record(school: School) -> str:
    """Record 00, 11 fields."""
    return join_fields(
        [
            RECORD_SCHOOL,
            format_inep_code(school.inep_code),
            truncate(school.name, 200),
            truncate(school.director, 100),
            truncate(school.address, 200),
            truncate(school.city, 100),
            truncate(school.state, 2),
            digits_only(school.phone),
            truncate(school.email, 100),
            school.administrative_dependency or "",
            school.location_type or "",
        ]
    )


def generate_student_record(
    student: Student,
    enrollment: Enrollment,
    school: School,
    academic_year: AcademicYear,
    classroom: Classroom,
    reference_date: Optional[date] = None,
) -> str:
    """Record 10, 19 fields."""
    settings = get_settings()
    enrollment_date = format_date_for_educacenso(
        enrollment.enrollment_date
        or academic_year.start_date
        or (reference_date or today())
    )

    return join_fields(
        [
            RECORD_STUDENT,
            format_inep_code(school.inep_code),
            format_cpf_for_educacenso(student.cpf),
            truncate(student.name, 200),
            format_date_for_educacenso(student.birth_date),
            student.gender or "",
            student.race_color or "",
            student.nationality or settings.DEFAULT_NATIONALITY,
            student.birth_country or settings.DEFAULT_BIRTH_COUNTRY,
            enrollment_date,
            classroom.grade_level_name or enrollment.grade or "",
            classroom.shift or "",
            enrollment.status or settings.ACTIVE_ENROLLMENT_STATUS,
            truncate(student.guardian, 200),
            format_cpf_for_educacenso(student.guardian_cpf),
            student.sus_card or "",
            student.nis or "",
            flag(student.has_special_needs),
            flag(student.receives_school_meal),
        ]
    )


def generate_teacher_record(teacher: Teacher, school: School, subject: str) -> str:
    """Record 20, 12 fields."""
    return join_fields(
        [
            RECORD_TEACHER,
            format_inep_code(school.inep_code),
            format_cpf_for_educacenso(teacher.cpf),
            truncate(teacher.name, 200),
            truncate(teacher.email, 100),
            digits_only(teacher.phone),
            truncate(subject, 100),
            teacher.role or "",
            teacher.employment_bond or "",
            teacher.contract_type or "",
            format_date_for_educacenso(teacher.admission_date),
            teacher.academic_background or "",
        ]
    )


def generate_classroom_record(
    classroom: Classroom,
    school: School,
    academic_year: AcademicYear,
    stage: Optional[CurriculumStage],
) -> str:
    """Record 30, 10 fields."""
    capacity = classroom.max_capacity or get_settings().DEFAULT_CLASSROOM_CAPACITY
    return join_fields(
        [
            RECORD_CLASSROOM,
            format_inep_code(school.inep_code),
            truncate(classroom.name, 100),
            classroom.shift or "",
            (stage.census_code if stage else None) or "",
            classroom.grade_level_name or "",
            classroom.education_modality or "",
            classroom.regime_type or "",
            capacity,
            academic_year.name,
        ]
    )


def generate_infrastructure_record(school: School) -> str:
    """Record 40, 11 fields. A school without infrastructure data reports zeros."""
    infra = school.infrastructure or SchoolInfrastructure()
    return join_fields(
        [
            RECORD_INFRASTRUCTURE,
            format_inep_code(school.inep_code),
            infra.classrooms or 0,
            flag(infra.library),
            flag(infra.computer_lab),
            flag(infra.science_lab),
            flag(infra.sports_court),
            flag(infra.cafeteria),
            flag(infra.auditorium),
            flag(infra.medical_room),
            flag(infra.accessible),
        ]
    )


# --- Export ---
def _schools_in_scope(
    schools: Sequence[School], options: EducacensoExportOptions
) -> List[School]:
    if options.school_id:
        return [school for school in schools if school.id == options.school_id]
    return list(schools)


def _students_in_scope(
    students: Sequence[Student], options: EducacensoExportOptions
) -> List[Student]:
    if options.school_id:
        return [
            student
            for student in students
            if any(e.school_id == options.school_id for e in student.enrollments)
        ]
    return list(students)


def _teachers_in_scope(
    teachers: Sequence[Teacher], options: EducacensoExportOptions
) -> List[Teacher]:
    if options.school_id:
        return [teacher for teacher in teachers if teacher.school_id == options.school_id]
    return list(teachers)


def validate_export_data(
    schools: Sequence[School],
    students: Sequence[Student],
    teachers: Sequence[Teacher],
    options: EducacensoExportOptions,
):
    """
    Check the preconditions of an export.

    Returns ``(errors, warnings)``; any error aborts the export.
    """
    errors: List[str] = []
    warnings: List[str] = []

    if options.school_id:
        school = next((s for s in schools if s.id == options.school_id), None)
        if school is None:
            errors.append("Escola não encontrada")
        else:
            if not school.inep_code:
                errors.append("Escola não possui código INEP cadastrado")
            if not school.director:
                warnings.append("Escola não possui diretor cadastrado")
    else:
        for school in schools:
            if not school.inep_code:
                errors.append(f"Escola {school.name} não possui código INEP cadastrado")
            if not school.director:
                warnings.append(f"Escola {school.name} não possui diretor cadastrado")

    if options.include_students:
        for student in _students_in_scope(students, options):
            if not student.cpf:
                warnings.append(f"Aluno {student.name} não possui CPF cadastrado")
            if not student.birth_date:
                errors.append(f"Aluno {student.name} não possui data de nascimento")

    if options.include_teachers:
        for teacher in _teachers_in_scope(teachers, options):
            if not teacher.cpf:
                warnings.append(f"Professor {teacher.name} não possui CPF cadastrado")

    return errors, warnings


def select_academic_year(
    school: School, academic_year_id: Optional[str] = None
) -> Optional[AcademicYear]:
    """The requested year, else the active one, else the first."""
    years = school.academic_years
    if academic_year_id:
        return next((year for year in years if year.id == academic_year_id), None)
    active = next((year for year in years if year.status == "active"), None)
    return active or (years[0] if years else None)


def _teacher_subjects(teacher: Teacher) -> List[str]:
    subjects = teacher.enabled_subjects or [teacher.subject or ""]
    return [subject for subject in subjects if subject]


def export_educacenso(
    schools: Sequence[School],
    students: Sequence[Student],
    teachers: Sequence[Teacher],
    curriculum_stages: Sequence[CurriculumStage],
    options: Optional[EducacensoExportOptions] = None,
    reference_date: Optional[date] = None,
) -> EducacensoExportResult:
    """
    Build the Educacenso file for the schools in scope.

    ``reference_date`` stamps the file name and fills a student's enrollment
    date when neither the enrollment nor the academic year has one; it
    defaults to today's UTC date. The inputs are never modified.
    """
    options = options or EducacensoExportOptions()
    reference_date = reference_date or today()
    logger.info(
        f"Starting Educacenso export: school={options.school_id or 'all'}, "
        f"year={options.academic_year_id or 'default'}"
    )

    errors, warnings = validate_export_data(schools, students, teachers, options)
    if errors:
        logger.error(f"Educacenso export aborted with {len(errors)} validation error(s)")
        return EducacensoExportResult(
            success=False,
            file_name=FAILED_EXPORT_FILE_NAME,
            content="",
            errors=errors,
            warnings=warnings,
        )

    schools_to_export = _schools_in_scope(schools, options)
    if not schools_to_export:
        logger.error("Educacenso export aborted: no school in scope")
        return EducacensoExportResult(
            success=False,
            file_name=FAILED_EXPORT_FILE_NAME,
            content="",
            errors=["Nenhuma escola encontrada para exportação"],
        )

    lines: List[str] = []
    for school in schools_to_export:
        lines.append(generate_school_record(school))

        if options.include_infrastructure:
            lines.append(generate_infrastructure_record(school))

        academic_year = select_academic_year(school, options.academic_year_id)
        if academic_year is None:
            logger.warning(f"School '{school.id}' has no usable academic year, skipping its records")
            warnings.append(f"Escola {school.name} não possui ano letivo válido")
            continue

        if options.include_classrooms:
            for classroom in academic_year.classes:
                stage = find_curriculum_stage(classroom.curriculum_stage_id, curriculum_stages)
                lines.append(generate_classroom_record(classroom, school, academic_year, stage))

        if options.include_students:
            for student in students:
                for enrollment in student.enrollments:
                    if (
                        enrollment.school_id != school.id
                        or enrollment.academic_year_id != academic_year.id
                        or not is_active_enrollment(enrollment)
                    ):
                        continue
                    classroom = next(
                        (c for c in academic_year.classes if c.id == enrollment.classroom_id),
                        None,
                    )
                    if classroom is None:
                        logger.warning(
                            f"Enrollment '{enrollment.id}' points at unknown class "
                            f"'{enrollment.classroom_id}', student record skipped"
                        )
                        warnings.append(f"Aluno {student.name} matriculado em turma não encontrada")
                        continue
                    lines.append(
                        generate_student_record(
                            student, enrollment, school, academic_year, classroom, reference_date
                        )
                    )

        if options.include_teachers:
            for teacher in teachers:
                if teacher.school_id != school.id:
                    continue
                for subject in _teacher_subjects(teacher):
                    lines.append(generate_teacher_record(teacher, school, subject))

    file_name = (
        f"educacenso_{reference_date.strftime('%Y%m%d')}_{len(schools_to_export)}escolas.txt"
    )
    logger.info(
        f"Educacenso export finished: {len(lines)} record(s) for "
        f"{len(schools_to_export)} school(s), {len(warnings)} warning(s)"
    )

    return EducacensoExportResult(
        success=True,
        file_name=file_name,
        content=LINE_SEPARATOR.join(lines),
        errors=None,
        warnings=warnings or None,
    )
