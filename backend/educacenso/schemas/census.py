# educacenso/schemas/census.py
"""Pydantic v2 schemas for the school-network snapshot read by the exporters.

The upstream application sends camelCase JSON (``inepCode``, ``etapaEnsinoId``,
``serieAnoName``); every model accepts that shape as well as the snake_case
field names. Unknown keys are ignored.
"""

from __future__ import annotations

from datetime import date
from typing import Annotated, Any, List, Optional, Union

from pydantic import AliasChoices, BaseModel, BeforeValidator, ConfigDict, Field
from pydantic.alias_generators import to_camel

# Dates arrive as ISO strings, DD/MM/YYYY strings or date objects
DateLike = Union[date, str]


def _false_when_null(value: Any) -> Any:
    return False if value is None else value


def _zero_when_null(value: Any) -> Any:
    return 0 if value is None else value


# Database columns behind these are nullable; null reads as "no"
Flag = Annotated[bool, BeforeValidator(_false_when_null)]
Count = Annotated[int, BeforeValidator(_zero_when_null)]

CENSUS_MODEL_CONFIG = ConfigDict(
    alias_generator=to_camel,
    populate_by_name=True,
    extra="ignore",
    from_attributes=True,
)


class CensusModel(BaseModel):
    model_config = CENSUS_MODEL_CONFIG


# --- Shared ---
class Address(CensusModel):
    street: Optional[str] = None
    number: Optional[str] = None
    neighborhood: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None


class SchoolInfrastructure(CensusModel):
    classrooms: Count = 0
    library: Flag = False
    computer_lab: Flag = False
    science_lab: Flag = False
    sports_court: Flag = False
    cafeteria: Flag = False
    auditorium: Flag = False
    medical_room: Flag = False
    accessible: Flag = False


# --- Curriculum ---
class GradeLevel(CensusModel):
    """A série/ano inside a curriculum stage, e.g. ``5º Ano``."""

    id: str
    name: str


class CurriculumStage(CensusModel):
    """Etapa de ensino: maps an internal id to the INEP stage code."""

    id: str
    name: Optional[str] = None
    census_code: Optional[str] = Field(default=None, alias="codigoCenso")
    grade_levels: List[GradeLevel] = Field(default_factory=list, alias="seriesAnos")


# --- School structure ---
class Classroom(CensusModel):
    """Turma."""

    id: str
    name: str = ""
    school_id: Optional[str] = None
    year_id: Optional[str] = None
    shift: Optional[str] = None
    curriculum_stage_id: Optional[str] = Field(default=None, alias="etapaEnsinoId")
    grade_level_id: Optional[str] = Field(default=None, alias="serieAnoId")
    grade_level_name: Optional[str] = Field(default=None, alias="serieAnoName")
    education_modality: Optional[str] = None
    regime_type: Optional[str] = Field(default=None, alias="tipoRegime")
    max_capacity: Optional[int] = None
    is_multi_grade: Flag = False


class AcademicYear(CensusModel):
    """Ano letivo with its classes."""

    id: str
    name: str = ""
    start_date: Optional[DateLike] = None
    end_date: Optional[DateLike] = None
    status: Optional[str] = None
    classes: List[Classroom] = Field(default_factory=list, alias="turmas")


class School(CensusModel):
    id: str
    code: Optional[str] = None
    inep_code: Optional[str] = None
    name: str = ""
    director: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    administrative_dependency: Optional[str] = None
    location_type: Optional[str] = None
    infrastructure: Optional[SchoolInfrastructure] = None
    academic_years: List[AcademicYear] = Field(default_factory=list)


# --- People ---
class Enrollment(CensusModel):
    """Matrícula: links a student to a school, academic year and class."""

    id: str
    student_id: Optional[str] = None
    school_id: Optional[str] = None
    academic_year_id: Optional[str] = None
    classroom_id: Optional[str] = None
    grade: Optional[str] = None
    status: Optional[str] = None
    enrollment_date: Optional[DateLike] = None
    type: Optional[str] = None


class Student(CensusModel):
    id: str
    registration: Optional[str] = None
    name: str = ""
    cpf: Optional[str] = None
    birth_date: Optional[DateLike] = None
    gender: Optional[str] = None
    race_color: Optional[str] = None
    nationality: Optional[str] = None
    birth_country: Optional[str] = None
    guardian: Optional[str] = None
    guardian_cpf: Optional[str] = None
    sus_card: Optional[str] = None
    nis: Optional[str] = None
    has_special_needs: Flag = False
    receives_school_meal: Flag = False
    address: Optional[Address] = None
    enrollments: List[Enrollment] = Field(default_factory=list)


class Teacher(CensusModel):
    id: str
    school_id: Optional[str] = None
    name: str = ""
    cpf: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    subject: Optional[str] = None
    enabled_subjects: Optional[List[str]] = None
    role: Optional[str] = None
    employment_bond: Optional[str] = None
    contract_type: Optional[str] = None
    admission_date: Optional[DateLike] = None
    academic_background: Optional[str] = None


# --- Snapshot ---
class CensusSnapshot(CensusModel):
    """Everything the exporters read, as fetched from the school database."""

    schools: List[School] = Field(default_factory=list)
    students: List[Student] = Field(default_factory=list)
    teachers: List[Teacher] = Field(default_factory=list)
    curriculum_stages: List[CurriculumStage] = Field(
        default_factory=list,
        validation_alias=AliasChoices(
            "curriculumStages", "curriculum_stages", "etapasEnsino"
        ),
    )
