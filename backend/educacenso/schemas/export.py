# educacenso/schemas/export.py
"""Pydantic v2 schemas for export options, export results and findings."""

from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import Field

from .census import CensusModel, CensusSnapshot


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class EntityType(str, Enum):
    SCHOOL = "school"
    STUDENT = "student"
    TEACHER = "teacher"
    CLASSROOM = "classroom"
    ENROLLMENT = "enrollment"


# --- Educacenso export ---
class EducacensoExportOptions(CensusModel):
    school_id: Optional[str] = None
    academic_year_id: Optional[str] = None
    include_students: bool = False
    include_teachers: bool = False
    include_classrooms: bool = False
    include_infrastructure: bool = False


class EducacensoExportResult(CensusModel):
    success: bool
    file_name: str
    content: str = ""
    errors: Optional[List[str]] = None
    warnings: Optional[List[str]] = None


class EducacensoExportRequest(CensusSnapshot):
    options: EducacensoExportOptions = Field(default_factory=EducacensoExportOptions)


# --- Inconsistency report ---
class Inconsistency(CensusModel):
    type: Severity
    entity: EntityType
    entity_id: str
    entity_name: str
    field: Optional[str] = None
    message: str
    suggestion: Optional[str] = None


class SeverityCounts(CensusModel):
    errors: int = 0
    warnings: int = 0
    info: int = 0


class InconsistencySummary(CensusModel):
    schools: SeverityCounts = Field(default_factory=SeverityCounts)
    students: SeverityCounts = Field(default_factory=SeverityCounts)
    teachers: SeverityCounts = Field(default_factory=SeverityCounts)
    classrooms: SeverityCounts = Field(default_factory=SeverityCounts)
    enrollments: SeverityCounts = Field(default_factory=SeverityCounts)


class InconsistencyReport(CensusModel):
    total_errors: int = 0
    total_warnings: int = 0
    total_info: int = 0
    inconsistencies: List[Inconsistency] = Field(default_factory=list)
    summary: InconsistencySummary = Field(default_factory=InconsistencySummary)
