# backend/educacenso/schemas/__init__.py
"""Expose schema modules and primary Pydantic models for convenient imports."""

from . import census, export, system

from .census import (
    AcademicYear,
    Address,
    CensusSnapshot,
    Classroom,
    CurriculumStage,
    Enrollment,
    GradeLevel,
    School,
    SchoolInfrastructure,
    Student,
    Teacher,
)
from .export import (
    EducacensoExportOptions,
    EducacensoExportRequest,
    EducacensoExportResult,
    EntityType,
    Inconsistency,
    InconsistencyReport,
    InconsistencySummary,
    Severity,
    SeverityCounts,
)
from .system import HealthResponse

__all__ = [
    "census",
    "export",
    "system",
    "AcademicYear",
    "Address",
    "CensusSnapshot",
    "Classroom",
    "CurriculumStage",
    "Enrollment",
    "GradeLevel",
    "School",
    "SchoolInfrastructure",
    "Student",
    "Teacher",
    "EducacensoExportOptions",
    "EducacensoExportRequest",
    "EducacensoExportResult",
    "EntityType",
    "Inconsistency",
    "InconsistencyReport",
    "InconsistencySummary",
    "Severity",
    "SeverityCounts",
    "HealthResponse",
]
