# backend/educacenso/services/data_validation/__init__.py
"""
Census validation rules.
Pure functions over the snapshot models; each returns a small result object
and none of them raises for malformed data.
"""

from .age_grade_validator import (
    AGE_RULES_BY_GRADE,
    AgeGradeValidationResult,
    AgeRule,
    calculate_age,
    calculate_age_grade_distortion,
    extract_grade_number,
    has_age_grade_distortion,
    validate_age_grade,
)
from .date_validator import (
    DateValidationResult,
    parse_date,
    validate_academic_period,
    validate_date_format,
    validate_date_in_period,
    validate_date_logic,
    validate_not_future_date,
)
from .document_validator import (
    DocumentValidationResult,
    clean_document,
    format_cnpj,
    format_cpf,
    validate_cnpj,
    validate_cpf,
    validate_cpf_or_cnpj,
)
from .enrollment_validator import (
    EnrollmentValidationResult,
    is_active_enrollment,
    validate_classroom_capacity,
    validate_duplicate_enrollment,
    validate_enrollment_complete,
    validate_enrollment_period,
    validate_enrollment_relationships,
    validate_simultaneous_enrollments,
)
from .inep_code_validator import (
    CURRICULUM_STAGE_CODES,
    MODALITY_CODES,
    REGIME_TYPE_CODES,
    CodeValidationResult,
    get_curriculum_stage_name,
    get_modality_name,
    get_regime_type_name,
    validate_curriculum_stage_code,
    validate_modality_code,
    validate_regime_type_code,
    validate_school_inep_code,
)
from .relationship_validator import (
    RelationshipValidationResult,
    find_curriculum_stage,
    validate_classroom_belongs_to_academic_year,
    validate_classroom_belongs_to_school,
    validate_classroom_relationships,
    validate_grade_level_belongs_to_stage,
    validate_teacher_enabled_for_subject,
)
from .required_fields_validator import (
    RequiredField,
    RequiredFieldsResult,
    validate_classroom_required_fields,
    validate_curriculum_stage_required_fields,
    validate_required_fields,
    validate_school_required_fields,
    validate_student_required_fields,
    validate_teacher_required_fields,
)

__all__ = [
    # Documents and codes
    "DocumentValidationResult",
    "clean_document",
    "format_cpf",
    "format_cnpj",
    "validate_cpf",
    "validate_cnpj",
    "validate_cpf_or_cnpj",
    "CodeValidationResult",
    "CURRICULUM_STAGE_CODES",
    "MODALITY_CODES",
    "REGIME_TYPE_CODES",
    "get_curriculum_stage_name",
    "get_modality_name",
    "get_regime_type_name",
    "validate_school_inep_code",
    "validate_curriculum_stage_code",
    "validate_modality_code",
    "validate_regime_type_code",
    # Dates and ages
    "DateValidationResult",
    "parse_date",
    "validate_date_format",
    "validate_date_logic",
    "validate_academic_period",
    "validate_date_in_period",
    "validate_not_future_date",
    "AGE_RULES_BY_GRADE",
    "AgeRule",
    "AgeGradeValidationResult",
    "calculate_age",
    "calculate_age_grade_distortion",
    "extract_grade_number",
    "has_age_grade_distortion",
    "validate_age_grade",
    # Completeness and relationships
    "RequiredField",
    "RequiredFieldsResult",
    "validate_required_fields",
    "validate_student_required_fields",
    "validate_teacher_required_fields",
    "validate_school_required_fields",
    "validate_classroom_required_fields",
    "validate_curriculum_stage_required_fields",
    "RelationshipValidationResult",
    "find_curriculum_stage",
    "validate_classroom_belongs_to_school",
    "validate_classroom_belongs_to_academic_year",
    "validate_grade_level_belongs_to_stage",
    "validate_teacher_enabled_for_subject",
    "validate_classroom_relationships",
    # Enrollments
    "EnrollmentValidationResult",
    "is_active_enrollment",
    "validate_duplicate_enrollment",
    "validate_simultaneous_enrollments",
    "validate_enrollment_relationships",
    "validate_classroom_capacity",
    "validate_enrollment_period",
    "validate_enrollment_complete",
]
