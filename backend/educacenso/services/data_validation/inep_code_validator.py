# educacenso/services/data_validation/inep_code_validator.py
"""Validation of INEP school codes and the census code tables."""

from dataclasses import dataclass
from typing import Dict, Optional

from .document_validator import clean_document

INEP_CODE_LENGTH = 8

CURRICULUM_STAGE_CODES: Dict[str, str] = {
    "01": "Educação Infantil - Creche",
    "02": "Educação Infantil - Pré-escola",
    "03": "Ensino Fundamental - Anos Iniciais",
    "04": "Ensino Fundamental - Anos Finais",
    "05": "Ensino Médio",
    "06": "Educação de Jovens e Adultos - EJA",
    "07": "Educação Especial",
    "08": "Educação Profissional",
    "09": "Educação Indígena",
    "10": "Educação Quilombola",
    "11": "Educação do Campo",
    "12": "Educação Ambiental",
    "13": "Educação Digital",
    "14": "Educação Bilíngue",
    "15": "Educação Integral",
}

MODALITY_CODES: Dict[str, str] = {
    "01": "Regular",
    "02": "Educação Especial - Exclusiva",
    "03": "Educação de Jovens e Adultos",
    "04": "Educação Profissional",
    "05": "Educação Indígena",
    "06": "Educação Quilombola",
    "07": "Educação do Campo",
    "08": "Educação Ambiental",
    "09": "Educação Digital",
    "10": "Educação Bilíngue",
}

REGIME_TYPE_CODES: Dict[str, str] = {
    "01": "Seriado",
    "02": "Não Seriado",
    "03": "Semi-presencial",
    "04": "EAD",
}


@dataclass
class CodeValidationResult:
    valid: bool
    error: Optional[str] = None
    code: Optional[str] = None
    description: Optional[str] = None


def _normalize_code(code: str) -> str:
    return code.strip().zfill(2)


def _validate_table_code(
    code: Optional[str], table: Dict[str, str], label: str
) -> CodeValidationResult:
    if not code or not isinstance(code, str):
        return CodeValidationResult(valid=False, error=f"Código de {label} não informado")

    normalized = _normalize_code(code)
    if normalized not in table:
        return CodeValidationResult(
            valid=False,
            error=f"Código de {label} inválido. Códigos válidos: {', '.join(table)}",
        )

    return CodeValidationResult(
        valid=True, code=normalized, description=table[normalized]
    )


def validate_school_inep_code(code: Optional[str]) -> CodeValidationResult:
    """A school INEP code has exactly 8 digits once punctuation is removed."""
    if not code or not isinstance(code, str):
        return CodeValidationResult(valid=False, error="Código INEP não informado")

    cleaned = clean_document(code)
    if len(cleaned) != INEP_CODE_LENGTH:
        return CodeValidationResult(
            valid=False, error="Código INEP da escola deve conter 8 dígitos"
        )

    return CodeValidationResult(valid=True, code=cleaned)


def validate_curriculum_stage_code(code: Optional[str]) -> CodeValidationResult:
    return _validate_table_code(code, CURRICULUM_STAGE_CODES, "etapa de ensino")


def validate_modality_code(code: Optional[str]) -> CodeValidationResult:
    return _validate_table_code(code, MODALITY_CODES, "modalidade")


def validate_regime_type_code(code: Optional[str]) -> CodeValidationResult:
    return _validate_table_code(code, REGIME_TYPE_CODES, "tipo de regime")


def get_curriculum_stage_name(code: str) -> Optional[str]:
    return CURRICULUM_STAGE_CODES.get(_normalize_code(code))


def get_modality_name(code: str) -> Optional[str]:
    return MODALITY_CODES.get(_normalize_code(code))


def get_regime_type_name(code: str) -> Optional[str]:
    return REGIME_TYPE_CODES.get(_normalize_code(code))
