# educacenso/services/data_validation/document_validator.py
"""
CPF and CNPJ validation.

Both documents end in two mod-11 check digits. A document whose digits are all
equal passes the checksum but is never issued, so it is rejected explicitly.
"""

import re
from dataclasses import dataclass
from typing import List, Optional

NON_DIGITS = re.compile(r"\D")

CPF_LENGTH = 11
CNPJ_LENGTH = 14

CNPJ_FIRST_WEIGHTS = [5, 4, 3, 2, 9, 8, 7, 6, 5, 4, 3, 2]
CNPJ_SECOND_WEIGHTS = [6, 5, 4, 3, 2, 9, 8, 7, 6, 5, 4, 3, 2]


@dataclass
class DocumentValidationResult:
    valid: bool
    error: Optional[str] = None
    formatted: Optional[str] = None


def clean_document(document: Optional[str]) -> str:
    """Strip everything but digits."""
    if not document:
        return ""
    return NON_DIGITS.sub("", str(document))


def _all_same_digit(cleaned: str) -> bool:
    return len(set(cleaned)) == 1


def _mod11_digit(total: int) -> int:
    remainder = total % 11
    return 0 if remainder < 2 else 11 - remainder


def _cpf_check_digit(digits: List[int], position: int) -> int:
    total = sum(digits[i] * (position + 1 - i) for i in range(position))
    return _mod11_digit(total)


def _cnpj_check_digit(digits: List[int], weights: List[int]) -> int:
    total = sum(digit * weight for digit, weight in zip(digits, weights))
    return _mod11_digit(total)


def format_cpf(cpf: str) -> str:
    """Format as XXX.XXX.XXX-XX; values without 11 digits are returned as is."""
    cleaned = clean_document(cpf)
    if len(cleaned) != CPF_LENGTH:
        return cpf
    return f"{cleaned[0:3]}.{cleaned[3:6]}.{cleaned[6:9]}-{cleaned[9:11]}"


def format_cnpj(cnpj: str) -> str:
    cleaned = clean_document(cnpj)
    if len(cleaned) != CNPJ_LENGTH:
        return cnpj
    return (
        f"{cleaned[0:2]}.{cleaned[2:5]}.{cleaned[5:8]}/"
        f"{cleaned[8:12]}-{cleaned[12:14]}"
    )


def validate_cpf(cpf: Optional[str]) -> DocumentValidationResult:
    if not cpf or not isinstance(cpf, str):
        return DocumentValidationResult(valid=False, error="CPF inválido")

    cleaned = clean_document(cpf)
    if len(cleaned) != CPF_LENGTH:
        return DocumentValidationResult(valid=False, error="CPF deve conter 11 dígitos")

    if _all_same_digit(cleaned):
        return DocumentValidationResult(
            valid=False, error="CPF inválido (todos os dígitos são iguais)"
        )

    digits = [int(char) for char in cleaned]
    for position in (9, 10):
        if _cpf_check_digit(digits, position) != digits[position]:
            return DocumentValidationResult(
                valid=False, error="CPF inválido (dígito verificador incorreto)"
            )

    return DocumentValidationResult(valid=True, formatted=format_cpf(cleaned))


def validate_cnpj(cnpj: Optional[str]) -> DocumentValidationResult:
    if not cnpj or not isinstance(cnpj, str):
        return DocumentValidationResult(valid=False, error="CNPJ inválido")

    cleaned = clean_document(cnpj)
    if len(cleaned) != CNPJ_LENGTH:
        return DocumentValidationResult(valid=False, error="CNPJ deve conter 14 dígitos")

    if _all_same_digit(cleaned):
        return DocumentValidationResult(
            valid=False, error="CNPJ inválido (todos os dígitos são iguais)"
        )

    digits = [int(char) for char in cleaned]
    for position, weights in ((12, CNPJ_FIRST_WEIGHTS), (13, CNPJ_SECOND_WEIGHTS)):
        if _cnpj_check_digit(digits, weights) != digits[position]:
            return DocumentValidationResult(
                valid=False, error="CNPJ inválido (dígito verificador incorreto)"
            )

    return DocumentValidationResult(valid=True, formatted=format_cnpj(cleaned))


def validate_cpf_or_cnpj(document: Optional[str]) -> DocumentValidationResult:
    """Dispatch on the number of digits."""
    if not document:
        return DocumentValidationResult(valid=False, error="Documento não informado")

    cleaned = clean_document(document)
    if len(cleaned) == CPF_LENGTH:
        return validate_cpf(document)
    if len(cleaned) == CNPJ_LENGTH:
        return validate_cnpj(document)

    return DocumentValidationResult(
        valid=False,
        error="Documento deve ter 11 dígitos (CPF) ou 14 dígitos (CNPJ)",
    )
