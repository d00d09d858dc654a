# educacenso/services/data_validation/age_grade_validator.py
"""
Age versus grade (idade-série) validation.

Ages follow the census cut-off: a reference date before 31 March counts the
previous school year, and the age is the one the student reaches by 31
December of that year. The age bands per grade and the cut-off day are
regulatory values; the cut-off and the high-distortion threshold come from
settings so they can be corrected without a release.
"""

import re
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Optional, Union

from dateutil.relativedelta import relativedelta

from ...config import get_settings
from .date_validator import parse_date, today

DISTORTION_NONE = "none"
DISTORTION_LOW = "low"
DISTORTION_MEDIUM = "medium"
DISTORTION_HIGH = "high"


@dataclass(frozen=True)
class AgeRule:
    min: int
    max: int
    ideal: int


# Ensino Fundamental, 1º to 9º ano
AGE_RULES_BY_GRADE: Dict[int, AgeRule] = {
    grade: AgeRule(min=grade + 5, max=grade + 6, ideal=grade + 5)
    for grade in range(1, 10)
}


@dataclass
class AgeGradeValidationResult:
    valid: bool
    error: Optional[str] = None
    warning: Optional[str] = None
    age: Optional[int] = None
    expected_min: Optional[int] = None
    expected_max: Optional[int] = None
    distortion: Optional[str] = None


def extract_grade_number(label: Optional[str]) -> Optional[int]:
    """Numeric grade from a label such as ``5º Ano``; None when it has no digits."""
    if not label:
        return None
    digits = re.sub(r"\D", "", str(label))
    if not digits:
        return None
    return int(digits) or None


def calculate_age(birth_date: Any, reference_date: Optional[date] = None) -> int:
    """
    Census age of a student on ``reference_date`` (default: today).

    Raises ValueError when the birth date cannot be read.
    """
    birth = parse_date(birth_date)
    if birth is None:
        raise ValueError("Data de nascimento inválida")

    settings = get_settings()
    reference = reference_date or today()
    cutoff = date(reference.year, settings.AGE_CUTOFF_MONTH, settings.AGE_CUTOFF_DAY)

    effective_year = reference.year - 1 if reference < cutoff else reference.year
    effective_date = date(effective_year, 12, 31)

    return relativedelta(effective_date, birth).years


def validate_age_grade(
    birth_date: Any,
    grade: Union[int, str],
    allow_exceptions: bool = False,
    reference_date: Optional[date] = None,
    rules: Optional[Dict[int, AgeRule]] = None,
    high_distortion_threshold: Optional[int] = None,
) -> AgeGradeValidationResult:
    """
    Compare a student's census age with the band of ``grade``.

    Below the band the result is invalid unless ``allow_exceptions`` is set, in
    which case it carries a warning asking for a justification. Above the band
    the result stays valid with a distortion warning.
    """
    rules = rules if rules is not None else AGE_RULES_BY_GRADE
    if high_distortion_threshold is None:
        high_distortion_threshold = get_settings().AGE_GRADE_HIGH_DISTORTION_THRESHOLD

    try:
        age = calculate_age(birth_date, reference_date)
    except ValueError as e:
        return AgeGradeValidationResult(valid=False, error=str(e))

    grade_number = extract_grade_number(grade) if isinstance(grade, str) else grade
    rule = rules.get(grade_number) if grade_number is not None else None
    if rule is None:
        return AgeGradeValidationResult(
            valid=False,
            error=f"Série/ano {grade_number if grade_number is not None else grade} "
            f"não possui regras de idade definidas",
            age=age,
        )

    result = AgeGradeValidationResult(
        valid=True, age=age, expected_min=rule.min, expected_max=rule.max
    )

    if age == rule.ideal:
        result.distortion = DISTORTION_NONE
        return result

    if rule.min <= age <= rule.max:
        result.distortion = DISTORTION_LOW
        if age > rule.ideal:
            result.warning = (
                f"Aluno com {age} anos na {grade_number}ª série "
                f"(idade ideal: {rule.ideal} anos)"
            )
        return result

    if age < rule.min:
        result.distortion = (
            DISTORTION_HIGH
            if age < rule.min - high_distortion_threshold
            else DISTORTION_MEDIUM
        )
        result.valid = allow_exceptions
        if allow_exceptions:
            result.warning = (
                f"Aluno com {age} anos na {grade_number}ª série (idade mínima "
                f"recomendada: {rule.min} anos). Requer justificativa."
            )
        else:
            result.error = (
                f"Idade insuficiente: {age} anos (mínimo: {rule.min} anos para "
                f"{grade_number}ª série)"
            )
        return result

    difference = age - rule.max
    result.distortion = (
        DISTORTION_HIGH if difference > high_distortion_threshold else DISTORTION_MEDIUM
    )
    result.warning = (
        f"Distorção idade-série detectada: aluno com {age} anos na {grade_number}ª "
        f"série (idade máxima recomendada: {rule.max} anos). Diferença: {difference} anos."
    )
    return result


def calculate_age_grade_distortion(
    birth_date: Any,
    grade: Union[int, str],
    reference_date: Optional[date] = None,
) -> str:
    result = validate_age_grade(birth_date, grade, True, reference_date)
    return result.distortion or DISTORTION_NONE


def has_age_grade_distortion(
    birth_date: Any,
    grade: Union[int, str],
    reference_date: Optional[date] = None,
) -> bool:
    return calculate_age_grade_distortion(birth_date, grade, reference_date) != DISTORTION_NONE
