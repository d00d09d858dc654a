# educacenso/services/data_validation/date_validator.py
"""
Date parsing and date rules used by the census validators.

Dates reach this module as ``date`` objects, ISO strings (``2024-02-01`` or a
full timestamp) or Brazilian ``DD/MM/YYYY`` strings.
"""

from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Any, Optional

from dateutil import parser as date_parser

from ...config import get_settings

DATE_FORMATS = ["%Y-%m-%d", "%d/%m/%Y"]


@dataclass
class DateValidationResult:
    valid: bool
    error: Optional[str] = None
    formatted: Optional[str] = None


def parse_date(value: Any) -> Optional[date]:
    """Return ``value`` as a date, or None when it is empty or unparseable."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None

    text = value.strip()
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue

    try:
        return date_parser.isoparse(text).date()
    except (ValueError, OverflowError):
        return None


def today() -> date:
    """Current UTC date; exporters stamp file names with it."""
    return datetime.now(timezone.utc).date()


def format_br(value: date) -> str:
    return value.strftime("%d/%m/%Y")


def validate_date_format(value: Any) -> DateValidationResult:
    """Checks that a value is a readable date and returns it as DD/MM/YYYY."""
    if value is None or value == "":
        return DateValidationResult(valid=False, error="Data não informada")

    parsed = parse_date(value)
    if parsed is None:
        return DateValidationResult(
            valid=False, error="Formato de data inválido. Use DD/MM/YYYY"
        )
    return DateValidationResult(valid=True, formatted=format_br(parsed))


def validate_date_logic(birth_date: Any, enrollment_date: Any) -> DateValidationResult:
    """Birth date must come before the enrollment date."""
    birth = parse_date(birth_date)
    enrollment = parse_date(enrollment_date)
    if birth is None or enrollment is None:
        return DateValidationResult(valid=False, error="Datas inválidas")

    if birth >= enrollment:
        return DateValidationResult(
            valid=False,
            error="Data de nascimento deve ser anterior à data de matrícula",
        )
    return DateValidationResult(valid=True)


def validate_academic_period(
    start_date: Any,
    end_date: Any,
    max_days: Optional[int] = None,
) -> DateValidationResult:
    """Start must precede end and the period may not exceed ``max_days``."""
    start = parse_date(start_date)
    end = parse_date(end_date)
    if start is None or end is None:
        return DateValidationResult(valid=False, error="Datas inválidas")

    if start >= end:
        return DateValidationResult(
            valid=False, error="Data de início deve ser anterior à data de fim"
        )

    if max_days is None:
        max_days = get_settings().MAX_ACADEMIC_PERIOD_DAYS
    if (end - start).days > max_days:
        return DateValidationResult(
            valid=False,
            error=f"Período letivo não pode ser superior a {max_days} dias",
        )
    return DateValidationResult(valid=True)


def validate_date_in_period(
    value: Any, period_start: Any, period_end: Any
) -> DateValidationResult:
    checked = parse_date(value)
    start = parse_date(period_start)
    end = parse_date(period_end)
    if checked is None or start is None or end is None:
        return DateValidationResult(valid=False, error="Datas inválidas")

    if checked < start:
        return DateValidationResult(
            valid=False,
            error=(
                f"Data ({format_br(checked)}) é anterior ao início do período "
                f"({format_br(start)})"
            ),
        )
    if checked > end:
        return DateValidationResult(
            valid=False,
            error=(
                f"Data ({format_br(checked)}) é posterior ao fim do período "
                f"({format_br(end)})"
            ),
        )
    return DateValidationResult(valid=True)


def validate_not_future_date(
    value: Any, reference_date: Optional[date] = None
) -> DateValidationResult:
    checked = parse_date(value)
    if checked is None:
        return DateValidationResult(valid=False, error="Data inválida")

    if checked > (reference_date or today()):
        return DateValidationResult(valid=False, error="Data não pode ser futura")
    return DateValidationResult(valid=True)
