# backend/educacenso/api/deps.py
from datetime import date
from typing import Optional

from fastapi import Query


def reference_date_param(
    reference_date: Optional[date] = Query(
        None,
        alias="referenceDate",
        description="Date used for file names and age calculation (default: today, UTC).",
    ),
) -> Optional[date]:
    """Optional ``referenceDate`` query parameter shared by the export routes."""
    return reference_date
