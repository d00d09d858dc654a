# backend/educacenso/api/v1/routes/inconsistencies.py
import logging
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query

from ....schemas.census import CensusSnapshot
from ....schemas.export import EntityType, InconsistencyReport, Severity
from ....services.export import (
    download_inconsistency_report,
    filter_inconsistencies,
    generate_inconsistency_report,
)
from ...deps import reference_date_param

logger = logging.getLogger(__name__)
router = APIRouter()


def _build_report(
    snapshot: CensusSnapshot, reference_date: Optional[date]
) -> InconsistencyReport:
    return generate_inconsistency_report(
        schools=snapshot.schools,
        students=snapshot.students,
        teachers=snapshot.teachers,
        curriculum_stages=snapshot.curriculum_stages,
        reference_date=reference_date,
    )


@router.post("/report", response_model=InconsistencyReport)
async def inconsistency_report(
    snapshot: CensusSnapshot,
    type: Optional[Severity] = Query(None, description="Only findings of this severity."),
    entity: Optional[EntityType] = Query(None, description="Only findings for this entity type."),
    reference_date: Optional[date] = Depends(reference_date_param),
):
    """
    Runs every validation pass over the snapshot. The filters narrow the list
    of findings; totals and summary always describe the whole report.
    """
    report = _build_report(snapshot, reference_date)
    if type is None and entity is None:
        return report

    filtered = filter_inconsistencies(report, type=type, entity=entity)
    logger.info(f"Returning {len(filtered)} of {len(report.inconsistencies)} finding(s)")
    return report.model_copy(update={"inconsistencies": filtered})


@router.post("/report/file")
async def download_inconsistency_report_file(
    snapshot: CensusSnapshot,
    format: str = Query(
        "csv",
        description="The desired output format. Can be 'csv' or 'pdf'.",
    ),
    reference_date: Optional[date] = Depends(reference_date_param),
):
    """
    Exports the inconsistency report to a downloadable file (CSV or PDF).
    """
    report = _build_report(snapshot, reference_date)
    return download_inconsistency_report(
        report, output_format=format, reference_date=reference_date
    )
