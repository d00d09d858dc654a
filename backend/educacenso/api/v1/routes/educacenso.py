# backend/educacenso/api/v1/routes/educacenso.py
import logging
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends

from ....core.exceptions import CensusExportError
from ....schemas.export import EducacensoExportRequest, EducacensoExportResult
from ....services.export import download_educacenso_file, export_educacenso
from ...deps import reference_date_param

logger = logging.getLogger(__name__)
router = APIRouter()


def _run_export(
    request: EducacensoExportRequest, reference_date: Optional[date]
) -> EducacensoExportResult:
    return export_educacenso(
        schools=request.schools,
        students=request.students,
        teachers=request.teachers,
        curriculum_stages=request.curriculum_stages,
        options=request.options,
        reference_date=reference_date,
    )


@router.post("/export", response_model=EducacensoExportResult)
async def export_census(
    request: EducacensoExportRequest,
    reference_date: Optional[date] = Depends(reference_date_param),
):
    """
    Builds the Educacenso file for the given snapshot and returns it inline,
    together with the validation errors and warnings.
    """
    return _run_export(request, reference_date)


@router.post("/export/file")
async def download_census_file(
    request: EducacensoExportRequest,
    reference_date: Optional[date] = Depends(reference_date_param),
):
    """
    Builds the Educacenso file and returns it as a text attachment.
    A failed export answers 422 with its errors and warnings.
    """
    result = _run_export(request, reference_date)
    response = download_educacenso_file(result)
    if response is None:
        logger.warning(f"Educacenso file not generated: {len(result.errors or [])} error(s)")
        raise CensusExportError(
            errors=result.errors or [], warnings=result.warnings or []
        ).with_context(school_id=request.options.school_id)
    return response
