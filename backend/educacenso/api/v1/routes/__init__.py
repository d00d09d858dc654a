# backend/educacenso/api/v1/routes/__init__.py
from fastapi import APIRouter

from .educacenso import router as educacenso_router
from .inconsistencies import router as inconsistencies_router

# Create a main router that includes all sub-routers
router = APIRouter()

router.include_router(educacenso_router, prefix="/educacenso", tags=["Educacenso"])
router.include_router(
    inconsistencies_router, prefix="/inconsistencies", tags=["Inconsistencies"]
)
