# backend/educacenso/api/__init__.py
from .deps import reference_date_param
from .v1.api import api_router

__all__ = ["api_router", "reference_date_param"]
