# backend/educacenso/schemas/system.py
from typing import List

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    status: str
    service: str
    version: str
    config_issues: List[str] = Field(default_factory=list)
