"""Response models for the REST API."""

from __future__ import annotations

from pydantic import BaseModel


class AppMetadata(BaseModel):
    name: str
    description: str
    version: str


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str
    records: int
