"""
Pydantic response schemas for the REST API.

Request bodies are validated by the shared payload schemas in
`shared.schemas`, the same ones the callable functions use.
"""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel


class DatabaseHealth(BaseModel):
    configured: bool
    status: Literal["connected", "error", "unknown"]
    error: Optional[str] = None


class HealthResponse(BaseModel):
    status: str
    timestamp: str
    environment: str
    database: DatabaseHealth


class SuccessResponse(BaseModel):
    success: bool


class ContactSubmittedResponse(BaseModel):
    success: bool
    id: str


class AdminCreatedResponse(BaseModel):
    success: bool
    uid: str
