"""
Schemas for the ESG validation endpoint.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ESGValidationRequest(BaseModel):
    payload: Any = Field(default=None, description="Raw source payload to normalize and validate")
    source: str = Field(default="generic", description="Source tag or platform alias")
    event_type: str | None = None


class ValidationIssueResponse(BaseModel):
    field: str
    message: str
    severity: str


class ValidationWarningResponse(BaseModel):
    field: str
    message: str
    recommendation: str


class ValidationResultResponse(BaseModel):
    is_valid: bool
    errors: list[ValidationIssueResponse] = Field(default_factory=list)
    warnings: list[ValidationWarningResponse] = Field(default_factory=list)
    score: int = Field(ge=0, le=100)


class ESGValidationResponse(BaseModel):
    source: str
    event_type: str | None = None
    normalized_record: dict[str, Any]
    validation: ValidationResultResponse
