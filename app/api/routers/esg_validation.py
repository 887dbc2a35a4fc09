"""
app/api/routers/esg_validation.py

Synchronous ESG normalization and validation endpoint.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from app.schemas.esg_validation import (
    ESGValidationRequest,
    ESGValidationResponse,
    ValidationIssueResponse,
    ValidationResultResponse,
    ValidationWarningResponse,
)
from app.services.esg_validation_service import ESGValidationEngine, get_esg_validation_engine

router = APIRouter(tags=["esg-validation"])


@router.post("/esg/validate", response_model=ESGValidationResponse)
def validate_esg_payload(
    request: ESGValidationRequest,
    engine: ESGValidationEngine = Depends(get_esg_validation_engine),
) -> ESGValidationResponse:
    """
    Normalize a raw payload for its source and return the validation result.

    Nothing is stored; invalid data is reported in ``validation``, not as an
    HTTP error.
    """

    evaluation = engine.evaluate(request.payload, request.source)
    validation = evaluation.validation
    return ESGValidationResponse(
        source=request.source,
        event_type=request.event_type,
        normalized_record=evaluation.normalized_record.to_dict(),
        validation=ValidationResultResponse(
            is_valid=validation.is_valid,
            errors=[
                ValidationIssueResponse(field=error.field, message=error.message, severity=error.severity)
                for error in validation.errors
            ],
            warnings=[
                ValidationWarningResponse(
                    field=warning.field,
                    message=warning.message,
                    recommendation=warning.recommendation,
                )
                for warning in validation.warnings
            ],
            score=validation.score,
        ),
    )
