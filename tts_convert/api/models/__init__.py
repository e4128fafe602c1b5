"""API request and response models."""

from tts_convert.api.models.requests import ConvertRequest
from tts_convert.api.models.responses import (
    ConversionListResponse,
    ConvertResponse,
    DeleteConversionResponse,
    ErrorResponse,
    HealthResponse,
    ReadinessResponse,
)

__all__ = [
    "ConversionListResponse",
    "ConvertRequest",
    "ConvertResponse",
    "DeleteConversionResponse",
    "ErrorResponse",
    "HealthResponse",
    "ReadinessResponse",
]
