"""API response models.

Bodies use camelCase keys (conversionId, audioUrl, ...) as clients of the
conversion API expect.
"""

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, Field

from tts_convert.core.models import CamelModel, ConversionRecord, InputType


class ErrorResponse(BaseModel):
    """Standard error response."""

    error: str = Field(..., description="Short error summary")
    message: str = Field(..., description="Human-readable error message")
    code: str = Field(..., description="Error code")
    details: dict[str, Any] = Field(default_factory=dict)
    request_id: str | None = Field(default=None, description="Request ID for tracing")


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(default="OK")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    service: str = Field(..., description="Service name")


class ReadinessResponse(BaseModel):
    """Readiness check response."""

    ready: bool = Field(..., description="Whether the service is ready")
    checks: dict[str, bool] = Field(default_factory=dict)


class ConvertResponse(CamelModel):
    """Successful conversion response."""

    success: bool = True
    conversion_id: str
    audio_url: str
    text_length: int
    input_type: InputType
    message: str = "Text successfully converted to audio"


class ConversionListResponse(CamelModel):
    """All conversions of a user."""

    success: bool = True
    count: int
    conversions: list[ConversionRecord] = Field(default_factory=list)


class DeleteConversionResponse(CamelModel):
    """Successful delete response."""

    success: bool = True
    message: str = "Conversion and associated files deleted successfully"
    deleted_conversion_id: str
