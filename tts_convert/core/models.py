"""Domain models for conversions.

Records serialize with camelCase field names, matching the stored document layout
(`users/{userId}/conversions/{id}`) and the JSON returned by the HTTP surface.
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

PDF_MEDIA_TYPE = "application/pdf"
TEXT_MEDIA_TYPE = "text/plain"
AUDIO_MEDIA_TYPE = "audio/mpeg"


class InputType(str, Enum):
    """Provenance of the converted text."""

    PDF = "pdf"
    TXT = "txt"
    TEXT = "text"

    @classmethod
    def from_media_type(cls, media_type: str) -> "InputType":
        base_type = media_type.split(";", 1)[0].strip().lower()
        return cls.PDF if base_type == PDF_MEDIA_TYPE else cls.TXT


class ConversionStatus(str, Enum):
    """Status of a persisted conversion."""

    COMPLETED = "completed"


class CamelModel(BaseModel):
    """Base model serializing to camelCase."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
    )


class ConversionRecord(CamelModel):
    """Durable metadata for one text-to-speech conversion."""

    id: str | None = Field(default=None, description="Assigned by the record store")
    user_id: str = Field(..., description="Owning user")
    text: str
    input_type: InputType
    original_file_name: str | None = None
    original_file_url: str | None = None
    audio_url: str
    status: ConversionStatus = Field(default=ConversionStatus.COMPLETED, validate_default=True)
    created_at: datetime | None = Field(default=None, description="Assigned by the record store")
    completed_at: datetime | None = None
    text_length: int = Field(..., ge=0)

    def to_document(self) -> dict:
        """Fields written to the record store (id and createdAt are store-assigned)."""
        return self.model_dump(by_alias=True, exclude={"id", "created_at"})


class UploadedFile(BaseModel):
    """A file received on the upload layer, already size and type checked."""

    filename: str | None = None
    media_type: str
    data: bytes


class ConversionRequest(BaseModel):
    """Input of a single conversion."""

    user_id: str | None = None
    text: str | None = None
    upload: UploadedFile | None = None
    voice_name: str | None = None


class ConversionResult(CamelModel):
    """Outcome of a successful conversion."""

    conversion_id: str
    audio_url: str
    text_length: int
    input_type: InputType


class ArtifactDeletion(BaseModel):
    """Outcome of deleting one artifact during the delete workflow."""

    name: str
    deleted: bool
    error: str | None = None


class DeletionResult(BaseModel):
    """Outcome of the delete workflow."""

    conversion_id: str
    artifacts: list[ArtifactDeletion] = Field(default_factory=list)

    @property
    def failed_artifacts(self) -> list[str]:
        return [a.name for a in self.artifacts if not a.deleted]
