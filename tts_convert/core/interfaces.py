"""Abstract interfaces for the conversion collaborators.

Defines the narrow contracts the orchestrator consumes:
- TextExtractor: bytes + media type -> text
- SpeechSynthesizer: text + voice -> audio bytes
- ArtifactStore: logical name -> public blob
- RecordStore: per-user conversion records

Implementations translate their library's errors into the exceptions in
tts_convert.api.exceptions so callers only handle one error kind per step.
"""

from abc import ABC, abstractmethod

from tts_convert.core.models import ConversionRecord


class TextExtractor(ABC):
    """Extracts plain text from an uploaded document."""

    @abstractmethod
    async def extract(self, data: bytes, media_type: str) -> str:
        """
        Extract text from raw bytes.

        Raises:
            UnsupportedMediaTypeError: media type is neither PDF nor plain text
            ExtractionFailedError: the document could not be parsed
        """
        ...


class SpeechSynthesizer(ABC):
    """Converts text to encoded audio."""

    @abstractmethod
    async def synthesize(self, text: str, voice_name: str) -> bytes:
        """
        Synthesize speech for text with the given voice.

        Raises:
            SynthesisFailedError: the remote call failed
        """
        ...

    async def close(self) -> None:
        """Release client resources."""
        return None


class ArtifactStore(ABC):
    """Blob store addressed by flat logical names."""

    @abstractmethod
    async def store(self, name: str, data: bytes, content_type: str) -> str:
        """
        Persist bytes under name, mark them public and return the public URL.

        Raises:
            ArtifactStoreError: the upload failed
        """
        ...

    @abstractmethod
    async def delete(self, name: str) -> bool:
        """
        Delete the artifact stored under name.

        Raises:
            ArtifactNotFoundError: nothing is stored under name
            DeleteFailedError: the delete call failed
        """
        ...

    @abstractmethod
    def public_url(self, name: str) -> str:
        """Public URL for a logical name."""
        ...

    async def close(self) -> None:
        """Release client resources."""
        return None


class RecordStore(ABC):
    """Conversion records namespaced by user."""

    @abstractmethod
    async def create(self, user_id: str, record: ConversionRecord) -> str:
        """
        Write a record with a generated id and server-side creation time.

        Returns:
            The generated record id

        Raises:
            RecordStoreError: the write failed
        """
        ...

    @abstractmethod
    async def list_records(self, user_id: str) -> list[ConversionRecord]:
        """Return every record of the user, in no guaranteed order."""
        ...

    @abstractmethod
    async def get(self, user_id: str, conversion_id: str) -> ConversionRecord | None:
        """Point read of one record, None if absent."""
        ...

    @abstractmethod
    async def delete(self, user_id: str, conversion_id: str) -> str:
        """
        Delete one record.

        Raises:
            RecordNotFoundError: the record does not exist
            RecordStoreError: the delete failed
        """
        ...

    async def close(self) -> None:
        """Release client resources."""
        return None
