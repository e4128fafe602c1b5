"""Conversion Orchestrator - the convert and delete workflows.

Provides:
- ConversionOrchestrator.convert(): validate, extract, synthesize, persist
- ConversionOrchestrator.list_conversions(): every record of a user
- ConversionOrchestrator.delete_conversion(): cascade delete of record and artifacts

Steps run strictly in sequence. Each collaborator raises one error kind from
tts_convert.api.exceptions, which propagates unchanged to the HTTP layer.
"""

from datetime import datetime, timezone

from tts_convert.api.exceptions import (
    ArtifactNotFoundError,
    ArtifactStoreError,
    ContentTooLargeError,
    ConversionNotFoundError,
    EmptyContentError,
    InvalidUserIdError,
    MissingFieldError,
    NoContentError,
    RecordNotFoundError,
)
from tts_convert.config.settings import ConversionSettings
from tts_convert.core.interfaces import ArtifactStore, RecordStore, SpeechSynthesizer, TextExtractor
from tts_convert.core.models import (
    AUDIO_MEDIA_TYPE,
    ArtifactDeletion,
    ConversionRecord,
    ConversionRequest,
    ConversionResult,
    DeletionResult,
    InputType,
)
from tts_convert.core.naming import (
    AUDIO_FOLDER,
    UPLOADS_FOLDER,
    artifact_name_from_url,
    audio_artifact_name,
    upload_artifact_name,
)
from tts_convert.utils.logging import get_logger
from tts_convert.utils.timing import Timer

logger = get_logger("conversion")


class ConversionOrchestrator:
    """
    Runs one conversion request end to end.

    Collaborators are constructed at process start and injected; the orchestrator
    holds no per-request state, so concurrent requests share one instance.
    """

    def __init__(
        self,
        extractor: TextExtractor,
        synthesizer: SpeechSynthesizer,
        artifact_store: ArtifactStore,
        record_store: RecordStore,
        settings: ConversionSettings | None = None,
        default_voice: str = "en-US-Wavenet-D",
    ) -> None:
        self.extractor = extractor
        self.synthesizer = synthesizer
        self.artifact_store = artifact_store
        self.record_store = record_store
        self.settings = settings or ConversionSettings()
        self.default_voice = default_voice

    def validate_text(self, text: str) -> str:
        """Reject whitespace-only or oversized text; the text itself is kept verbatim."""
        if not text.strip():
            raise EmptyContentError()

        max_length = self.settings.max_text_length
        if len(text) > max_length:
            raise ContentTooLargeError(max_length=max_length, actual_length=len(text))

        return text

    async def convert(self, request: ConversionRequest) -> ConversionResult:
        """
        Convert inline text or an uploaded document to speech and persist it.

        Raises:
            BadRequestError subclasses: missing or malformed userId, missing content,
                empty or oversized text
            ExtractionFailedError, SynthesisFailedError, ArtifactStoreError,
            RecordStoreError: upstream failures
        """
        if not request.user_id:
            raise MissingFieldError("userId", "User ID is required")
        # User ids become Firestore document ids and artifact name segments
        if "/" in request.user_id:
            raise InvalidUserIdError(request.user_id)
        if request.upload is None and not request.text:
            raise NoContentError()

        user_id = request.user_id
        written: list[str] = []

        try:
            with Timer("convert", log_level="info", user_id=user_id):
                return await self._convert(user_id, request, written)
        except Exception:
            if written and self.settings.rollback_on_failure:
                await self._rollback(written)
            raise

    async def _convert(
        self,
        user_id: str,
        request: ConversionRequest,
        written: list[str],
    ) -> ConversionResult:
        original_file_name: str | None = None
        original_file_url: str | None = None

        if request.upload is not None:
            upload = request.upload
            original_file_name = upload.filename
            input_type = InputType.from_media_type(upload.media_type)

            text = await self.extractor.extract(upload.data, upload.media_type)

            upload_name = upload_artifact_name(user_id, input_type.value)
            original_file_url = await self.artifact_store.store(
                upload_name, upload.data, upload.media_type
            )
            written.append(upload_name)
        else:
            input_type = InputType.TEXT
            text = request.text or ""

        text = self.validate_text(text)
        voice_name = request.voice_name or self.default_voice

        logger.info(
            "Starting conversion",
            user_id=user_id,
            input_type=input_type.value,
            text_length=len(text),
            voice_name=voice_name,
        )

        audio_name = audio_artifact_name(user_id)
        audio = await self.synthesizer.synthesize(text, voice_name)

        audio_url = await self.artifact_store.store(audio_name, audio, AUDIO_MEDIA_TYPE)
        written.append(audio_name)

        record = ConversionRecord(
            user_id=user_id,
            text=text,
            input_type=input_type,
            original_file_name=original_file_name,
            original_file_url=original_file_url,
            audio_url=audio_url,
            completed_at=datetime.now(timezone.utc),
            text_length=len(text),
        )
        conversion_id = await self.record_store.create(user_id, record)

        logger.info(
            "Conversion completed",
            user_id=user_id,
            conversion_id=conversion_id,
            audio_size_bytes=len(audio),
        )

        return ConversionResult(
            conversion_id=conversion_id,
            audio_url=audio_url,
            text_length=len(text),
            input_type=input_type,
        )

    async def _rollback(self, names: list[str]) -> None:
        """Best-effort removal of artifacts written by a failed conversion."""
        for name in names:
            try:
                await self.artifact_store.delete(name)
                logger.info("Rolled back artifact", artifact=name)
            except (ArtifactNotFoundError, ArtifactStoreError) as e:
                logger.warning("Rollback of artifact failed", artifact=name, error=e.message)

    async def list_conversions(self, user_id: str) -> list[ConversionRecord]:
        """Return every conversion record of a user."""
        if not user_id:
            raise MissingFieldError("userId", "User ID is required")

        records = await self.record_store.list_records(user_id)
        logger.info("Retrieved conversions", user_id=user_id, count=len(records))
        return records

    def artifact_names(self, record: ConversionRecord) -> list[str]:
        """Logical names of the artifacts a record points to, original upload first."""
        names: list[str] = []
        if record.original_file_url:
            names.append(artifact_name_from_url(record.original_file_url, UPLOADS_FOLDER))
        if record.audio_url:
            names.append(artifact_name_from_url(record.audio_url, AUDIO_FOLDER))
        return names

    async def delete_conversion(self, user_id: str, conversion_id: str) -> DeletionResult:
        """
        Delete a conversion record and its artifacts.

        Artifact failures are logged and reported in the result but never abort the
        delete; removing the record is what makes the conversion gone.

        Raises:
            ConversionNotFoundError: the record does not exist
            RecordStoreError: the record lookup or delete failed
        """
        if not user_id or not conversion_id:
            raise MissingFieldError("conversionId", "User ID and Conversion ID are required")

        record = await self.record_store.get(user_id, conversion_id)
        if record is None:
            raise ConversionNotFoundError(user_id, conversion_id)

        result = DeletionResult(conversion_id=conversion_id)
        for name in self.artifact_names(record):
            try:
                await self.artifact_store.delete(name)
                result.artifacts.append(ArtifactDeletion(name=name, deleted=True))
            except (ArtifactNotFoundError, ArtifactStoreError) as e:
                logger.warning(
                    "Error deleting file",
                    artifact=name,
                    conversion_id=conversion_id,
                    error=e.message,
                )
                result.artifacts.append(ArtifactDeletion(name=name, deleted=False, error=e.message))

        try:
            await self.record_store.delete(user_id, conversion_id)
        except RecordNotFoundError:
            logger.info(
                "Conversion already deleted",
                user_id=user_id,
                conversion_id=conversion_id,
            )

        logger.info(
            "Conversion deleted",
            user_id=user_id,
            conversion_id=conversion_id,
            failed_artifacts=result.failed_artifacts,
        )
        return result

    async def shutdown(self) -> None:
        """Close the injected clients."""
        await self.synthesizer.close()
        await self.artifact_store.close()
        await self.record_store.close()
