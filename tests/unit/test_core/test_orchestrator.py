"""Tests for the conversion orchestrator."""

import asyncio

import pytest

from tts_convert.api.exceptions import (
    ContentTooLargeError,
    ConversionNotFoundError,
    EmptyContentError,
    InvalidUserIdError,
    MissingFieldError,
    NoContentError,
    RecordStoreError,
    SynthesisFailedError,
)
from tts_convert.config import ConversionSettings
from tts_convert.core.models import ConversionRequest, InputType
from tts_convert.core.orchestrator import ConversionOrchestrator
from tts_convert.extraction import DocumentTextExtractor
from tts_convert.storage import InMemoryArtifactStore, InMemoryRecordStore
from tts_convert.synthesis import MockSpeechSynthesizer

from tests.factories import (
    FailingRecordStore,
    FailingSynthesizer,
    VanishingRecordStore,
    create_pdf_bytes,
    create_upload,
)


def build_orchestrator(
    synthesizer=None,
    artifact_store=None,
    record_store=None,
    rollback_on_failure: bool = False,
) -> ConversionOrchestrator:
    return ConversionOrchestrator(
        extractor=DocumentTextExtractor(),
        synthesizer=synthesizer or MockSpeechSynthesizer(),
        artifact_store=artifact_store or InMemoryArtifactStore(bucket_name="test-bucket"),
        record_store=record_store or InMemoryRecordStore(),
        settings=ConversionSettings(max_text_length=5000, rollback_on_failure=rollback_on_failure),
    )


class TestConvertText:
    """Tests for inline text conversion."""

    async def test_convert_returns_result(
        self,
        orchestrator: ConversionOrchestrator,
        artifact_store: InMemoryArtifactStore,
        sample_text: str,
    ):
        """Test inline text produces audio and a record."""
        result = await orchestrator.convert(ConversionRequest(user_id="u1", text=sample_text))

        assert result.conversion_id
        assert result.input_type == "text"
        assert result.text_length == len(sample_text)
        assert result.audio_url.startswith("https://storage.googleapis.com/test-bucket/audio/")

        names = list(artifact_store.artifacts)
        assert len(names) == 1
        data, content_type = artifact_store.artifacts[names[0]]
        assert content_type == "audio/mpeg"
        assert data

    async def test_record_is_persisted(
        self,
        orchestrator: ConversionOrchestrator,
        record_store: InMemoryRecordStore,
    ):
        """Test the stored record mirrors the conversion."""
        result = await orchestrator.convert(ConversionRequest(user_id="u1", text="Hello"))

        record = await record_store.get("u1", result.conversion_id)

        assert record is not None
        assert record.user_id == "u1"
        assert record.text == "Hello"
        assert record.input_type == "text"
        assert record.status == "completed"
        assert record.audio_url == result.audio_url
        assert record.original_file_url is None
        assert record.created_at is not None
        assert record.completed_at is not None

    async def test_default_voice_used(
        self,
        orchestrator: ConversionOrchestrator,
        synthesizer: MockSpeechSynthesizer,
    ):
        """Test the configured default voice is used when none is requested."""
        await orchestrator.convert(ConversionRequest(user_id="u1", text="Hello"))

        assert list(synthesizer.calls) == [("Hello", "en-US-Wavenet-D")]

    async def test_requested_voice_used(
        self,
        orchestrator: ConversionOrchestrator,
        synthesizer: MockSpeechSynthesizer,
    ):
        """Test a requested voice overrides the default."""
        await orchestrator.convert(
            ConversionRequest(user_id="u1", text="Hallo", voice_name="de-DE-Wavenet-B")
        )

        assert list(synthesizer.calls) == [("Hallo", "de-DE-Wavenet-B")]

    async def test_text_length_counts_characters(self, orchestrator: ConversionOrchestrator):
        """Test text length counts characters, not encoded bytes."""
        text = "héllo wörld ✓"

        result = await orchestrator.convert(ConversionRequest(user_id="u1", text=text))

        assert result.text_length == len(text)

    async def test_text_kept_verbatim(
        self,
        orchestrator: ConversionOrchestrator,
        synthesizer: MockSpeechSynthesizer,
    ):
        """Test surrounding whitespace is not trimmed."""
        await orchestrator.convert(ConversionRequest(user_id="u1", text="  Hello  "))

        assert synthesizer.calls[0][0] == "  Hello  "

    async def test_concurrent_conversions_distinct_artifacts(
        self,
        orchestrator: ConversionOrchestrator,
        artifact_store: InMemoryArtifactStore,
    ):
        """Test concurrent requests of one user write distinct artifacts."""
        results = await asyncio.gather(
            *(
                orchestrator.convert(ConversionRequest(user_id="u1", text=f"Text {i}"))
                for i in range(5)
            )
        )

        assert len({r.audio_url for r in results}) == 5
        assert len({r.conversion_id for r in results}) == 5
        assert len(artifact_store.artifacts) == 5


class TestConvertValidation:
    """Tests for request validation."""

    async def test_text_at_limit_accepted(self, orchestrator: ConversionOrchestrator):
        """Test exactly the maximum length is accepted."""
        result = await orchestrator.convert(ConversionRequest(user_id="u1", text="a" * 5000))

        assert result.text_length == 5000

    async def test_text_over_limit_rejected(
        self,
        orchestrator: ConversionOrchestrator,
        synthesizer: MockSpeechSynthesizer,
    ):
        """Test one character over the limit is rejected before synthesis."""
        with pytest.raises(ContentTooLargeError) as exc_info:
            await orchestrator.convert(ConversionRequest(user_id="u1", text="a" * 5001))

        assert exc_info.value.message == "Text too long. Maximum 5000 characters allowed."
        assert list(synthesizer.calls) == []

    async def test_whitespace_text_rejected(
        self,
        orchestrator: ConversionOrchestrator,
        synthesizer: MockSpeechSynthesizer,
        artifact_store: InMemoryArtifactStore,
    ):
        """Test whitespace-only text is empty content."""
        with pytest.raises(EmptyContentError):
            await orchestrator.convert(ConversionRequest(user_id="u1", text="   \n\t "))

        assert list(synthesizer.calls) == []
        assert artifact_store.artifacts == {}

    async def test_missing_user_rejected(self, orchestrator: ConversionOrchestrator):
        """Test a missing user id is rejected."""
        with pytest.raises(MissingFieldError) as exc_info:
            await orchestrator.convert(ConversionRequest(text="Hello"))

        assert exc_info.value.message == "User ID is required"

    async def test_no_content_rejected(self, orchestrator: ConversionOrchestrator):
        """Test neither text nor file is rejected."""
        with pytest.raises(NoContentError):
            await orchestrator.convert(ConversionRequest(user_id="u1"))

    async def test_empty_text_is_no_content(self, orchestrator: ConversionOrchestrator):
        """Test an empty text field counts as absent."""
        with pytest.raises(NoContentError):
            await orchestrator.convert(ConversionRequest(user_id="u1", text=""))

    async def test_user_id_with_slash_rejected(
        self,
        orchestrator: ConversionOrchestrator,
        synthesizer: MockSpeechSynthesizer,
        artifact_store: InMemoryArtifactStore,
        record_store: InMemoryRecordStore,
    ):
        """Test a user id containing '/' is rejected before anything is written."""
        with pytest.raises(InvalidUserIdError) as exc_info:
            await orchestrator.convert(
                ConversionRequest(user_id="a/b", upload=create_upload(b"Hello"))
            )

        assert exc_info.value.http_status == 400
        assert exc_info.value.details["field"] == "userId"
        assert list(synthesizer.calls) == []
        assert artifact_store.artifacts == {}
        assert record_store.records == {}


class TestConvertUpload:
    """Tests for document conversion."""

    async def test_text_file_upload(
        self,
        orchestrator: ConversionOrchestrator,
        artifact_store: InMemoryArtifactStore,
        record_store: InMemoryRecordStore,
    ):
        """Test a plain text upload stores the original and the audio."""
        upload = create_upload(b"Text from a file.", "text/plain", "notes.txt")

        result = await orchestrator.convert(ConversionRequest(user_id="u1", upload=upload))

        assert result.input_type == "txt"
        assert result.text_length == len("Text from a file.")

        originals = [n for n in artifact_store.artifacts if n.startswith("uploads/")]
        assert len(originals) == 1
        assert originals[0].endswith(".txt")
        assert artifact_store.artifacts[originals[0]] == (b"Text from a file.", "text/plain")

        record = await record_store.get("u1", result.conversion_id)
        assert record.original_file_name == "notes.txt"
        assert record.original_file_url == artifact_store.public_url(originals[0])

    async def test_pdf_upload(
        self,
        orchestrator: ConversionOrchestrator,
        synthesizer: MockSpeechSynthesizer,
    ):
        """Test a PDF upload is extracted and converted."""
        upload = create_upload(create_pdf_bytes("Hello from a PDF"), "application/pdf", "doc.pdf")

        result = await orchestrator.convert(ConversionRequest(user_id="u1", upload=upload))

        assert result.input_type == InputType.PDF.value
        assert "Hello" in synthesizer.calls[0][0]

    async def test_file_takes_precedence_over_text(
        self,
        orchestrator: ConversionOrchestrator,
        synthesizer: MockSpeechSynthesizer,
    ):
        """Test the uploaded file wins when text is also given."""
        upload = create_upload(b"From the file")

        result = await orchestrator.convert(
            ConversionRequest(user_id="u1", text="From the field", upload=upload)
        )

        assert result.input_type == "txt"
        assert synthesizer.calls[0][0] == "From the file"

    async def test_oversized_extracted_text_keeps_original(
        self,
        orchestrator: ConversionOrchestrator,
        artifact_store: InMemoryArtifactStore,
        record_store: InMemoryRecordStore,
    ):
        """Test a too long document fails after its original was stored."""
        upload = create_upload(b"a" * 5001)

        with pytest.raises(ContentTooLargeError):
            await orchestrator.convert(ConversionRequest(user_id="u1", upload=upload))

        assert [n for n in artifact_store.artifacts if n.startswith("uploads/")]
        assert await record_store.list_records("u1") == []


class TestConvertFailures:
    """Tests for upstream failures and rollback."""

    async def test_synthesis_failure_propagates(self):
        """Test synthesis errors propagate and no record is written."""
        record_store = InMemoryRecordStore()
        orchestrator = build_orchestrator(
            synthesizer=FailingSynthesizer(), record_store=record_store
        )

        with pytest.raises(SynthesisFailedError):
            await orchestrator.convert(ConversionRequest(user_id="u1", text="Hello"))

        assert await record_store.list_records("u1") == []

    async def test_record_failure_leaves_audio_without_rollback(self):
        """Test a failed record write leaves the audio by default."""
        artifact_store = InMemoryArtifactStore()
        orchestrator = build_orchestrator(
            artifact_store=artifact_store, record_store=FailingRecordStore()
        )

        with pytest.raises(RecordStoreError):
            await orchestrator.convert(ConversionRequest(user_id="u1", text="Hello"))

        assert len(artifact_store.artifacts) == 1

    async def test_record_failure_rolls_back_when_enabled(self):
        """Test written artifacts are removed when rollback is enabled."""
        artifact_store = InMemoryArtifactStore()
        orchestrator = build_orchestrator(
            artifact_store=artifact_store,
            record_store=FailingRecordStore(),
            rollback_on_failure=True,
        )
        upload = create_upload(b"Hello from a file")

        with pytest.raises(RecordStoreError):
            await orchestrator.convert(ConversionRequest(user_id="u1", upload=upload))

        assert artifact_store.artifacts == {}

    async def test_synthesis_failure_rolls_back_original(self):
        """Test the stored original is removed when synthesis fails with rollback."""
        artifact_store = InMemoryArtifactStore()
        orchestrator = build_orchestrator(
            synthesizer=FailingSynthesizer(),
            artifact_store=artifact_store,
            rollback_on_failure=True,
        )

        with pytest.raises(SynthesisFailedError):
            await orchestrator.convert(
                ConversionRequest(user_id="u1", upload=create_upload(b"Hello"))
            )

        assert artifact_store.artifacts == {}


class TestListConversions:
    """Tests for listing conversions."""

    async def test_lists_only_user_records(self, orchestrator: ConversionOrchestrator):
        """Test records are scoped per user."""
        first = await orchestrator.convert(ConversionRequest(user_id="u1", text="One"))
        await orchestrator.convert(ConversionRequest(user_id="u2", text="Two"))

        records = await orchestrator.list_conversions("u1")

        assert [r.id for r in records] == [first.conversion_id]

    async def test_unknown_user_has_no_records(self, orchestrator: ConversionOrchestrator):
        """Test an unknown user gets an empty list."""
        assert await orchestrator.list_conversions("nobody") == []


class TestDeleteConversion:
    """Tests for the cascade delete."""

    async def test_delete_removes_record_and_artifacts(
        self,
        orchestrator: ConversionOrchestrator,
        artifact_store: InMemoryArtifactStore,
        record_store: InMemoryRecordStore,
    ):
        """Test record, audio and original are all removed."""
        result = await orchestrator.convert(
            ConversionRequest(user_id="u1", upload=create_upload(b"Hello"))
        )
        assert len(artifact_store.artifacts) == 2

        deletion = await orchestrator.delete_conversion("u1", result.conversion_id)

        assert deletion.conversion_id == result.conversion_id
        assert deletion.failed_artifacts == []
        assert [a.name.split("/")[0] for a in deletion.artifacts] == ["uploads", "audio"]
        assert artifact_store.artifacts == {}
        assert await record_store.get("u1", result.conversion_id) is None

    async def test_delete_unknown_conversion(self, orchestrator: ConversionOrchestrator):
        """Test deleting a missing conversion raises not found."""
        with pytest.raises(ConversionNotFoundError):
            await orchestrator.delete_conversion("u1", "does-not-exist")

    async def test_delete_other_users_conversion(self, orchestrator: ConversionOrchestrator):
        """Test a conversion cannot be deleted through another user."""
        result = await orchestrator.convert(ConversionRequest(user_id="u1", text="Hello"))

        with pytest.raises(ConversionNotFoundError):
            await orchestrator.delete_conversion("u2", result.conversion_id)

    async def test_delete_tolerates_missing_artifact(
        self,
        orchestrator: ConversionOrchestrator,
        artifact_store: InMemoryArtifactStore,
        record_store: InMemoryRecordStore,
    ):
        """Test a missing audio artifact does not block the delete."""
        result = await orchestrator.convert(ConversionRequest(user_id="u1", text="Hello"))
        audio_name = next(iter(artifact_store.artifacts))
        del artifact_store.artifacts[audio_name]

        deletion = await orchestrator.delete_conversion("u1", result.conversion_id)

        assert deletion.failed_artifacts == [audio_name]
        assert await record_store.get("u1", result.conversion_id) is None

    async def test_delete_tolerates_record_vanishing(self):
        """Test a record removed concurrently still reports success."""
        record_store = VanishingRecordStore()
        orchestrator = build_orchestrator(record_store=record_store)
        result = await orchestrator.convert(ConversionRequest(user_id="u1", text="Hello"))

        deletion = await orchestrator.delete_conversion("u1", result.conversion_id)

        assert deletion.conversion_id == result.conversion_id


class TestShutdown:
    """Tests for orchestrator shutdown."""

    async def test_shutdown_closes_collaborators(self, orchestrator: ConversionOrchestrator):
        """Test shutdown completes with in-memory collaborators."""
        await orchestrator.shutdown()
