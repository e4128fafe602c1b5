"""Construction of the orchestrator and its collaborators from settings."""

from google.cloud import firestore, storage

from tts_convert.config.credentials import load_credentials, resolve_project_id
from tts_convert.config.settings import Settings
from tts_convert.core.orchestrator import ConversionOrchestrator
from tts_convert.extraction import DocumentTextExtractor
from tts_convert.storage import (
    FirestoreRecordStore,
    GCSArtifactStore,
    InMemoryArtifactStore,
    InMemoryRecordStore,
)
from tts_convert.synthesis import GoogleSpeechSynthesizer, MockSpeechSynthesizer
from tts_convert.utils.logging import get_logger

logger = get_logger("system")


def create_mock_orchestrator(settings: Settings) -> ConversionOrchestrator:
    """Orchestrator backed by in-memory stores and the mock synthesizer."""
    return ConversionOrchestrator(
        extractor=DocumentTextExtractor(),
        synthesizer=MockSpeechSynthesizer(),
        artifact_store=InMemoryArtifactStore(
            bucket_name=settings.google.storage_bucket,
            public_base_url=settings.google.public_base_url,
        ),
        record_store=InMemoryRecordStore(),
        settings=settings.conversion,
        default_voice=settings.synthesis.default_voice,
    )


def create_google_orchestrator(settings: Settings) -> ConversionOrchestrator:
    """Orchestrator backed by Cloud Text-to-Speech, Cloud Storage and Firestore."""
    credentials = load_credentials(settings.google)
    project_id = resolve_project_id(settings.google, credentials)

    storage_client = storage.Client(project=project_id, credentials=credentials)
    firestore_client = firestore.AsyncClient(project=project_id, credentials=credentials)

    return ConversionOrchestrator(
        extractor=DocumentTextExtractor(),
        synthesizer=GoogleSpeechSynthesizer(settings.synthesis, credentials=credentials),
        artifact_store=GCSArtifactStore.from_client(
            storage_client,
            settings.google.storage_bucket,
            public_base_url=settings.google.public_base_url,
        ),
        record_store=FirestoreRecordStore(firestore_client),
        settings=settings.conversion,
        default_voice=settings.synthesis.default_voice,
    )


def create_orchestrator(settings: Settings) -> ConversionOrchestrator:
    """Build the orchestrator for the configured backend."""
    if settings.google.use_mock:
        logger.warning("Using in-memory stores and mock synthesizer")
        return create_mock_orchestrator(settings)

    logger.info(
        "Using Google Cloud backend",
        bucket=settings.google.storage_bucket,
        default_voice=settings.synthesis.default_voice,
    )
    return create_google_orchestrator(settings)
