"""Pytest configuration and fixtures.

Global fixtures for all tests:
- settings: test settings with the mock backend
- synthesizer / artifact_store / record_store: in-memory collaborators
- orchestrator: orchestrator wired to the in-memory collaborators
- app: FastAPI test application with the orchestrator injected
- client: httpx.AsyncClient for testing
- sample_text / sample_pdf_bytes: conversion inputs
"""

from collections.abc import AsyncGenerator

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from tts_convert.api.app import create_app
from tts_convert.config import AppSettings, GoogleCloudSettings, Settings
from tts_convert.core.orchestrator import ConversionOrchestrator
from tts_convert.extraction import DocumentTextExtractor
from tts_convert.storage import InMemoryArtifactStore, InMemoryRecordStore
from tts_convert.synthesis import MockSpeechSynthesizer

from tests.factories import create_pdf_bytes

TEST_BUCKET = "test-bucket"


# -----------------------------------------------------------------------------
# Settings Fixture
# -----------------------------------------------------------------------------
@pytest.fixture
def settings() -> Settings:
    """Create test settings with the mock backend enabled."""
    return Settings(
        app=AppSettings(DEBUG=True),
        google=GoogleCloudSettings(USE_MOCK=True, storage_bucket=TEST_BUCKET),
    )


# -----------------------------------------------------------------------------
# Collaborator Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def synthesizer() -> MockSpeechSynthesizer:
    return MockSpeechSynthesizer()


@pytest.fixture
def artifact_store() -> InMemoryArtifactStore:
    return InMemoryArtifactStore(bucket_name=TEST_BUCKET)


@pytest.fixture
def record_store() -> InMemoryRecordStore:
    return InMemoryRecordStore()


@pytest.fixture
def orchestrator(
    settings: Settings,
    synthesizer: MockSpeechSynthesizer,
    artifact_store: InMemoryArtifactStore,
    record_store: InMemoryRecordStore,
) -> ConversionOrchestrator:
    """Orchestrator wired to in-memory collaborators."""
    return ConversionOrchestrator(
        extractor=DocumentTextExtractor(),
        synthesizer=synthesizer,
        artifact_store=artifact_store,
        record_store=record_store,
        settings=settings.conversion,
        default_voice=settings.synthesis.default_voice,
    )


# -----------------------------------------------------------------------------
# App and Client Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def app(settings: Settings, orchestrator: ConversionOrchestrator) -> FastAPI:
    """Create test FastAPI application with the orchestrator injected."""
    return create_app(settings, orchestrator=orchestrator)


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Create async HTTP client for testing."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


# -----------------------------------------------------------------------------
# Input Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def sample_text() -> str:
    """Sample text for conversion tests."""
    return "Hello, this is a test of the text to speech conversion service."


@pytest.fixture
def sample_pdf_bytes() -> bytes:
    """One-page PDF with extractable text."""
    return create_pdf_bytes("Hello from a PDF document")
