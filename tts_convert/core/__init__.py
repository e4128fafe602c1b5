"""Core conversion workflow."""

from tts_convert.core.interfaces import ArtifactStore, RecordStore, SpeechSynthesizer, TextExtractor
from tts_convert.core.models import (
    ConversionRecord,
    ConversionRequest,
    ConversionResult,
    DeletionResult,
    InputType,
    UploadedFile,
)
from tts_convert.core.orchestrator import ConversionOrchestrator

__all__ = [
    "ArtifactStore",
    "RecordStore",
    "SpeechSynthesizer",
    "TextExtractor",
    "ConversionRecord",
    "ConversionRequest",
    "ConversionResult",
    "DeletionResult",
    "InputType",
    "UploadedFile",
    "ConversionOrchestrator",
]
