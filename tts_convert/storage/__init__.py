"""Artifact and record store adapters."""

from tts_convert.storage.firestore import FirestoreRecordStore
from tts_convert.storage.gcs import GCSArtifactStore, build_public_url
from tts_convert.storage.memory import InMemoryArtifactStore, InMemoryRecordStore

__all__ = [
    "FirestoreRecordStore",
    "GCSArtifactStore",
    "InMemoryArtifactStore",
    "InMemoryRecordStore",
    "build_public_url",
]
