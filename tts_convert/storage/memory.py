"""In-memory stores for local development and tests.

Both stores keep state per instance; nothing is shared between processes.
"""

import uuid
from datetime import datetime, timezone

from tts_convert.api.exceptions import ArtifactNotFoundError, RecordNotFoundError
from tts_convert.core.interfaces import ArtifactStore, RecordStore
from tts_convert.core.models import ConversionRecord
from tts_convert.storage.gcs import build_public_url
from tts_convert.utils.logging import get_logger

logger = get_logger("storage")


class InMemoryArtifactStore(ArtifactStore):
    """Artifacts held in a dict keyed by logical name."""

    def __init__(
        self,
        bucket_name: str = "tts-conversions",
        public_base_url: str = "https://storage.googleapis.com",
    ) -> None:
        self.bucket_name = bucket_name
        self.public_base_url = public_base_url
        self.artifacts: dict[str, tuple[bytes, str]] = {}

    def public_url(self, name: str) -> str:
        return build_public_url(self.public_base_url, self.bucket_name, name)

    async def store(self, name: str, data: bytes, content_type: str) -> str:
        self.artifacts[name] = (data, content_type)
        logger.debug("File stored in memory", artifact=name, size_bytes=len(data))
        return self.public_url(name)

    async def delete(self, name: str) -> bool:
        if name not in self.artifacts:
            raise ArtifactNotFoundError(name)
        del self.artifacts[name]
        return True


class InMemoryRecordStore(RecordStore):
    """Records held per user in insertion order."""

    def __init__(self) -> None:
        self.records: dict[str, dict[str, ConversionRecord]] = {}

    async def create(self, user_id: str, record: ConversionRecord) -> str:
        conversion_id = uuid.uuid4().hex[:20]
        stored = record.model_copy(
            update={
                "id": conversion_id,
                "user_id": user_id,
                "created_at": datetime.now(timezone.utc),
            }
        )
        self.records.setdefault(user_id, {})[conversion_id] = stored
        return conversion_id

    async def list_records(self, user_id: str) -> list[ConversionRecord]:
        return list(self.records.get(user_id, {}).values())

    async def get(self, user_id: str, conversion_id: str) -> ConversionRecord | None:
        return self.records.get(user_id, {}).get(conversion_id)

    async def delete(self, user_id: str, conversion_id: str) -> str:
        user_records = self.records.get(user_id, {})
        if conversion_id not in user_records:
            raise RecordNotFoundError(user_id, conversion_id)
        del user_records[conversion_id]
        return conversion_id
