"""Google Cloud Storage artifact store.

The storage client is synchronous; calls run in a small thread pool.
"""

import asyncio
from concurrent.futures import ThreadPoolExecutor
from urllib.parse import quote

from google.api_core import exceptions as google_exceptions
from google.cloud import storage

from tts_convert.api.exceptions import (
    ArtifactNotFoundError,
    ArtifactStoreError,
    DeleteFailedError,
)
from tts_convert.core.interfaces import ArtifactStore
from tts_convert.utils.logging import get_logger

logger = get_logger("storage")

_executor = ThreadPoolExecutor(max_workers=4, thread_name_prefix="gcs_")


def build_public_url(base_url: str, bucket_name: str, name: str) -> str:
    """`https://storage.googleapis.com/{bucket}/{name}` with the name percent-encoded."""
    return f"{base_url.rstrip('/')}/{bucket_name}/{quote(name, safe='/')}"


class GCSArtifactStore(ArtifactStore):
    """Stores artifacts as publicly readable blobs of one bucket."""

    def __init__(
        self,
        bucket: storage.Bucket,
        public_base_url: str = "https://storage.googleapis.com",
        executor: ThreadPoolExecutor | None = None,
    ) -> None:
        self._bucket = bucket
        self._public_base_url = public_base_url
        self._executor = executor or _executor

    @classmethod
    def from_client(
        cls,
        client: storage.Client,
        bucket_name: str,
        public_base_url: str = "https://storage.googleapis.com",
    ) -> "GCSArtifactStore":
        return cls(client.bucket(bucket_name), public_base_url=public_base_url)

    def public_url(self, name: str) -> str:
        return build_public_url(self._public_base_url, self._bucket.name, name)

    def _upload(self, name: str, data: bytes, content_type: str) -> None:
        blob = self._bucket.blob(name)
        blob.upload_from_string(data, content_type=content_type)
        blob.make_public()

    def _delete(self, name: str) -> None:
        self._bucket.blob(name).delete()

    async def store(self, name: str, data: bytes, content_type: str) -> str:
        loop = asyncio.get_running_loop()
        try:
            await loop.run_in_executor(self._executor, self._upload, name, data, content_type)
        except Exception as e:
            logger.error("Error uploading file", artifact=name, error=str(e))
            raise ArtifactStoreError(name, str(e)) from e

        logger.info("File uploaded", artifact=name, size_bytes=len(data), content_type=content_type)
        return self.public_url(name)

    async def delete(self, name: str) -> bool:
        loop = asyncio.get_running_loop()
        try:
            await loop.run_in_executor(self._executor, self._delete, name)
        except google_exceptions.NotFound as e:
            raise ArtifactNotFoundError(name) from e
        except Exception as e:
            logger.error("Error deleting file", artifact=name, error=str(e))
            raise DeleteFailedError(name, str(e)) from e

        logger.info("File deleted", artifact=name)
        return True

    async def close(self) -> None:
        self._bucket.client.close()
