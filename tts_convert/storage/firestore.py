"""Cloud Firestore record store.

Records live at `users/{userId}/conversions/{id}`; the id is generated by Firestore
and `createdAt` is a server timestamp.
"""

from google.api_core import exceptions as google_exceptions
from google.cloud import firestore

from tts_convert.api.exceptions import RecordNotFoundError, RecordStoreError
from tts_convert.core.interfaces import RecordStore
from tts_convert.core.models import ConversionRecord
from tts_convert.utils.logging import get_logger

logger = get_logger("storage")

USERS_COLLECTION = "users"
CONVERSIONS_COLLECTION = "conversions"


def record_from_snapshot(user_id: str, snapshot) -> ConversionRecord:
    """Build a record from a document snapshot, annotated with its id."""
    data = snapshot.to_dict() or {}
    data.setdefault("userId", user_id)
    data["id"] = snapshot.id
    return ConversionRecord.model_validate(data)


class FirestoreRecordStore(RecordStore):
    """Conversion records in a per-user Firestore subcollection."""

    def __init__(self, client: firestore.AsyncClient) -> None:
        self._client = client

    def _conversions(self, user_id: str):
        return (
            self._client.collection(USERS_COLLECTION)
            .document(user_id)
            .collection(CONVERSIONS_COLLECTION)
        )

    async def create(self, user_id: str, record: ConversionRecord) -> str:
        doc_ref = self._conversions(user_id).document()
        data = {
            **record.to_document(),
            "userId": user_id,
            "id": doc_ref.id,
            "createdAt": firestore.SERVER_TIMESTAMP,
        }
        try:
            await doc_ref.set(data)
        except Exception as e:
            logger.error("Error saving conversion", user_id=user_id, error=str(e))
            raise RecordStoreError("create", str(e)) from e

        logger.info("Conversion saved", user_id=user_id, conversion_id=doc_ref.id)
        return doc_ref.id

    async def list_records(self, user_id: str) -> list[ConversionRecord]:
        try:
            records = [
                record_from_snapshot(user_id, snapshot)
                async for snapshot in self._conversions(user_id).stream()
            ]
        except Exception as e:
            logger.error("Error getting conversions", user_id=user_id, error=str(e))
            raise RecordStoreError("list", str(e)) from e

        logger.debug("Listed conversions", user_id=user_id, count=len(records))
        return records

    async def get(self, user_id: str, conversion_id: str) -> ConversionRecord | None:
        try:
            snapshot = await self._conversions(user_id).document(conversion_id).get()
        except Exception as e:
            logger.error(
                "Error getting conversion",
                user_id=user_id,
                conversion_id=conversion_id,
                error=str(e),
            )
            raise RecordStoreError("get", str(e)) from e

        if not snapshot.exists:
            return None
        return record_from_snapshot(user_id, snapshot)

    async def delete(self, user_id: str, conversion_id: str) -> str:
        doc_ref = self._conversions(user_id).document(conversion_id)
        try:
            await doc_ref.delete(option=self._client.write_option(exists=True))
        except google_exceptions.NotFound as e:
            raise RecordNotFoundError(user_id, conversion_id) from e
        except Exception as e:
            logger.error(
                "Error deleting conversion",
                user_id=user_id,
                conversion_id=conversion_id,
                error=str(e),
            )
            raise RecordStoreError("delete", str(e)) from e

        logger.info("Conversion deleted", user_id=user_id, conversion_id=conversion_id)
        return conversion_id

    async def close(self) -> None:
        self._client.close()
