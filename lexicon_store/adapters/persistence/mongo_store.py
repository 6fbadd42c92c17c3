# lexicon_store/adapters/persistence/mongo_store.py
from typing import Any, Dict, List, Mapping, Optional, Sequence

import structlog
from pymongo import AsyncMongoClient, UpdateOne
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.errors import BulkWriteError, ConnectionFailure

from lexicon_store.core.domain.models import UpsertWriteResult
from lexicon_store.core.ports.lexicon_store import BulkInsertError, ILexiconStore, UpdateOperation, WriteFailure
from lexicon_store.shared.config import settings
from lexicon_store.shared.resilience import retry_store_connection

logger = structlog.get_logger()

def to_bulk_insert_error(error: BulkWriteError) -> Optional[BulkInsertError]:
    """
    Itemizes a pymongo BulkWriteError.
    Returns None when the failure cannot be attributed to single documents
    (no write errors, or a write concern error), in which case the caller re-raises it.
    """
    details = error.details or {}
    write_errors = details.get("writeErrors") or []
    if not write_errors or details.get("writeConcernErrors"):
        return None

    failures = [
        WriteFailure(
            index=write_error.get("index", -1),
            code=write_error.get("code"),
            message=write_error.get("errmsg", ""),
            document=write_error.get("op"),
        )
        for write_error in write_errors
    ]
    return BulkInsertError(failures, inserted_count=details.get("nInserted", 0))

class MongoLexiconStore(ILexiconStore):
    """
    Concrete implementation of the lexicon store Port using MongoDB
    through pymongo's asyncio client.
    """

    def __init__(
        self,
        url: str = settings.MONGO_URL,
        db_name: str = settings.MONGO_DB_NAME,
        collection_name: str = settings.LEXICON_COLLECTION,
    ):
        self.url = url
        self.db_name = db_name
        self.collection_name = collection_name
        self._client: Optional[AsyncMongoClient] = None

    def _get_client(self) -> AsyncMongoClient:
        if self._client is None:
            self._client = AsyncMongoClient(
                self.url,
                serverSelectionTimeoutMS=settings.MONGO_SERVER_SELECTION_TIMEOUT_MS,
            )
        return self._client

    @property
    def collection(self) -> AsyncCollection:
        """Returns the corresponding pymongo collection."""
        return self._get_client()[self.db_name][self.collection_name]

    # --- Interface Implementation ---

    @retry_store_connection(retry_on=(ConnectionFailure,))
    async def connect(self) -> None:
        """Opens the client and waits until a server answers."""
        client = self._get_client()
        await client.admin.command("ping")
        logger.info("mongo_store_connected", db=self.db_name, collection=self.collection_name)

    async def disconnect(self) -> None:
        if self._client is not None:
            await self._client.close()
            self._client = None
            logger.info("mongo_store_disconnected")

    async def find(self, query: Mapping[str, Any]) -> List[Dict[str, Any]]:
        return await self.collection.find(dict(query)).to_list()

    async def insert_many(self, documents: Sequence[Dict[str, Any]], *, ordered: bool = False) -> List[Any]:
        try:
            result = await self.collection.insert_many(list(documents), ordered=ordered)
        except BulkWriteError as e:
            itemized = to_bulk_insert_error(e)
            if itemized is None:
                raise
            logger.debug("mongo_store_insert_rejected", count=len(itemized.failures))
            raise itemized from e
        return list(result.inserted_ids)

    async def bulk_update(self, operations: Sequence[UpdateOperation], *, ordered: bool = False) -> int:
        requests = [UpdateOne(operation.filter, operation.update) for operation in operations]
        result = await self.collection.bulk_write(requests, ordered=ordered)
        return result.matched_count

    async def upsert_one(self, filter: Mapping[str, Any], update: Mapping[str, Any]) -> UpsertWriteResult:
        result = await self.collection.update_one(dict(filter), dict(update), upsert=True)
        return UpsertWriteResult(
            matched_count=result.matched_count,
            modified_count=result.modified_count,
            upserted_id=result.upserted_id,
        )

    async def ensure_indexes(self) -> None:
        # Must match the index on the production collection
        await self.collection.create_index("key", unique=True)

    async def health_check(self) -> bool:
        """Checks if the MongoDB server answers a ping."""
        try:
            await self._get_client().admin.command("ping")
            return True
        except ConnectionFailure as e:
            logger.warning("mongo_store_unhealthy", error=str(e))
            return False
