# lexicon_store/core/ports/lexicon_store.py
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Protocol, Sequence

from lexicon_store.core.domain.models import UpsertWriteResult


@dataclass(frozen=True)
class UpdateOperation:
    """One item of a bulk update: documents matching `filter` get `update` applied once."""
    filter: Dict[str, Any]
    update: Dict[str, Any]


@dataclass(frozen=True)
class WriteFailure:
    """A single document the store refused during a bulk write."""
    index: int
    code: Optional[int]
    message: str
    document: Optional[Dict[str, Any]] = None


class BulkInsertError(Exception):
    """
    Raised by `ILexiconStore.insert_many` when some documents were rejected.

    Every document not listed in `failures` was inserted. Errors that cannot be
    itemized (lost connection, write concern) are never translated into this type.
    """
    def __init__(self, failures: Sequence[WriteFailure], inserted_count: int = 0):
        self.failures: List[WriteFailure] = list(failures)
        self.inserted_count = inserted_count
        super().__init__(f"{len(self.failures)} document(s) failed to insert")


class ILexiconStore(Protocol):
    """
    Port for the document store holding lexicon entries.
    Implementations:
    - MongoLexiconStore (pymongo async client)
    - InMemoryLexiconStore (Mongo query subset over a local list)

    Queries and update documents use MongoDB syntax.
    """

    async def connect(self) -> None:
        """Acquires the underlying connection. Safe to call more than once."""
        ...

    async def disconnect(self) -> None:
        """Releases the underlying connection."""
        ...

    async def find(self, query: Mapping[str, Any]) -> List[Dict[str, Any]]:
        """
        Returns every stored document matching `query`, in the store's natural order.
        """
        ...

    async def insert_many(self, documents: Sequence[Dict[str, Any]], *, ordered: bool = False) -> List[Any]:
        """
        Inserts the documents in one round trip and returns their ids.

        With ordered=False a rejected document does not stop the others.

        Raises:
            BulkInsertError: If some documents were rejected (e.g. duplicate keys).
        """
        ...

    async def bulk_update(self, operations: Sequence[UpdateOperation], *, ordered: bool = False) -> int:
        """
        Applies every operation in one round trip.

        Returns:
            The total number of documents matched by the operations' filters.
        """
        ...

    async def upsert_one(self, filter: Mapping[str, Any], update: Mapping[str, Any]) -> UpsertWriteResult:
        """Updates the first document matching `filter`, inserting one if none does."""
        ...

    async def ensure_indexes(self) -> None:
        """Creates the unique index on `key`."""
        ...

    async def health_check(self) -> bool:
        """Returns True if the underlying storage is reachable."""
        ...


__all__ = [
    "BulkInsertError",
    "ILexiconStore",
    "UpdateOperation",
    "WriteFailure",
]
