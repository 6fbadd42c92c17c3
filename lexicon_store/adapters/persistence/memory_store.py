# lexicon_store/adapters/persistence/memory_store.py
import copy
from typing import Any, Dict, Iterable, List, Mapping, Sequence, Tuple

import structlog
from bson import ObjectId
from pymongo.errors import DuplicateKeyError

from lexicon_store.core.domain.models import UpsertWriteResult
from lexicon_store.core.ports.lexicon_store import BulkInsertError, ILexiconStore, UpdateOperation, WriteFailure
from lexicon_store.shared.config import settings

logger = structlog.get_logger()

DUPLICATE_KEY_CODE = 11000
_MISSING = object()

# --- Query evaluation (MongoDB subset) ---

def _resolve(document: Mapping[str, Any], path: str) -> Any:
    """Follows a dot-notation path; returns _MISSING when any segment is absent."""
    value: Any = document
    for part in path.split("."):
        if not isinstance(value, Mapping) or part not in value:
            return _MISSING
        value = value[part]
    return value

def _candidates(value: Any) -> List[Any]:
    # An array field matches if the array itself or any element matches.
    if value is _MISSING:
        return [None]
    if isinstance(value, list):
        return [value, *value]
    return [value]

def _matches_condition(value: Any, condition: Any) -> bool:
    if isinstance(condition, Mapping) and condition and all(op.startswith("$") for op in condition):
        for op, operand in condition.items():
            if op == "$in":
                if not any(candidate in operand for candidate in _candidates(value)):
                    return False
            elif op == "$nin":
                if any(candidate in operand for candidate in _candidates(value)):
                    return False
            elif op == "$eq":
                if operand not in _candidates(value):
                    return False
            elif op == "$ne":
                if operand in _candidates(value):
                    return False
            elif op == "$exists":
                if (value is not _MISSING) != bool(operand):
                    return False
            else:
                raise ValueError(f"Unsupported query operator: {op}")
        return True

    return condition in _candidates(value)

def matches(document: Mapping[str, Any], query: Mapping[str, Any]) -> bool:
    """True if `document` satisfies the MongoDB-style `query`."""
    for field, condition in query.items():
        if field == "$or":
            if not any(matches(document, clause) for clause in condition):
                return False
        elif field == "$and":
            if not all(matches(document, clause) for clause in condition):
                return False
        elif not _matches_condition(_resolve(document, field), condition):
            return False
    return True

# --- Update application ---

def _set_path(document: Dict[str, Any], path: str, value: Any) -> None:
    parts = path.split(".")
    target = document
    for part in parts[:-1]:
        target = target.setdefault(part, {})
    target[parts[-1]] = copy.deepcopy(value)

def apply_update(document: Dict[str, Any], update: Mapping[str, Any]) -> bool:
    """Applies a `$set` update in place. Returns True if the document changed."""
    before = copy.deepcopy(document)
    for op, fields in update.items():
        if op != "$set":
            raise ValueError(f"Unsupported update operator: {op}")
        for path, value in fields.items():
            _set_path(document, path, value)
    return document != before

def _equality_fields(query: Mapping[str, Any]) -> Iterable[Tuple[str, Any]]:
    """The plain `field: value` pairs of a filter, used to seed an upserted document."""
    for field, condition in query.items():
        if field.startswith("$"):
            continue
        if isinstance(condition, Mapping) and any(op.startswith("$") for op in condition):
            continue
        yield field, condition

class InMemoryLexiconStore(ILexiconStore):
    """
    Concrete implementation of the lexicon store Port over a Python list.

    Mirrors the MongoDB behaviour the use cases depend on: the query subset
    above, a unique index on `key`, unordered bulk inserts that report each
    rejected document, and `$set` updates with dot notation.
    """

    def __init__(self, collection_name: str = settings.LEXICON_COLLECTION, db_name: str = settings.MONGO_DB_NAME):
        self.collection_name = collection_name
        self.db_name = db_name
        self.connected = False
        self._documents: List[Dict[str, Any]] = []

    def _duplicate_key_message(self, key: Any) -> str:
        return (
            f"E11000 duplicate key error collection: {self.db_name}.{self.collection_name} "
            f'index: key_1 dup key: {{ key: "{key}" }}'
        )

    def _has_key(self, key: Any) -> bool:
        return any(document.get("key") == key for document in self._documents)

    def seed(self, documents: Sequence[Mapping[str, Any]]) -> List[Any]:
        """Stores fixture documents directly. Duplicate keys raise DuplicateKeyError."""
        ids = []
        for document in documents:
            stored = copy.deepcopy(dict(document))
            stored.setdefault("_id", ObjectId())
            if self._has_key(stored.get("key")):
                raise DuplicateKeyError(self._duplicate_key_message(stored.get("key")), DUPLICATE_KEY_CODE)
            self._documents.append(stored)
            ids.append(stored["_id"])
        return ids

    def all_documents(self) -> List[Dict[str, Any]]:
        return copy.deepcopy(self._documents)

    # --- Interface Implementation ---

    async def connect(self) -> None:
        self.connected = True

    async def disconnect(self) -> None:
        self.connected = False

    async def find(self, query: Mapping[str, Any]) -> List[Dict[str, Any]]:
        return [copy.deepcopy(document) for document in self._documents if matches(document, query)]

    async def insert_many(self, documents: Sequence[Dict[str, Any]], *, ordered: bool = False) -> List[Any]:
        inserted_ids: List[Any] = []
        failures: List[WriteFailure] = []

        for index, document in enumerate(documents):
            stored = copy.deepcopy(dict(document))
            stored.setdefault("_id", ObjectId())

            if self._has_key(stored.get("key")):
                failures.append(WriteFailure(
                    index=index,
                    code=DUPLICATE_KEY_CODE,
                    message=self._duplicate_key_message(stored.get("key")),
                    document=stored,
                ))
                if ordered:
                    break
                continue

            self._documents.append(stored)
            inserted_ids.append(stored["_id"])

        if failures:
            logger.debug("memory_store_insert_rejected", collection=self.collection_name, count=len(failures))
            raise BulkInsertError(failures, inserted_count=len(inserted_ids))
        return inserted_ids

    async def bulk_update(self, operations: Sequence[UpdateOperation], *, ordered: bool = False) -> int:
        matched = 0
        for operation in operations:
            target = next((document for document in self._documents if matches(document, operation.filter)), None)
            if target is None:
                continue
            apply_update(target, operation.update)
            matched += 1
        return matched

    async def upsert_one(self, filter: Mapping[str, Any], update: Mapping[str, Any]) -> UpsertWriteResult:
        target = next((document for document in self._documents if matches(document, filter)), None)
        if target is not None:
            modified = apply_update(target, update)
            return UpsertWriteResult(matched_count=1, modified_count=int(modified))

        created: Dict[str, Any] = {"_id": ObjectId()}
        for field, value in _equality_fields(filter):
            _set_path(created, field, value)
        apply_update(created, update)

        if self._has_key(created.get("key")):
            raise DuplicateKeyError(self._duplicate_key_message(created.get("key")), DUPLICATE_KEY_CODE)

        self._documents.append(created)
        return UpsertWriteResult(upserted_id=created["_id"])

    async def ensure_indexes(self) -> None:
        # The unique index on `key` is always enforced.
        return None

    async def health_check(self) -> bool:
        return True
