# lexicon_store/core/use_cases/insert_lexicon_entries.py
from typing import Any, Dict, List, Mapping, Sequence

import structlog

from lexicon_store.core.domain.exceptions import LexiconValidationError
from lexicon_store.core.domain.keys import generate_lexicon_key
from lexicon_store.core.domain.models import InsertFailure, InsertResult, InsertSuccess, NewLexiconEntry
from lexicon_store.core.ports.lexicon_store import BulkInsertError, ILexiconStore, WriteFailure
from lexicon_store.core.use_cases.request_validation import field_problems, parse_request, require_batch
from lexicon_store.shared.observability import get_tracer

logger = structlog.get_logger()
tracer = get_tracer(__name__)

REQUIRED_FIELDS = ("name", "values", "context")
OPTIONAL_FIELDS = ("accountId",)

class InsertLexiconEntries:
    """
    Use Case: Creates new lexicon entries in one unordered bulk insert.

    Responsibilities:
    1. Validates the whole batch before touching the store (all-or-nothing).
    2. Derives each entry's key (the name for global entries, a generated key for account entries).
    3. Issues a single unordered insert so one rejected entry does not block the others.
    4. Reconciles itemized store failures into a per-entry success/failure report.
    """

    def __init__(self, store: ILexiconStore):
        self.store = store

    async def execute(self, entries: Sequence[Mapping[str, Any]]) -> InsertResult:
        """
        Inserts the entries.

        Args:
            entries: Mappings with `name`, `values`, `context` and optionally `accountId`.

        Returns:
            InsertResult listing `{name, key}` successes and `{name, message}` failures.

        Raises:
            LexiconValidationError: If any entry is malformed (nothing is written).
            Exception: Any store error that cannot be attributed to single entries, unchanged.
        """
        with tracer.start_as_current_span("use_case.insert_lexicon_entries") as span:
            # 1. Validation (fails fast, whole batch)
            requests = self._validate(entries)
            span.set_attribute("lexicon.entry_count", len(requests))
            logger.info("lexicon_insert_started", count=len(requests))

            # 2. Key derivation
            documents = [self._to_document(request) for request in requests]
            names_by_key = {
                document["key"]: request.name for document, request in zip(documents, requests)
            }

            # 3. Execution (via Store Port)
            try:
                await self.store.insert_many(documents, ordered=False)
            except BulkInsertError as e:
                if any(failure.document is None for failure in e.failures):
                    # Not attributable to individual entries
                    logger.error("lexicon_insert_failed", error=str(e), exc_info=True)
                    raise
                result = self._reconcile(documents, e.failures, names_by_key)
                logger.warning(
                    "lexicon_insert_partial_failure",
                    succeeded=len(result.successes),
                    failed=len(result.failures),
                )
                return result
            except Exception as e:
                logger.error("lexicon_insert_failed", error=str(e), exc_info=True)
                raise

            logger.info("lexicon_insert_success", count=len(documents))
            return InsertResult(successes=[
                InsertSuccess(name=names_by_key[document["key"]], key=document["key"])
                for document in documents
            ])

    def _validate(self, entries: Sequence[Mapping[str, Any]]) -> List[NewLexiconEntry]:
        batch = require_batch(entries, "lexicon entries")

        for entry in batch:
            missing, unknown = field_problems(entry, REQUIRED_FIELDS, OPTIONAL_FIELDS)
            if missing:
                raise LexiconValidationError(
                    f"lexicon entry with name {entry.get('name')} is missing the following required keys: {', '.join(missing)}"
                )
            if unknown:
                raise LexiconValidationError(
                    f"lexicon entry with name {entry.get('name')} contains the following unknown keys: {', '.join(unknown)}"
                )

        return [
            parse_request(NewLexiconEntry, entry, f"lexicon entry with name {entry.get('name')}")
            for entry in batch
        ]

    def _to_document(self, request: NewLexiconEntry) -> Dict[str, Any]:
        if request.account_id:
            key = generate_lexicon_key(request.account_id, request.name)
        else:
            key = request.name

        return {
            "key": key,
            "values": dict(request.values),
            "context": list(request.context),
            "accountId": request.account_id,
        }

    def _reconcile(
        self,
        documents: List[Dict[str, Any]],
        failures: List[WriteFailure],
        names_by_key: Dict[str, str],
    ) -> InsertResult:
        """Every document the store did not report as failed was inserted."""
        failed_indexes = {failure.index for failure in failures}

        successes = [
            InsertSuccess(name=names_by_key[document["key"]], key=document["key"])
            for index, document in enumerate(documents)
            if index not in failed_indexes
        ]
        rejected = []
        for failure in failures:
            key = failure.document.get("key")
            rejected.append(InsertFailure(name=names_by_key.get(key, key), message=failure.message))

        return InsertResult(successes=successes, failures=rejected)
