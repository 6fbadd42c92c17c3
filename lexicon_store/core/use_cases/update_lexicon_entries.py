# lexicon_store/core/use_cases/update_lexicon_entries.py
import asyncio
from typing import Any, Dict, List, Mapping, Sequence

import structlog

from lexicon_store.core.domain.exceptions import (
    DomainError,
    LexiconEntriesNotFoundError,
    LexiconIntegrityError,
    LexiconValidationError,
)
from lexicon_store.core.domain.models import LexiconEntry, LexiconEntryUpdate
from lexicon_store.core.ports.lexicon_store import ILexiconStore, UpdateOperation
from lexicon_store.core.use_cases.request_validation import field_problems, parse_request, require_batch
from lexicon_store.shared.observability import get_tracer

logger = structlog.get_logger()
tracer = get_tracer(__name__)

REQUIRED_FIELDS = ("key",)
OPTIONAL_FIELDS = ("values", "context", "accountId")

def identifier_of(update: LexiconEntryUpdate) -> Dict[str, str]:
    """The `{key, accountId}` pair that addresses one stored entry."""
    return {"key": update.key, "accountId": update.account_id}

def build_update_instructions(update: LexiconEntryUpdate) -> Dict[str, Any]:
    """
    Builds the `$set` document for one update request.

    Only the supplied locales are written (`values.<locale>`), so locales the
    request does not mention keep their stored text. A supplied `context`
    replaces the stored list. Absent fields are never written as null.
    """
    instructions: Dict[str, Any] = {}
    for locale, text in (update.values or {}).items():
        if text is None:
            continue
        instructions[f"values.{locale}"] = text
    if update.context is not None:
        instructions["context"] = list(update.context)

    if not instructions:
        # $set may not be empty; rewriting the key keeps the operation a matched no-op.
        instructions["key"] = update.key
    return instructions

class UpdateLexiconEntries:
    """
    Use Case: Applies partial updates to existing lexicon entries.

    Responsibilities:
    1. Validates the whole batch before touching the store.
    2. Confirms every targeted `{key, accountId}` exists; otherwise nothing is updated.
    3. Merges the supplied fields in a single unordered bulk update.
    4. Checks the store matched every request, then re-reads the updated entries.
    """

    def __init__(self, store: ILexiconStore):
        self.store = store

    async def execute(self, updates: Sequence[Mapping[str, Any]]) -> List[LexiconEntry]:
        """
        Updates the entries.

        Args:
            updates: Mappings with `key` and optionally `values`, `context`, `accountId`.

        Returns:
            The entries as stored after the update.

        Raises:
            LexiconValidationError: If any request is malformed.
            LexiconEntriesNotFoundError: If any targeted entry does not exist.
            LexiconIntegrityError: If the store matched fewer entries than requested.
        """
        with tracer.start_as_current_span("use_case.update_lexicon_entries") as span:
            # 1. Validation
            requests = self._validate(updates)
            span.set_attribute("lexicon.entry_count", len(requests))
            logger.info("lexicon_update_started", count=len(requests))

            identifiers = [identifier_of(request) for request in requests]

            try:
                # 2. Existence check (runs alongside connection acquisition)
                existing, _ = await asyncio.gather(
                    self.store.find({"$or": identifiers}),
                    self.store.connect(),
                )
                self._ensure_all_exist(requests, existing)

                # 3. Execution (one bulk update, each request with its own filter)
                operations = [
                    UpdateOperation(
                        filter=identifier_of(request),
                        update={"$set": build_update_instructions(request)},
                    )
                    for request in requests
                ]
                matched = await self.store.bulk_update(operations, ordered=False)

                # 4. Postcondition
                if matched != len(requests):
                    logger.error("lexicon_update_match_mismatch", expected=len(requests), matched=matched)
                    raise LexiconIntegrityError(expected=len(requests), matched=matched)

                # 5. Read-after-write
                documents = await self.store.find({"$or": identifiers})

            except DomainError:
                raise
            except Exception as e:
                logger.error("lexicon_update_failed", error=str(e), exc_info=True)
                raise

            logger.info("lexicon_update_success", count=len(requests))
            return [LexiconEntry.from_document(document) for document in documents]

    def _validate(self, updates: Sequence[Mapping[str, Any]]) -> List[LexiconEntryUpdate]:
        batch = require_batch(updates, "lexicon entry updates")

        for update in batch:
            missing, unknown = field_problems(update, REQUIRED_FIELDS, OPTIONAL_FIELDS)
            if missing:
                raise LexiconValidationError('lexicon update request is missing a "key"')
            if unknown:
                raise LexiconValidationError(
                    f"lexicon update request with key {update['key']} contains the following unknown properties: {', '.join(unknown)}"
                )

        return [
            parse_request(LexiconEntryUpdate, update, f"lexicon update request with key {update['key']}")
            for update in batch
        ]

    def _ensure_all_exist(self, requests: List[LexiconEntryUpdate], existing: List[Dict[str, Any]]) -> None:
        found = {(document.get("key"), document.get("accountId", "")) for document in existing}
        missing = [
            request.key for request in requests
            if (request.key, request.account_id) not in found
        ]
        if missing:
            logger.warning("lexicon_update_missing_entries", keys=missing)
            raise LexiconEntriesNotFoundError(missing)
