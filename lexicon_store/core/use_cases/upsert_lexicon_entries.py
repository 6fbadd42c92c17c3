# lexicon_store/core/use_cases/upsert_lexicon_entries.py
import asyncio
from typing import Any, List, Mapping, Sequence

import structlog

from lexicon_store.core.domain.exceptions import IncompleteLexiconKeysError, LexiconValidationError
from lexicon_store.core.domain.keys import key_belongs_to_account
from lexicon_store.core.domain.models import (
    LexiconEntryUpsert,
    SettledUpsert,
    UpsertStatus,
    UpsertWriteResult,
)
from lexicon_store.core.ports.lexicon_store import ILexiconStore
from lexicon_store.core.use_cases.request_validation import field_problems, parse_request, require_batch
from lexicon_store.shared.observability import get_tracer

logger = structlog.get_logger()
tracer = get_tracer(__name__)

REQUIRED_FIELDS = ("key", "values", "context")
OPTIONAL_FIELDS = ("accountId",)

def check_invalid_entries(requests: Sequence[LexiconEntryUpsert]) -> None:
    """Rejects the batch if any account entry's key does not carry its accountId."""
    invalid = [
        {"key": request.key, "accountId": request.account_id}
        for request in requests
        if request.account_id and not key_belongs_to_account(request.key, request.account_id)
    ]
    if invalid:
        logger.warning("lexicon_upsert_incomplete_keys", keys=[entry["key"] for entry in invalid])
        raise IncompleteLexiconKeysError(invalid)

class UpsertLexiconEntries:
    """
    Use Case: Creates or overwrites lexicon entries, one upsert per entry.

    Unlike UpdateLexiconEntries, the full entry is the write payload:
    `values` and `context` are replaced, not merged.
    Every upsert is settled independently; a failing upsert is reported, not raised.
    """

    def __init__(self, store: ILexiconStore):
        self.store = store

    async def execute(self, entries: Sequence[Mapping[str, Any]]) -> List[SettledUpsert]:
        """
        Upserts the entries.

        Args:
            entries: Mappings with `key`, `values`, `context` and optionally `accountId`.

        Returns:
            One SettledUpsert per entry, in input order.

        Raises:
            LexiconValidationError: If any entry is malformed.
            IncompleteLexiconKeysError: If an account entry's key lacks its accountId.
        """
        with tracer.start_as_current_span("use_case.upsert_lexicon_entries") as span:
            # 1. Validation
            requests = self._validate(entries)
            check_invalid_entries(requests)
            span.set_attribute("lexicon.entry_count", len(requests))
            logger.info("lexicon_upsert_started", count=len(requests))

            # 2. Execution (independent upserts, settled together)
            outcomes = await asyncio.gather(
                *(self._upsert(request) for request in requests),
                return_exceptions=True,
            )

            # 3. Settlement
            settled: List[SettledUpsert] = []
            for request, outcome in zip(requests, outcomes):
                if isinstance(outcome, BaseException):
                    logger.warning("lexicon_upsert_rejected", key=request.key, error=str(outcome))
                    settled.append(SettledUpsert(
                        key=request.key,
                        status=UpsertStatus.REJECTED,
                        reason=str(outcome),
                    ))
                else:
                    settled.append(SettledUpsert(
                        key=request.key,
                        status=UpsertStatus.FULFILLED,
                        value=outcome,
                    ))

            rejected = sum(1 for item in settled if item.status is UpsertStatus.REJECTED)
            span.set_attribute("lexicon.rejected_count", rejected)
            logger.info("lexicon_upsert_settled", fulfilled=len(settled) - rejected, rejected=rejected)
            return settled

    async def _upsert(self, request: LexiconEntryUpsert) -> UpsertWriteResult:
        return await self.store.upsert_one(
            {"key": request.key, "accountId": request.account_id},
            {"$set": request.to_document()},
        )

    def _validate(self, entries: Sequence[Mapping[str, Any]]) -> List[LexiconEntryUpsert]:
        batch = require_batch(entries, "lexicon entries")

        for entry in batch:
            missing, unknown = field_problems(entry, REQUIRED_FIELDS, OPTIONAL_FIELDS)
            if missing:
                raise LexiconValidationError(
                    f"lexicon entry with key {entry.get('key')} is missing the following required keys: {', '.join(missing)}"
                )
            if unknown:
                raise LexiconValidationError(
                    f"lexicon entry with key {entry.get('key')} contains the following unknown keys: {', '.join(unknown)}"
                )

        return [
            parse_request(LexiconEntryUpsert, entry, f"lexicon entry with key {entry.get('key')}")
            for entry in batch
        ]
