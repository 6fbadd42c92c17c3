# lexicon_store/service.py
"""
Public batch operations of the lexicon store.

Each function takes the store handle explicitly and runs one use case against it:

    store = container.lexicon_store()
    result = await insert_many(store, [{"name": "greeting", "values": {"en-us": "Hello"}, "context": ["app"]}])
"""

from typing import Any, List, Mapping, Optional, Sequence

from lexicon_store.core.domain.models import FindResult, InsertResult, LexiconEntry, SettledUpsert
from lexicon_store.core.ports.lexicon_store import ILexiconStore
from lexicon_store.core.use_cases.find_lexicon_entries import FindLexiconEntries
from lexicon_store.core.use_cases.insert_lexicon_entries import InsertLexiconEntries
from lexicon_store.core.use_cases.update_lexicon_entries import UpdateLexiconEntries
from lexicon_store.core.use_cases.upsert_lexicon_entries import UpsertLexiconEntries

async def insert_many(store: ILexiconStore, entries: Sequence[Mapping[str, Any]]) -> InsertResult:
    """Creates lexicon entries; duplicate keys are reported in `failures`."""
    return await InsertLexiconEntries(store).execute(entries)

async def update_many(store: ILexiconStore, updates: Sequence[Mapping[str, Any]]) -> List[LexiconEntry]:
    """Merges partial updates into existing entries and returns them as stored."""
    return await UpdateLexiconEntries(store).execute(updates)

async def create_or_update_many(store: ILexiconStore, entries: Sequence[Mapping[str, Any]]) -> List[SettledUpsert]:
    """Upserts full entries; returns one settled outcome per entry."""
    return await UpsertLexiconEntries(store).execute(entries)

async def find(
    store: ILexiconStore,
    key: Optional[str] = None,
    account_ids: Optional[Sequence[str]] = None,
    context: Optional[Sequence[str]] = None,
    account_only: bool = False,
    keys: Optional[Sequence[str]] = None,
    language: Optional[str] = None,
    languages: Optional[Sequence[str]] = None,
) -> FindResult:
    """Returns the entries visible to `account_ids` (plus global entries unless `account_only`)."""
    return await FindLexiconEntries(store).execute(
        key=key,
        account_ids=account_ids,
        context=context,
        account_only=account_only,
        keys=keys,
        language=language,
        languages=languages,
    )
