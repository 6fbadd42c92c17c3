# lexicon_store/core/use_cases/find_lexicon_entries.py
from typing import Any, Dict, List, Optional, Sequence

import structlog

from lexicon_store.core.domain.languages import resolve_locale, supported_contexts
from lexicon_store.core.domain.models import FindResult, LexiconEntry
from lexicon_store.core.ports.lexicon_store import ILexiconStore
from lexicon_store.shared.observability import get_tracer

logger = structlog.get_logger()
tracer = get_tracer(__name__)

def build_find_query(
    key: Optional[str] = None,
    account_ids: Sequence[str] = (),
    context: Optional[Sequence[str]] = None,
    account_only: bool = False,
    keys: Optional[Sequence[str]] = None,
) -> Dict[str, Any]:
    """
    Builds the store query for a lexicon lookup.

    Global entries (accountId '') are always in scope unless `account_only` is set,
    in which case only the given accounts are searched and the context filter is skipped.
    """
    query: Dict[str, Any] = {}
    if account_only:
        query["accountId"] = {"$in": list(account_ids)}
    else:
        query["accountId"] = {"$in": ["", *account_ids]}
        query["context"] = {"$in": list(context) if context is not None else supported_contexts()}

    if key:
        query["key"] = key
    elif keys is not None:
        query["key"] = {"$in": list(keys)}
    return query

def requested_locales(language: Optional[str], languages: Optional[Sequence[str]]) -> Optional[List[str]]:
    """
    Returns the supported locales asked for, or None when no language filter applies.
    Unsupported codes are dropped.
    """
    if not language and not languages:
        return None

    requested = [language] if language else []
    requested.extend(languages or [])

    locales: List[str] = []
    for code in requested:
        locale = resolve_locale(code)
        if locale and locale not in locales:
            locales.append(locale)
    return locales

class FindLexiconEntries:
    """
    Use Case: Looks up lexicon entries visible to a set of accounts.
    Optionally narrows each entry's `values` to the requested languages.
    """

    def __init__(self, store: ILexiconStore):
        self.store = store

    async def execute(
        self,
        key: Optional[str] = None,
        account_ids: Optional[Sequence[str]] = None,
        context: Optional[Sequence[str]] = None,
        account_only: bool = False,
        keys: Optional[Sequence[str]] = None,
        language: Optional[str] = None,
        languages: Optional[Sequence[str]] = None,
    ) -> FindResult:
        with tracer.start_as_current_span("use_case.find_lexicon_entries") as span:
            query = build_find_query(
                key=key,
                account_ids=account_ids or [],
                context=context,
                account_only=account_only,
                keys=keys,
            )
            span.set_attribute("lexicon.account_only", account_only)
            logger.debug("lexicon_find_started", query=query)

            documents = await self.store.find(query)
            lexicons = [LexiconEntry.from_document(document) for document in documents]

            locales = requested_locales(language, languages)
            if locales is not None:
                for lexicon in lexicons:
                    lexicon.values = {
                        locale: text for locale, text in lexicon.values.items() if locale in locales
                    }

            span.set_attribute("lexicon.result_count", len(lexicons))
            logger.info("lexicon_find_success", count=len(lexicons))
            return FindResult(lexicons=lexicons)
