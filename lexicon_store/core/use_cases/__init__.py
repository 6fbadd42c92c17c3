# lexicon_store/core/use_cases/__init__.py
"""
Core Use Cases (Application Logic).

This package contains the "Interactors" of the lexicon store. They orchestrate
the flow of data between the Domain Entities and the store Port.
Each use case represents one batch operation and is responsible for:
1. Validating the request batch.
2. Interacting with the store (ILexiconStore).
3. Reconciling the store's answer into a Domain result.
"""

from .find_lexicon_entries import FindLexiconEntries
from .insert_lexicon_entries import InsertLexiconEntries
from .update_lexicon_entries import UpdateLexiconEntries
from .upsert_lexicon_entries import UpsertLexiconEntries

__all__ = [
    "FindLexiconEntries",
    "InsertLexiconEntries",
    "UpdateLexiconEntries",
    "UpsertLexiconEntries",
]
