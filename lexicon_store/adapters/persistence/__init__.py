# lexicon_store/adapters/persistence/__init__.py
"""
Persistence Adapters.

This package implements the store port defined in the Core Domain.
It handles the translation between the use cases' requests and the
underlying document store.

Components:
- MongoLexiconStore: Concrete implementation of ILexiconStore using MongoDB.
- InMemoryLexiconStore: Implementation over a local list, for development and tests.
"""

from .memory_store import InMemoryLexiconStore
from .mongo_store import MongoLexiconStore

__all__ = [
    "InMemoryLexiconStore",
    "MongoLexiconStore",
]
