# lexicon_store/core/ports/__init__.py
"""
Core Ports (Interfaces).

This package defines the Protocols that the Infrastructure Adapters must
implement. They let the use cases talk to the document store without
knowing whether it is MongoDB or an in-memory fake.
"""

from .lexicon_store import BulkInsertError, ILexiconStore, UpdateOperation, WriteFailure

__all__ = [
    "BulkInsertError",
    "ILexiconStore",
    "UpdateOperation",
    "WriteFailure",
]
