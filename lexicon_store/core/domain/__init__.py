# lexicon_store/core/domain/__init__.py
"""
Domain Entities and Value Objects.

This package defines the core data structures of the lexicon store:
the language/context registry, lexicon key generation, the request and
result models, and the exception taxonomy. None of it performs I/O.
"""
