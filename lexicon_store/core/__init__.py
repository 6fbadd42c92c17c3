# lexicon_store/core/__init__.py
"""
Core Domain Layer.

This package contains the pure business logic and entities of the lexicon store.
It follows the Hexagonal Architecture (Ports & Adapters) pattern:
- No dependencies on infrastructure (MongoDB, in-memory fakes).
- Defines the store Interface (Port) that the Infrastructure layer must implement.
"""
