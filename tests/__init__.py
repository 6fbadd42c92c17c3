# tests/__init__.py
"""
Test Suite for the Lexicon Store.

Organization:
- `core`: Use Cases, Domain Models and the language registry, against the in-memory store or a mocked port.
- `adapters`: The in-memory store and the MongoDB adapter (pymongo client mocked).
- `test_service_smoke`: End-to-end flow through the public batch operations.
"""
