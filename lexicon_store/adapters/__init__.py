# lexicon_store/adapters/__init__.py
"""
Infrastructure Adapters.

This package contains the concrete implementations of the Ports defined in
`lexicon_store.core.ports`:
- `persistence.mongo_store`: MongoDB through pymongo's asyncio client.
- `persistence.memory_store`: an in-process store with the same contract.

Dependencies point INWARD: these modules depend on `lexicon_store.core`,
but `lexicon_store.core` never imports from here.
"""
