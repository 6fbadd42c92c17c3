# lexicon_store/shared/container.py
from typing import Union

from dependency_injector import containers, providers

from lexicon_store.adapters.persistence.memory_store import InMemoryLexiconStore
from lexicon_store.adapters.persistence.mongo_store import MongoLexiconStore
from lexicon_store.core.use_cases.find_lexicon_entries import FindLexiconEntries
from lexicon_store.core.use_cases.insert_lexicon_entries import InsertLexiconEntries
from lexicon_store.core.use_cases.update_lexicon_entries import UpdateLexiconEntries
from lexicon_store.core.use_cases.upsert_lexicon_entries import UpsertLexiconEntries
from lexicon_store.shared.config import StorageBackend, settings

def storage_backend_name(backend: Union[StorageBackend, str]) -> str:
    """Normalizes the configured backend (enum or raw string) to a Selector key."""
    return StorageBackend(backend).value

class Container(containers.DeclarativeContainer):
    """
    Dependency Injection Container.

    This declarative container defines the assembly instructions for the lexicon store.
    """

    # 1. Configuration
    # We load settings directly, but wrapping them allows overriding in tests.
    config = providers.Configuration(pydantic_settings=[settings])

    # 2. Gateways (Infrastructure Adapters)

    # Document store (Singleton: one client / connection pool shared)
    lexicon_store = providers.Selector(
        providers.Callable(storage_backend_name, config.STORAGE_BACKEND),
        mongo=providers.Singleton(
            MongoLexiconStore,
            url=config.MONGO_URL,
            db_name=config.MONGO_DB_NAME,
            collection_name=config.LEXICON_COLLECTION,
        ),
        memory=providers.Singleton(
            InMemoryLexiconStore,
            collection_name=config.LEXICON_COLLECTION,
            db_name=config.MONGO_DB_NAME,
        ),
    )

    # 3. Use Cases (Application Logic)

    # Factory: New instance created for every call (stateless logic),
    # but with the Singleton store injected.

    insert_lexicon_entries = providers.Factory(
        InsertLexiconEntries,
        store=lexicon_store,
    )

    update_lexicon_entries = providers.Factory(
        UpdateLexiconEntries,
        store=lexicon_store,
    )

    upsert_lexicon_entries = providers.Factory(
        UpsertLexiconEntries,
        store=lexicon_store,
    )

    find_lexicon_entries = providers.Factory(
        FindLexiconEntries,
        store=lexicon_store,
    )

# Instantiate the container for global access
container = Container()
