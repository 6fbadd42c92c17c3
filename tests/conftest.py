# tests/conftest.py
import random
import string
import uuid
from unittest.mock import AsyncMock, MagicMock

import pytest
from bson import ObjectId

from lexicon_store.adapters.persistence.memory_store import InMemoryLexiconStore
from lexicon_store.core.domain.languages import supported_contexts, supported_languages
from lexicon_store.core.ports.lexicon_store import ILexiconStore
from lexicon_store.shared.container import Container

def random_word(length: int = 20) -> str:
    return "".join(random.choices(string.ascii_lowercase, k=length))

def random_sentence() -> str:
    words = [random_word(random.randint(2, 9)) for _ in range(random.randint(3, 8))]
    return " ".join(words).capitalize() + "."

def random_values() -> dict:
    return {locale: random_sentence() for locale in supported_languages()}

def random_contexts() -> list:
    contexts = supported_contexts()
    return random.sample(contexts, random.randint(1, len(contexts)))

@pytest.fixture
def account_id():
    """A tenant id shaped like the ObjectId hex strings used in production."""
    return str(ObjectId())

@pytest.fixture
def entry_request(account_id):
    """Factory for a valid insert request; pass overrides as keyword arguments."""
    def _make(**overrides):
        request = {
            "accountId": account_id,
            "name": random_word(),
            "values": random_values(),
            "context": random_contexts(),
        }
        request.update(overrides)
        return request
    return _make

@pytest.fixture
def update_request(account_id):
    """Factory for a valid update request."""
    def _make(**overrides):
        request = {
            "key": random_word(),
            "values": random_values(),
            "context": random_contexts(),
            "accountId": account_id,
        }
        request.update(overrides)
        return request
    return _make

@pytest.fixture
def db_document(account_id):
    """Factory for a stored lexicon document belonging to `account_id`."""
    def _make(**overrides):
        document = {
            "_id": ObjectId(),
            "key": f"{random_word()}-{account_id}-{uuid.uuid4()}",
            "values": random_values(),
            "context": random_contexts(),
            "accountId": account_id,
        }
        document.update(overrides)
        return document
    return _make

@pytest.fixture(scope="function")
def memory_store():
    """An empty in-memory store with the production unique index on `key`."""
    return InMemoryLexiconStore(collection_name="lexicon_buscompany", db_name="lexicons_test")

@pytest.fixture(scope="function")
def mock_store():
    """Returns a mock store for fault injection."""
    store = MagicMock(spec=ILexiconStore)
    # Async methods must be mocked with AsyncMock
    store.connect = AsyncMock()
    store.disconnect = AsyncMock()
    store.find = AsyncMock(return_value=[])
    store.insert_many = AsyncMock(return_value=[])
    store.bulk_update = AsyncMock(return_value=0)
    store.upsert_one = AsyncMock()
    store.ensure_indexes = AsyncMock()
    store.health_check = AsyncMock(return_value=True)
    return store

@pytest.fixture(scope="function")
def container(memory_store):
    """
    Sets up the Dependency Injection Container for testing.
    The document store provider is overridden with the in-memory store.
    """
    container = Container()
    container.lexicon_store.override(memory_store)

    yield container

    container.lexicon_store.reset_override()
