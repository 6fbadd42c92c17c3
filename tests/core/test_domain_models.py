# tests/core/test_domain_models.py
import json
import uuid

import pytest
from bson import ObjectId
from pydantic import ValidationError

from lexicon_store.core.domain.exceptions import (
    DomainError,
    IncompleteLexiconKeysError,
    LexiconEntriesNotFoundError,
    LexiconIntegrityError,
)
from lexicon_store.core.domain.keys import generate_lexicon_key, key_belongs_to_account
from lexicon_store.core.domain.models import (
    LexiconEntry,
    LexiconEntryUpdate,
    LexiconEntryUpsert,
    NewLexiconEntry,
    UpsertWriteResult,
)

# --- Keys ---

def test_generate_key_without_field():
    key = generate_lexicon_key("acc1", "greeting")

    name, account_id, suffix = key.split("-", 2)
    assert name == "greeting"
    assert account_id == "acc1"
    assert str(uuid.UUID(suffix)) == suffix

def test_generate_key_with_field():
    key = generate_lexicon_key("acc1", "route", "title")

    assert key.startswith("route-title-acc1-")

def test_generate_key_token_count():
    assert len(generate_lexicon_key("acct1", "widget", "label").split("-")) == 8

def test_generate_key_is_unique_per_call():
    assert generate_lexicon_key("acc1", "greeting") != generate_lexicon_key("acc1", "greeting")

def test_key_belongs_to_account():
    account_id = str(ObjectId())
    key = generate_lexicon_key(account_id, "greeting")

    assert key_belongs_to_account(key, account_id)
    assert not key_belongs_to_account(key, str(ObjectId()))
    assert not key_belongs_to_account("greeting", account_id)

def test_key_belongs_to_account_requires_whole_component():
    """A prefix of the account id embedded in a longer component does not count."""
    assert not key_belongs_to_account("greeting-acc12-x", "acc1")

# --- Entities ---

def test_lexicon_entry_from_document():
    object_id = ObjectId()
    document = {
        "_id": object_id,
        "key": "greeting",
        "values": {"en-us": "Hello"},
        "context": ["app"],
        "accountId": "",
    }

    entry = LexiconEntry.from_document(document)

    assert entry.id == str(object_id)
    assert entry.account_id == ""
    assert entry.to_document() == {**document, "_id": str(object_id)}

def test_lexicon_entry_null_account_is_global():
    entry = LexiconEntry.from_document({"key": "greeting", "accountId": None})

    assert entry.account_id == ""
    assert "_id" not in entry.to_document()

# --- Requests ---

def test_new_entry_rejects_empty_values():
    with pytest.raises(ValidationError, match="at least one translated value is required"):
        NewLexiconEntry(name="greeting", values={}, context=["app"])

def test_new_entry_rejects_unsupported_locale():
    with pytest.raises(ValidationError, match="unsupported languages: it-it"):
        NewLexiconEntry(name="greeting", values={"it-it": "Ciao"}, context=["app"])

def test_new_entry_rejects_unsupported_context():
    with pytest.raises(ValidationError, match="unsupported contexts: mobile"):
        NewLexiconEntry(name="greeting", values={"en-us": "Hi"}, context=["app", "mobile"])

def test_new_entry_rejects_unknown_fields():
    with pytest.raises(ValidationError):
        NewLexiconEntry(name="greeting", values={"en-us": "Hi"}, context=["app"], extra=True)

def test_update_allows_partial_payload():
    update = LexiconEntryUpdate(key="greeting")

    assert update.values is None
    assert update.context is None
    assert update.account_id == ""

def test_upsert_document_uses_stored_field_names():
    upsert = LexiconEntryUpsert.model_validate({
        "key": "greeting-acc1-x",
        "values": {"fr-fr": "Bonjour"},
        "context": ["vue"],
        "accountId": "acc1",
    })

    assert upsert.to_document() == {
        "key": "greeting-acc1-x",
        "values": {"fr-fr": "Bonjour"},
        "context": ["vue"],
        "accountId": "acc1",
    }

def test_upsert_write_result_stringifies_object_id():
    object_id = ObjectId()

    assert UpsertWriteResult(upserted_id=object_id).upserted_id == str(object_id)

# --- Exceptions ---

def test_not_found_error_lists_keys_as_json():
    error = LexiconEntriesNotFoundError(["a", "b"])

    assert isinstance(error, DomainError)
    assert error.keys == ["a", "b"]
    header, body = error.message.split("\n", 1)
    assert header == "The following lexicon entries do not exist: "
    assert json.loads(body) == [{"key": "a"}, {"key": "b"}]

def test_incomplete_keys_error_lists_entries():
    entries = [{"key": "greeting", "accountId": "acc1"}]

    error = IncompleteLexiconKeysError(entries)

    assert error.entries == entries
    assert error.message.startswith("The following lexicon entries have incomplete lexicon keys: \n")
    assert json.loads(error.message.split("\n", 1)[1]) == entries

def test_integrity_error_message():
    error = LexiconIntegrityError(expected=3, matched=2)

    assert str(error).startswith("Unexpected error")
    assert "expected 3, matched 2" in str(error)
