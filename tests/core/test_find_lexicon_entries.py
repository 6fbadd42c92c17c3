# tests/core/test_find_lexicon_entries.py
import pytest
from bson import ObjectId

from lexicon_store.core.domain.languages import supported_contexts
from lexicon_store.core.use_cases.find_lexicon_entries import (
    FindLexiconEntries,
    build_find_query,
    requested_locales,
)

def test_query_includes_global_entries_and_all_contexts():
    assert build_find_query(account_ids=["acc1"]) == {
        "accountId": {"$in": ["", "acc1"]},
        "context": {"$in": supported_contexts()},
    }

def test_query_account_only_skips_context():
    assert build_find_query(account_ids=["acc1", "acc2"], context=["vue"], account_only=True) == {
        "accountId": {"$in": ["acc1", "acc2"]},
    }

def test_query_key_takes_precedence_over_keys():
    query = build_find_query(key="greeting", keys=["a", "b"], context=["app"])

    assert query["key"] == "greeting"
    assert query["context"] == {"$in": ["app"]}

def test_query_keys():
    assert build_find_query(keys=["a", "b"])["key"] == {"$in": ["a", "b"]}

def test_query_empty_keys_matches_nothing():
    assert build_find_query(keys=[])["key"] == {"$in": []}
    assert "key" not in build_find_query(keys=None)

def test_requested_locales():
    assert requested_locales(None, None) is None
    assert requested_locales(None, []) is None
    assert requested_locales("fr", None) == ["fr-fr"]
    assert requested_locales("de", ["de-de", "nl", "it"]) == ["de-de", "nl-nl"]
    assert requested_locales("it", None) == []

@pytest.fixture
def seeded(memory_store, db_document, account_id):
    """A global entry, an entry of `account_id` and an entry of another account."""
    documents = {
        "global": db_document(key="greeting", accountId="", context=["app"]),
        "own": db_document(context=["vue"]),
        "other": db_document(accountId=str(ObjectId()), context=["app", "vue"]),
    }
    memory_store.seed(list(documents.values()))
    return documents

@pytest.mark.asyncio
class TestFindLexiconEntries:

    async def test_account_sees_global_and_own_entries(self, container, seeded, account_id):
        """
        Scenario: An account looks up every lexicon visible to it.
        Expected: Global entries and its own entries, never another account's.
        """
        # Arrange
        use_case = container.find_lexicon_entries()

        # Act
        result = await use_case.execute(account_ids=[account_id])

        # Assert
        keys = {entry.key for entry in result.lexicons}
        assert keys == {seeded["global"]["key"], seeded["own"]["key"]}

    async def test_without_accounts_only_global_entries(self, container, seeded):
        use_case = container.find_lexicon_entries()

        result = await use_case.execute()

        assert [entry.key for entry in result.lexicons] == ["greeting"]

    async def test_account_only(self, container, seeded, account_id):
        use_case = container.find_lexicon_entries()

        result = await use_case.execute(account_ids=[account_id], account_only=True)

        assert [entry.key for entry in result.lexicons] == [seeded["own"]["key"]]

    async def test_context_filter(self, container, seeded, account_id):
        use_case = container.find_lexicon_entries()

        result = await use_case.execute(account_ids=[account_id], context=["app"])

        assert [entry.key for entry in result.lexicons] == ["greeting"]

    async def test_key_filters(self, container, seeded, account_id):
        use_case = container.find_lexicon_entries()

        by_key = await use_case.execute(key=seeded["own"]["key"], account_ids=[account_id])
        by_keys = await use_case.execute(
            keys=["greeting", seeded["other"]["key"]],
            account_ids=[account_id],
        )

        assert [entry.key for entry in by_key.lexicons] == [seeded["own"]["key"]]
        assert [entry.key for entry in by_keys.lexicons] == ["greeting"]

    async def test_language_projection(self, container, seeded):
        """
        Scenario: A single language is requested.
        Expected: Each entry's values only contain that locale.
        """
        use_case = container.find_lexicon_entries()

        result = await use_case.execute(key="greeting", language="fr")

        assert result.lexicons[0].values == {"fr-fr": seeded["global"]["values"]["fr-fr"]}

    async def test_languages_projection_drops_unsupported_codes(self, container, seeded):
        use_case = container.find_lexicon_entries()

        result = await use_case.execute(key="greeting", languages=["de", "nl-nl", "pt"])

        assert set(result.lexicons[0].values) == {"de-de", "nl-nl"}

    async def test_empty_key_set_returns_nothing(self, container, seeded, account_id):
        """
        Scenario: A caller asks for an empty set of keys.
        Expected: No entries, not the whole visible scope.
        """
        use_case = container.find_lexicon_entries()

        result = await use_case.execute(keys=[], account_ids=[account_id])

        assert result.lexicons == []

    async def test_no_match(self, container, seeded):
        use_case = container.find_lexicon_entries()

        result = await use_case.execute(key="missing")

        assert result.lexicons == []

    async def test_store_receives_built_query(self, mock_store):
        use_case = FindLexiconEntries(mock_store)

        await use_case.execute(key="greeting", account_ids=["acc1"], context=["app"])

        mock_store.find.assert_awaited_once_with({
            "accountId": {"$in": ["", "acc1"]},
            "context": {"$in": ["app"]},
            "key": "greeting",
        })
