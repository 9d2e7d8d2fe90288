# tests/services/test_lexicon_store.py
import asyncio

import pytest

from tests.conftest import LEXICON_PATH


@pytest.mark.asyncio
class TestLexiconStore:

    async def test_concurrent_loads_fetch_once(self, lexicon_store, fetcher):
        """
        Scenario: Ten callers ask for the lexicon before it is loaded.
        Expected: Exactly one fetch; every caller gets the same map.
        """
        # Act
        results = await asyncio.gather(*(lexicon_store.load() for _ in range(10)))

        # Assert
        assert fetcher.calls[LEXICON_PATH] == 1
        assert all(r is results[0] for r in results)
        assert len(lexicon_store) == 6

    async def test_loaded_store_does_not_refetch(self, lexicon_store, fetcher):
        await lexicon_store.load()
        await lexicon_store.load()

        assert fetcher.calls[LEXICON_PATH] == 1

    async def test_failure_is_not_cached(self, lexicon_store, fetcher):
        """
        Scenario: The first fetch fails, the resource comes back later.
        Expected: None, store stays unloaded; the next load retries and succeeds.
        """
        fetcher.failing.add(LEXICON_PATH)

        assert await lexicon_store.load() is None
        assert not lexicon_store.is_loaded
        assert "503" in lexicon_store.last_error

        fetcher.failing.clear()
        entries = await lexicon_store.load()

        assert entries is not None
        assert fetcher.calls[LEXICON_PATH] == 2

    async def test_get_is_exact_match(self, lexicon_store):
        await lexicon_store.load()

        assert lexicon_store.get("H1").word == "אָב"
        assert lexicon_store.get("H0001") is None
        assert lexicon_store.get("G0026").transliteration == "agápē"

    async def test_get_before_load_is_none(self, lexicon_store):
        assert lexicon_store.get("H1") is None

    async def test_malformed_records_are_skipped(self, lexicon_store, fetcher):
        fetcher.documents[LEXICON_PATH]["H9999"] = "not a record"

        await lexicon_store.load()

        assert len(lexicon_store) == 6
        assert lexicon_store.get("H9999") is None

    async def test_non_object_document(self, lexicon_store, fetcher):
        fetcher.documents[LEXICON_PATH] = ["not", "a", "map"]

        assert await lexicon_store.load() is None
        assert not lexicon_store.is_loaded

    async def test_ids_in_numeric_order(self, lexicon_store):
        await lexicon_store.load()

        assert lexicon_store.ids() == ["G25", "G0026", "G1325", "G2316", "H1", "H430"]

    async def test_reset(self, lexicon_store, fetcher):
        await lexicon_store.load()
        lexicon_store.reset()

        assert not lexicon_store.is_loaded
        await lexicon_store.load()
        assert fetcher.calls[LEXICON_PATH] == 2

    async def test_usage_null_placeholder_removed(self, lexicon_store):
        await lexicon_store.load()

        assert lexicon_store.get("G25").usage == "of persons; to welcome, to entertain, to be fond of"
