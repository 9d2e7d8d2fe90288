# tests/services/test_dictionary_store.py
import asyncio

import pytest

from interlinear.core.domain.models import SourceLanguage
from interlinear.services.dictionary_store import split_definition_fragments
from tests.conftest import DICTIONARY_PATH


class TestSplitDefinitionFragments:

    def test_first_three_are_definition(self):
        definition, usage = split_definition_fragments(["a", "b", "c", "d", "e"], 3)

        assert definition == "a; b; c"
        assert usage == "d; e"

    def test_empty_and_null_fragments_are_dropped(self):
        assert split_definition_fragments(["a", None, "", "null", "b"], 3) == ("a; b", "")

    def test_non_list(self):
        assert split_definition_fragments(None, 3) == ("", "")
        assert split_definition_fragments("single", 3) == ("single", "")


@pytest.mark.asyncio
class TestDictionaryStore:

    async def test_entries_under_both_keys(self, dictionary_store):
        """
        Scenario: A record with bare identifier '1' and tag 'hebrew'.
        Expected: Reachable as 'H1' and 'H0001', same object.
        """
        assert await dictionary_store.load() is True

        short = dictionary_store.get("H1")
        padded = dictionary_store.get("H0001")

        assert short is not None
        assert short is padded
        assert short.word == "pai"
        assert short.language is SourceLanguage.HEBREW
        assert short.definition == "pai de um indivíduo; antepassado; fundador"
        assert short.usage == "de Deus como pai do seu povo"

    async def test_len_counts_distinct_entries(self, dictionary_store):
        await dictionary_store.load()

        assert len(dictionary_store) == 3

    async def test_lookup_probes_both_forms(self, dictionary_store):
        await dictionary_store.load()

        assert dictionary_store.lookup("G02316").word == "Deus"
        assert dictionary_store.lookup("[G2316]").word == "Deus"
        assert dictionary_store.lookup("G9") is None

    async def test_concurrent_loads_fetch_once(self, dictionary_store, fetcher):
        results = await asyncio.gather(*(dictionary_store.load() for _ in range(5)))

        assert results == [True] * 5
        assert fetcher.calls[DICTIONARY_PATH] == 1

    async def test_failure_then_retry(self, dictionary_store, fetcher):
        fetcher.failing.add(DICTIONARY_PATH)
        assert await dictionary_store.load() is False
        assert not dictionary_store.is_loaded

        fetcher.failing.clear()
        assert await dictionary_store.load() is True
        assert fetcher.calls[DICTIONARY_PATH] == 2

    async def test_bad_records_skipped(self, dictionary_store, fetcher):
        fetcher.documents[DICTIONARY_PATH]["entries"] += [
            {"identifier": "5", "language_tag": "aramaic", "term": "x"},
            {"identifier": "abc", "language_tag": "greek", "term": "y"},
            "not a record",
        ]

        await dictionary_store.load()

        assert len(dictionary_store) == 3

    async def test_first_record_wins(self, dictionary_store, fetcher):
        fetcher.documents[DICTIONARY_PATH]["entries"].append(
            {"identifier": "0001", "language_tag": "hebrew", "term": "outro", "definitions": []}
        )

        await dictionary_store.load()

        assert dictionary_store.get("H1").word == "pai"
        assert dictionary_store.get("H0001").word == "pai"

    async def test_entry_count_mismatch_is_not_an_error(self, dictionary_store, fetcher):
        fetcher.documents[DICTIONARY_PATH]["metadata"]["entry_count"] = 99

        assert await dictionary_store.load() is True

    async def test_missing_entries_list(self, dictionary_store, fetcher):
        fetcher.documents[DICTIONARY_PATH] = {"metadata": {}}

        assert await dictionary_store.load() is False

    @pytest.mark.parametrize("metadata", [["x"], "v1", 3, None])
    async def test_non_object_metadata_is_ignored(self, dictionary_store, fetcher, metadata):
        """
        Scenario: metadata is not an object but the entries list is valid.
        Expected: The dictionary still loads.
        """
        fetcher.documents[DICTIONARY_PATH]["metadata"] = metadata

        assert await dictionary_store.load() is True
        assert len(dictionary_store) == 3

    async def test_non_object_metadata_with_empty_entries(self, dictionary_store, fetcher):
        fetcher.documents[DICTIONARY_PATH] = {"metadata": ["x"], "entries": []}

        assert await dictionary_store.load() is True
        assert len(dictionary_store) == 0

    async def test_reset(self, dictionary_store):
        await dictionary_store.load()
        dictionary_store.reset()

        assert not dictionary_store.is_loaded
        assert dictionary_store.get("H1") is None
        assert len(dictionary_store) == 0
