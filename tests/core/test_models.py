# tests/core/test_models.py
from interlinear.core.domain.models import LexiconEntry


class TestLexiconEntry:

    def test_reads_published_field_names(self):
        """
        Scenario: A raw lexicon record as published (Gk_word, strongs_def, outline_usage).
        Expected: Fields land on the domain names.
        """
        entry = LexiconEntry.model_validate({
            "Gk_word": "θεός",
            "transliteration": "theós",
            "strongs_def": "a deity",
            "outline_usage": "the Godhead",
            "part_of_speech": "Noun Masculine",
        })

        assert entry.word == "θεός"
        assert entry.definition == "a deity"
        assert entry.usage == "the Godhead"

    def test_hebrew_word_field(self):
        entry = LexiconEntry.model_validate({"Hb_word": "אָב"})

        assert entry.word == "אָב"

    def test_nulls_and_numbers_become_text(self):
        entry = LexiconEntry.model_validate({
            "Gk_word": "x",
            "strongs_def": None,
            "occurrences": 12,
        })

        assert entry.definition == ""
        assert entry.occurrences == "12"

    def test_definition_is_cleaned(self):
        entry = LexiconEntry.model_validate({"strongs_def": "to  love null &quot;truly&quot;"})

        assert entry.definition == 'to love "truly"'
