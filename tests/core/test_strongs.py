# tests/core/test_strongs.py
import pytest

from interlinear.core.domain.models import SourceLanguage
from interlinear.core.domain.strongs import (
    language_from_tag,
    normalize_strongs_id,
    strongs_key_for,
    strongs_key_variants,
)


class TestNormalizeStrongsId:

    @pytest.mark.parametrize("raw", ["H1", "H0001", "H01", "h1", " H1 ", "[H0001]"])
    def test_all_spellings_share_keys(self, raw):
        """
        Scenario: The same number written with/without padding, brackets or whitespace.
        Expected: One short form and one padded form.
        """
        key = normalize_strongs_id(raw)

        assert key.short == "H1"
        assert key.padded == "H0001"

    def test_long_numbers_are_not_truncated(self):
        key = normalize_strongs_id("H12345")

        assert key.short == "H12345"
        assert key.padded == "H12345"

    def test_width_is_configurable(self):
        assert normalize_strongs_id("G26", width=5).padded == "G00026"

    def test_all_zero_body(self):
        key = normalize_strongs_id("G0000")

        assert key.short == "G0"
        assert key.padded == "G0000"

    def test_suffix_letter_is_kept(self):
        key = normalize_strongs_id("H1121a")

        assert key.short == "H1121a"
        assert key.padded == "H1121a"

    def test_malformed_input_is_best_effort(self):
        """
        Scenario: A body that is not numeric.
        Expected: No exception; prefix upper-cased, body returned as-is.
        """
        key = normalize_strongs_id("hfoo")

        assert key.short == "Hfoo"
        assert key.padded == "Hfoo"

    def test_empty_input(self):
        key = normalize_strongs_id("")

        assert key.short == ""
        assert key.padded == ""


class TestKeyHelpers:

    def test_variants_are_distinct_and_ordered(self):
        assert strongs_key_variants("H01") == ["H01", "H1", "H0001"]
        assert strongs_key_variants("H1") == ["H1", "H0001"]

    @pytest.mark.parametrize("tag,expected", [
        ("hebrew", SourceLanguage.HEBREW),
        ("Hebrew", SourceLanguage.HEBREW),
        ("heb", SourceLanguage.HEBREW),
        ("greek", SourceLanguage.GREEK),
        ("GRC", SourceLanguage.GREEK),
        ("latin", None),
    ])
    def test_language_from_tag(self, tag, expected):
        assert language_from_tag(tag) is expected

    def test_key_for_bare_number(self):
        key = strongs_key_for("430", "hebrew")

        assert key.short == "H430"
        assert key.padded == "H0430"

    def test_key_for_rejects_unknown_language_or_number(self):
        assert strongs_key_for("430", "aramaic") is None
        assert strongs_key_for("abc", "greek") is None
