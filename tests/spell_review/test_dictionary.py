"""
Tests for the Spelling Dictionary
=================================
"""

import pytest

from spell_review.dictionary import (
    COMMON_MISSPELLINGS,
    KNOWN_WORDS,
    capitalize,
    is_known_misspelling,
    is_known_word,
    load_word_list,
    lookup,
)


class TestLookup:
    """Tests for lookup()."""

    def test_known_misspelling(self):
        assert lookup("teh") == ["the"]

    def test_capitalized_word(self):
        """Alternatives follow the word's leading capital."""
        assert lookup("Recieve") == ["Receive"]

    def test_case_insensitive_key(self):
        """Keys match regardless of case; only the first letter drives capitals."""
        assert lookup("TEH") == ["The"]
        assert lookup("tEH") == ["the"]

    def test_multiple_alternatives_keep_order(self):
        assert lookup("thier") == ["their", "there", "they're"]
        assert lookup("Wether") == ["Whether", "Weather"]

    def test_multi_word_alternative(self):
        """Only the first character is uppercased."""
        assert lookup("Alot") == ["A lot"]

    def test_unknown_word(self):
        assert lookup("cat") is None
        assert lookup("") is None

    def test_result_is_a_copy(self):
        """Callers cannot corrupt the shared table."""
        result = lookup("teh")
        result.append("tea")
        assert lookup("teh") == ["the"]


class TestTables:
    """Tests for the shared tables."""

    def test_misspellings_read_only(self):
        with pytest.raises(TypeError):
            COMMON_MISSPELLINGS['teh'] = ('tea',)

    def test_keys_are_lowercase(self):
        assert all(key == key.lower() for key in COMMON_MISSPELLINGS)

    def test_no_self_mapping(self):
        """A misspelling never lists itself as its correction."""
        for key, alternatives in COMMON_MISSPELLINGS.items():
            assert key not in alternatives

    def test_known_words_include_alternatives(self):
        assert {"the", "receive", "they're", "a", "lot"} <= KNOWN_WORDS

    def test_known_words_exclude_misspellings(self):
        assert not (KNOWN_WORDS & set(COMMON_MISSPELLINGS))

    def test_is_known_word(self):
        assert is_known_word("Cat")
        assert is_known_word("don’t")
        assert not is_known_word("xyz")
        assert is_known_word("xyz", frozenset({"xyz"}))

    def test_inflected_forms_known(self):
        """Plurals and verb forms of everyday words are not flagged."""
        for word in ("things", "cats", "running", "Walked", "written"):
            assert is_known_word(word)

    def test_is_known_misspelling(self):
        assert is_known_misspelling("Teh")
        assert not is_known_misspelling("the")


class TestHelpers:
    """Tests for helper functions."""

    def test_capitalize_keeps_rest(self):
        assert capitalize("iPhone") == "IPhone"
        assert capitalize("") == ""

    def test_load_word_list(self, tmp_path):
        path = tmp_path / "words.txt"
        path.write_text("# project terms\nFlask\n\n  pytest  \n", encoding="utf-8")
        assert load_word_list(str(path)) == frozenset({"flask", "pytest"})
