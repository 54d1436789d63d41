# ABOUTME: Unit tests for slug-to-title conversion.
# ABOUTME: Covers separators, acronym overrides, whitespace, and empty input.

import pytest

from repobooks.naming import TITLE_OVERRIDES, titleize


class TestTitleize:
    """titleize should turn folder slugs into readable titles."""

    def test_mixed_separators_and_override(self):
        assert titleize("es6-iteration_protocols") == "ES6 Iteration Protocols"

    def test_empty_string(self):
        assert titleize("") == ""

    def test_whitespace_only(self):
        assert titleize("  -_ ") == ""

    def test_numbered_folder(self):
        assert titleize("1-get-started") == "1 Get Started"

    def test_repository_name(self):
        assert titleize("You-Dont-Know-JS") == "You Dont Know JS"

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [("js", "JS"), ("JS", "JS"), ("Es", "ES"), ("ES6", "ES6")],
    )
    def test_overrides_are_case_insensitive(self, raw, expected):
        assert titleize(raw) == expected

    def test_lowercases_rest_of_word(self):
        assert titleize("sCOPE-AND-closures") == "Scope And Closures"

    def test_collapses_repeated_separators(self):
        assert titleize("types--grammar__notes") == "Types Grammar Notes"

    def test_override_only_matches_whole_words(self):
        assert titleize("json-es7") == "Json Es7"

    def test_override_table_contents(self):
        assert TITLE_OVERRIDES == {"js": "JS", "es": "ES", "es6": "ES6"}
