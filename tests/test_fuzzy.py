"""Unit tests for oxmark.fuzzy."""

from oxmark.bookmark import Bookmark
from oxmark.fuzzy import filter_bookmarks, fold, match_spans, matches, query_atoms


def named(*names):
    return [Bookmark(path=f"/p/{i}", name=n, id=i) for i, n in enumerate(names)]


class TestMatchSpans:
    def test_subsequence_positions(self):
        assert match_spans("gamma", "ga") == [0, 1]
        assert match_spans("projects", "pjt") == [0, 3, 6]

    def test_case_insensitive(self):
        assert match_spans("Downloads", "DOWN") == [0, 1, 2, 3]

    def test_no_match(self):
        assert match_spans("beta", "ga") is None
        assert match_spans("ab", "ba") is None

    def test_empty_query_matches(self):
        assert match_spans("anything", "") == []
        assert match_spans("", "") == []

    def test_none_candidate(self):
        assert match_spans(None, "a") is None


class TestFolding:
    def test_accents_and_case_are_folded(self):
        assert fold("Café") == "cafe"
        assert fold("ÅNGSTRÖM") == "angstrom"
        assert fold(None) == ""

    def test_accented_query_matches_plain_name(self):
        assert match_spans("resume", "résumé") == [0, 1, 2, 3, 4, 5]

    def test_query_atoms_split_on_whitespace(self):
        assert query_atoms("  al\tBe  ") == ["al", "be"]
        assert query_atoms("") == []
        assert query_atoms(None) == []


class TestMatches:
    def test_every_atom_must_match(self):
        assert matches("alpha beta", "al be")
        assert not matches("alpha beta", "al zz")

    def test_atoms_match_in_any_order(self):
        assert matches("my project", "proj my")
        assert matches("alphabeta", "be al")


class TestFilterBookmarks:
    def test_empty_query_is_pass_through(self):
        bookmarks = named("zeta", "alpha", None, "beta")
        assert filter_bookmarks(bookmarks, "") == bookmarks
        assert filter_bookmarks(bookmarks, "   ") == bookmarks
        assert filter_bookmarks(bookmarks, None) == bookmarks

    def test_ga_scenario(self):
        bookmarks = named("alpha", "beta", "gamma")
        result = filter_bookmarks(bookmarks, "ga")
        assert [b.name for b in result] == ["gamma"]

    def test_preserves_input_order(self):
        bookmarks = named("mama", "am", "a-m-x", "xyz")
        result = filter_bookmarks(bookmarks, "am")
        assert [b.name for b in result] == ["mama", "am", "a-m-x"]

    def test_query_is_trimmed(self):
        bookmarks = named("alpha", "beta")
        assert [b.name for b in filter_bookmarks(bookmarks, " be ")] == ["beta"]

    def test_unnamed_bookmarks_only_match_empty_query(self):
        bookmarks = named(None)
        assert filter_bookmarks(bookmarks, "a") == []
        assert filter_bookmarks(bookmarks, "") == bookmarks

    def test_empty_input(self):
        assert filter_bookmarks([], "abc") == []
        assert filter_bookmarks(None, "abc") == []

    def test_returns_new_list(self):
        bookmarks = named("alpha")
        assert filter_bookmarks(bookmarks, "") is not bookmarks

    def test_space_separated_atoms(self):
        bookmarks = named("alpha beta", "alphabeta", "gamma")
        result = filter_bookmarks(bookmarks, "al be")
        assert [b.name for b in result] == ["alpha beta", "alphabeta"]

    def test_reordered_atoms(self):
        bookmarks = named("my project", "projector")
        assert [b.name for b in filter_bookmarks(bookmarks, "proj my")] == ["my project"]

    def test_accent_insensitive(self):
        bookmarks = named("café", "Crème brûlée", "tea")
        assert [b.name for b in filter_bookmarks(bookmarks, "cafe")] == ["café"]
        assert [b.name for b in filter_bookmarks(bookmarks, "creme brulee")] == ["Crème brûlée"]
