"""
Fuzzy filtering of bookmarks by name.

The query is split on whitespace into atoms. A name matches when every atom
matches it, in any order, and an atom matches when each of its characters
appears in the name in order, the way fzf-style pickers match. Both sides are
compared case-insensitively with accents folded, so "cafe" finds "Café".
Filtering keeps the input order so rows do not jump around while the user types.
"""
import unicodedata


def fold(text: str) -> str:
    """Lowercase `text` and drop combining marks ("Café" -> "cafe")."""
    decomposed = unicodedata.normalize("NFKD", text or "")
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch)).lower()


def query_atoms(query: str) -> list:
    return [fold(atom) for atom in (query or "").split()]


def match_spans(candidate: str, atom: str):
    """
    Return the positions in the folded `candidate` matched by `atom`, or None when
    there is no match. Prefers the earliest position for each character.
    An empty atom matches with no spans.
    """
    candidate = fold(candidate)
    positions = []
    pos = -1
    for char in fold(atom):
        idx = candidate.find(char, pos + 1)
        if idx < 0:
            return None
        positions.append(idx)
        pos = idx
    return positions


def matches(candidate: str, query: str) -> bool:
    """True when every atom of `query` matches `candidate`."""
    return all(match_spans(candidate, atom) is not None for atom in query_atoms(query))


def filter_bookmarks(bookmarks, query: str) -> list:
    """Return the bookmarks whose name matches `query`, in their original order."""
    if not query_atoms(query):
        return list(bookmarks or [])
    return [b for b in bookmarks or [] if matches(b.label, query)]
