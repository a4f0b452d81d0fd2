"""
Search term extraction.

A search string is reduced to a short list of terms that the query layer
matches against article titles (any term may match).
"""

import re
from typing import List

MIN_TERM_LENGTH = 2

_WHITESPACE_RE = re.compile(r"\s+")


def tokenize(raw_query: str) -> List[str]:
    """
    Split ``raw_query`` into distinct search terms, in order of first appearance.

    Whitespace runs count as a single separator, duplicates are dropped and so are
    terms shorter than two characters. Duplicates are exact: "World" and "world"
    are two terms.
    """
    if not raw_query:
        return []

    collapsed = _WHITESPACE_RE.sub(" ", raw_query).strip()
    if not collapsed:
        return []

    seen = set()
    terms = []
    for term in collapsed.split(" "):
        if term in seen:
            continue
        seen.add(term)
        if len(term) >= MIN_TERM_LENGTH:
            terms.append(term)
    return terms
