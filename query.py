"""Translate validated search parameters into a couplet store filter."""

import re
from typing import Any, Dict, Optional

# Fields a search term is matched against
SEARCH_FIELDS = (
    "tamil",
    "translations.en.text",
    "translations.en.explanation",
    "tamil_interpretations.text",
)


def search_pattern(search_term: str) -> "re.Pattern[str]":
    """Unanchored, case-insensitive pattern matching ``search_term`` literally."""
    return re.compile(re.escape(search_term), re.IGNORECASE)


def build_search_query(
    search_term: Optional[str] = None,
    division: Optional[int] = None,
    section: Optional[int] = None,
    chapter: Optional[int] = None,
) -> Dict[str, Any]:
    """
    Build the store filter for a search request.

    A document matches when the term occurs in any of SEARCH_FIELDS (if a
    term is given) and every supplied hierarchy number equals the
    document's. Arguments left as None add no constraint.
    """
    query: Dict[str, Any] = {}

    if search_term:
        pattern = search_pattern(search_term)
        query["$or"] = [{field: pattern} for field in SEARCH_FIELDS]

    if division is not None:
        query["division.number"] = division
    if section is not None:
        query["section.number"] = section
    if chapter is not None:
        query["chapter.number"] = chapter

    return query
