"""Request parameter dependencies and validation messages."""

import re
from typing import Any, Dict, List, Literal, Optional, Sequence

from fastapi import Query

from errors import RequestValidationFailed
from projection import parse_translator_ids
from schemas import MAX_CHAPTER, MAX_COUPLET, MAX_DIVISION, MAX_SECTION

SEARCH_MIN_LENGTH = 2
SEARCH_MAX_LENGTH = 100
MAX_LIMIT = 100

_TRANSLATOR_ID = re.compile(r"^[a-z0-9_]+$")

# Client-facing message per parameter, used instead of pydantic's wording
FIELD_MESSAGES = {
    "number": f"Couplet number must be between 1 and {MAX_COUPLET}",
    "page": "Page must be a positive integer",
    "limit": f"Limit must be between 1 and {MAX_LIMIT}",
    "division": f"Division must be between 1 and {MAX_DIVISION}",
    "section": f"Section must be between 1 and {MAX_SECTION}",
    "chapter": f"Chapter must be between 1 and {MAX_CHAPTER}",
    "q": f"Search query must be between {SEARCH_MIN_LENGTH} and {SEARCH_MAX_LENGTH} characters",
    "lang": "Language must be one of: en, hi, ta",
}

Language = Literal["en", "hi", "ta"]


def validation_details(errors: Sequence[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Convert FastAPI/pydantic error dicts into ``{field, message, value}`` entries."""
    details = []
    for err in errors:
        loc = err.get("loc") or ()
        field = str(loc[-1]) if loc else ""
        details.append({
            "field": field,
            "message": FIELD_MESSAGES.get(field, err.get("msg", "Invalid value")),
            "value": err.get("input"),
        })
    return details


def _invalid(field: str, message: str, value: Any) -> RequestValidationFailed:
    return RequestValidationFailed([{"field": field, "message": message, "value": value}])


class PageParams:
    def __init__(
        self,
        page: int = Query(1, ge=1, description="Page number, starting at 1"),
        limit: int = Query(10, ge=1, le=MAX_LIMIT, description="Couplets per page"),
    ):
        self.page = page
        self.limit = limit


class HierarchyFilters:
    def __init__(
        self,
        division: Optional[int] = Query(None, ge=1, le=MAX_DIVISION),
        section: Optional[int] = Query(None, ge=1, le=MAX_SECTION),
        chapter: Optional[int] = Query(None, ge=1, le=MAX_CHAPTER),
    ):
        self.division = division
        self.section = section
        self.chapter = chapter


def search_term(
    q: Optional[str] = Query(None, description="Case-insensitive search text"),
) -> Optional[str]:
    if q is None:
        return None
    term = q.strip()
    if not SEARCH_MIN_LENGTH <= len(term) <= SEARCH_MAX_LENGTH:
        raise _invalid("q", FIELD_MESSAGES["q"], q)
    return term


def translator_ids(
    translators: Optional[str] = Query(
        None, description="Comma-separated normalized translator ids, e.g. gupope,drgrao"
    ),
) -> List[str]:
    if translators is None:
        return []
    ids = parse_translator_ids(translators)
    if not ids:
        raise _invalid("translators", "Translators must be a comma-separated list", translators)
    if not all(_TRANSLATOR_ID.match(t) for t in ids):
        raise _invalid(
            "translators",
            "Invalid translator ID format. Use lowercase alphanumeric characters only",
            translators,
        )
    return ids
