"""
Shaping of fetched couplets into a response page.

Sorting and slicing happen here rather than in the store so that totals
are always computed over the full query result, and translator filtering
only ever narrows the content of the couplets already on the page.
"""

import math
import re
from typing import Any, Dict, List, Optional, Sequence, Tuple

from schemas import Pagination

_NON_ALNUM = re.compile(r"[^a-z0-9]")


def normalize_translator_id(name: str) -> str:
    """'G. U. Pope' -> 'gupope'"""
    return _NON_ALNUM.sub("", name.lower())


def parse_translator_ids(raw: Optional[str]) -> List[str]:
    if not raw:
        return []
    return [t.strip() for t in raw.split(",") if t.strip()]


def paginate(documents: Sequence[Dict[str, Any]], page: int, limit: int) -> List[Dict[str, Any]]:
    skip = (page - 1) * limit
    ordered = sorted(documents, key=lambda d: d["number"])
    return ordered[skip:skip + limit]


def pagination_meta(total: int, page: int, limit: int) -> Pagination:
    skip = (page - 1) * limit
    return Pagination(
        currentPage=page,
        totalPages=math.ceil(total / limit),
        hasNext=skip + limit < total,
        hasPrev=page > 1,
    )


def _author_allowed(record: Dict[str, Any], allowed: set) -> bool:
    author = record.get("author")
    if not author:
        return False
    return normalize_translator_id(author) in allowed


def filter_translations(couplet: Dict[str, Any], translator_ids: Sequence[str]) -> Dict[str, Any]:
    """
    Narrow a couplet's translations and interpretations to the given translators.

    Returns a new dict; the input couplet is left untouched. Languages left
    with no translations are dropped from the ``translations`` map.
    """
    if not translator_ids:
        return couplet

    allowed = set(translator_ids)
    filtered = dict(couplet)

    translations = couplet.get("translations")
    if translations:
        kept = {}
        for lang, records in translations.items():
            lang_records = [r for r in records if _author_allowed(r, allowed)]
            if lang_records:
                kept[lang] = lang_records
        filtered["translations"] = kept

    interpretations = couplet.get("tamil_interpretations")
    if interpretations:
        filtered["tamil_interpretations"] = [
            r for r in interpretations if _author_allowed(r, allowed)
        ]

    return filtered


def project_page(
    documents: Sequence[Dict[str, Any]],
    total: int,
    page: int,
    limit: int,
    translator_ids: Sequence[str] = (),
) -> Tuple[List[Dict[str, Any]], Pagination]:
    """Sort, slice and translator-filter one page of results."""
    couplets = paginate(documents, page, limit)
    if translator_ids:
        couplets = [filter_translations(c, translator_ids) for c in couplets]
    return couplets, pagination_meta(total, page, limit)
