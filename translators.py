"""Directory of known translators and commentators, derived from the corpus."""

from typing import Any, Dict, Iterable, List, Optional

from projection import normalize_translator_id
from schemas import INTERPRETATION_LANGUAGE, LANGUAGES, Translator


def _year_key(translator: Translator):
    # undated entries go last
    return (translator.year is None, translator.year or 0)


def build_translator_directory(
    documents: Iterable[Dict[str, Any]],
    lang: Optional[str] = None,
) -> Dict[str, List[Translator]]:
    """
    Collect the distinct translators per language in a single pass.

    The first record seen for a normalized id wins; later spellings of the
    same name are dropped. Callers should pass documents in couplet-number
    order so the kept spelling does not depend on storage order.
    Commentaries are always listed under the interpretation language.
    """
    seen: Dict[str, Dict[str, Translator]] = {code: {} for code in LANGUAGES}

    for couplet in documents:
        for language, records in (couplet.get("translations") or {}).items():
            bucket = seen.get(language)
            if bucket is None:
                continue
            for record in records:
                author = record.get("author")
                if not author:
                    continue
                translator_id = normalize_translator_id(author)
                if translator_id not in bucket:
                    bucket[translator_id] = Translator(
                        id=translator_id,
                        name=author,
                        year=record.get("year"),
                        language=language,
                        type="translation",
                    )

        commentaries = seen[INTERPRETATION_LANGUAGE]
        for record in couplet.get("tamil_interpretations") or []:
            author = record.get("author")
            if not author:
                continue
            translator_id = normalize_translator_id(author)
            if translator_id not in commentaries:
                commentaries[translator_id] = Translator(
                    id=translator_id,
                    name=author,
                    year=record.get("year"),
                    language=INTERPRETATION_LANGUAGE,
                    type="commentary",
                )

    directory = {
        code: sorted(bucket.values(), key=_year_key) for code, bucket in seen.items()
    }
    if lang is not None:
        return {lang: directory.get(lang, [])}
    return directory
