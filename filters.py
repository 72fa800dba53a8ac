"""Title-only matching and result-count truncation."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TypeVar

from models import CiterRecord, PaperRecord, SearchQuery

RecordT = TypeVar("RecordT", PaperRecord, CiterRecord)

LOGGER = logging.getLogger(__name__)


def title_matches(title: str, query: SearchQuery) -> bool:
    """Return True if every search word and the phrase occur in ``title``.

    Matching is case-insensitive substring matching. The phrase must appear
    contiguously. A query with no words and no phrase matches everything.
    """
    text = title.lower()

    for word in query.words:
        word = word.strip().lower()
        if word and word not in text:
            return False

    phrase = (query.phrase or "").strip().lower()
    if phrase and phrase not in text:
        return False

    return True


def apply(records: Sequence[RecordT], query: SearchQuery) -> list[RecordT]:
    """Apply title-only matching (when requested) and the count cap.

    Without ``title_only`` the engine has already matched words, phrase and
    authors against the whole record, so nothing is dropped here. Survivors
    keep their input order; truncation keeps the leading records.
    """
    kept = list(records)

    if query.title_only:
        kept = [record for record in kept if title_matches(record.title, query)]
        LOGGER.info(
            "Title-only filter: total=%s, kept=%s, dropped=%s",
            len(records),
            len(kept),
            len(records) - len(kept),
        )

    if query.max_count is not None:
        kept = kept[: query.max_count]

    return kept
