"""Render parsed records as plain text or JSON."""

from __future__ import annotations

import json
from collections.abc import Sequence
from dataclasses import asdict, fields
from typing import Any, Literal

from models import CiterRecord, PaperRecord, TargetPaper

OutputMode = Literal["text", "json"]
RecordKind = Literal["paper", "citer"]

_RECORD_TYPES: dict[str, type[PaperRecord] | type[CiterRecord]] = {
    "paper": PaperRecord,
    "citer": CiterRecord,
}


def format_records(records: Sequence[PaperRecord | CiterRecord], mode: OutputMode = "text") -> str:
    """Render ``records`` in input order.

    JSON output always lists every field, with null for absent values. An
    empty sequence renders as an empty string in text mode and ``[]`` in
    JSON mode.
    """
    if mode == "json":
        return json.dumps([asdict(record) for record in records], ensure_ascii=False, indent=2)
    if mode != "text":
        raise ValueError(f"Unknown output mode: {mode!r}")
    return "\n\n".join(_format_text_block(record) for record in records)


def format_target(target: TargetPaper) -> str:
    """Heading line for a "cited by" listing in text mode."""
    if target.cluster_id is None:
        return f"Papers citing: {target.title}"
    return f"Papers citing: {target.title} [{target.cluster_id}]"


def records_from_json(text: str, kind: RecordKind = "paper") -> list[PaperRecord] | list[CiterRecord]:
    """Load records back from :func:`format_records` JSON output."""
    record_type = _RECORD_TYPES[kind]
    payload = json.loads(text)
    if not isinstance(payload, list):
        raise ValueError("Expected a JSON array of records")

    names = {f.name for f in fields(record_type)}
    return [record_type(**_pick(item, names)) for item in payload]


def _format_text_block(record: PaperRecord | CiterRecord) -> str:
    lines = [record.title]
    if record.authors:
        lines.append(", ".join(record.authors))

    if isinstance(record, PaperRecord):
        details = [record.venue] if record.venue else []
        if record.cited_by_count is not None:
            details.append(f"Cited by {record.cited_by_count}")
        if details:
            lines.append(" | ".join(details))
        if record.cited_by_link:
            lines.append(record.cited_by_link)
    elif record.snippet:
        lines.append(record.snippet)

    return "\n".join(lines)


def _pick(item: Any, names: set[str]) -> dict[str, Any]:
    if not isinstance(item, dict):
        raise ValueError(f"Expected a JSON object per record, got {type(item).__name__}")
    picked = {key: value for key, value in item.items() if key in names}
    if isinstance(picked.get("authors"), list):
        picked["authors"] = tuple(picked["authors"])
    return picked
