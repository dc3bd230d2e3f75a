"""JSON exchange format for scouting records (persisted blob, export, import)."""

from __future__ import annotations

import datetime
import json
from collections.abc import Sequence
from typing import Any, Iterable, Mapping

from constants import EXPORT_FILE_PREFIX, EXPORT_INDENT
from scouting.errors import FormatError, ParseError


def dumps_records(records: Iterable[Mapping[str, Any]], *, indent: int | None = None) -> str:
    """Serialize records in order; every key of every record is kept."""
    return json.dumps([dict(record) for record in records], indent=indent, ensure_ascii=False)


def export_records(records: Iterable[Mapping[str, Any]]) -> str:
    return dumps_records(records, indent=EXPORT_INDENT)


def export_filename(today: datetime.date | None = None) -> str:
    day = today or datetime.date.today()
    return f"{EXPORT_FILE_PREFIX}_{day.isoformat()}.json"


def decode_payload(raw: str | bytes | bytearray) -> Any:
    if isinstance(raw, (bytes, bytearray)):
        try:
            raw = bytes(raw).decode("utf-8-sig")
        except UnicodeDecodeError as exc:
            raise ParseError("Error parsing JSON file: not UTF-8 text") from exc
    try:
        return json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ParseError(f"Error parsing JSON file: {exc.msg} (line {exc.lineno})") from exc


def parse_record_list(raw: Any) -> list[dict[str, Any]]:
    """Validate an import payload and return its records as plain dicts.

    Text or bytes are decoded first; anything already decoded is checked as-is.
    """
    data = decode_payload(raw) if isinstance(raw, (str, bytes, bytearray)) else raw
    if not isinstance(data, Sequence) or isinstance(data, (str, bytes, bytearray)):
        raise FormatError("Invalid data format: Expected an array of matches")

    records: list[dict[str, Any]] = []
    for position, item in enumerate(data):
        if not isinstance(item, Mapping):
            raise FormatError(f"Invalid data format: entry {position} is not a match object")
        records.append(dict(item))
    return records


def read_import_file(path: str) -> bytes:
    """Blocking read of a user-selected export file; decoding is left to the parser."""
    with open(path, "rb") as f:
        return f.read()
