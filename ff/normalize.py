"""
Delimited-text engine.

Responsibilities:
- byte decoding (utf-8 first, charset-normalizer best guess otherwise)
- row and field splitting on a literal delimiter
- field trimming (whitespace, NBSP, BOM)
- header/row pairing into records
- serialization of rows and records back to text

Parsing is lenient: malformed rows never raise. Short rows are padded with
empty strings and long rows are truncated when mapped onto a header. Only an
invalid delimiter raises (pydantic ValidationError via CsvOptions).
"""

from __future__ import annotations

import logging
import re
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from charset_normalizer import from_bytes

from .models import CsvOptions
from .rules import BOM, DEFAULT_DELIMITER, NBSP, ROW_SEPARATOR, TEXT_ENCODING

logger = logging.getLogger(__name__)

_TRIM = f"[\\s{NBSP}{BOM}]+"
_TRIM_RE = re.compile(f"^{_TRIM}|{_TRIM}$")


def decode_text(raw: bytes, encoding: Optional[str] = None) -> str:
    """
    Decode file bytes to text.

    An explicit encoding is applied strictly. Without one, try utf-8, then the
    charset-normalizer best guess, then utf-8 with replacement characters.
    A utf-8 BOM is left in place; field trimming removes it.
    """
    if encoding is not None:
        return raw.decode(encoding)

    try:
        return raw.decode(TEXT_ENCODING)
    except UnicodeDecodeError:
        pass

    match = from_bytes(raw).best()
    if match is not None:
        logger.debug("decoding as %s (detected)", match.encoding)
        try:
            return raw.decode(match.encoding)
        except (UnicodeDecodeError, LookupError):
            pass

    logger.warning("could not detect encoding; decoding utf-8 with replacement")
    return raw.decode(TEXT_ENCODING, errors="replace")


def normalize_field(value: str) -> str:
    return _TRIM_RE.sub("", value)


def split_rows(text: str) -> List[str]:
    if not text:
        return []
    lines = text.split(ROW_SEPARATOR)
    if lines[-1] == "":
        lines.pop()
    return lines


def parse_table(text: str, delimiter: str = DEFAULT_DELIMITER) -> List[List[str]]:
    delimiter = _checked(delimiter)
    return [
        [normalize_field(field) for field in line.split(delimiter)]
        for line in split_rows(text)
    ]


def rows_to_records(header: Sequence[str], rows: Iterable[Sequence[str]]) -> List[Dict[str, str]]:
    """Pair header field i with row field i; missing fields become ""."""
    records = []
    for row in rows:
        record: Dict[str, str] = {}
        for i, key in enumerate(header):
            record[key] = row[i] if i < len(row) else ""
        records.append(record)
    return records


def parse_csv(
    text: str,
    has_header: bool = True,
    delimiter: str = DEFAULT_DELIMITER,
) -> List[List[str]]:
    table = parse_table(text, delimiter)
    if has_header:
        return table[1:]
    return table


def parse_records(text: str, delimiter: str = DEFAULT_DELIMITER) -> List[Dict[str, str]]:
    table = parse_table(text, delimiter)
    if not table:
        return []
    return rows_to_records(table[0], table[1:])


def _checked(delimiter: str) -> str:
    """Raise pydantic ValidationError for an empty, multi-character or newline delimiter."""
    return CsvOptions(delimiter=delimiter).delimiter


def _render(value: Any) -> str:
    return "" if value is None else str(value)


def _format_row(values: Iterable[Any], delimiter: str) -> str:
    return delimiter.join(_render(v) for v in values) + ROW_SEPARATOR


def format_rows(
    rows: Iterable[Sequence[Any]],
    header: Optional[Sequence[Any]] = None,
    delimiter: str = DEFAULT_DELIMITER,
) -> str:
    delimiter = _checked(delimiter)
    parts = []
    if header is not None:
        parts.append(_format_row(header, delimiter))
    for row in rows:
        parts.append(_format_row(row, delimiter))
    return "".join(parts)


def collect_keys(records: Iterable[Mapping[str, Any]]) -> List[str]:
    """Union of record keys in first-seen order."""
    seen: Dict[str, None] = {}
    for record in records:
        for key in record:
            seen.setdefault(key, None)
    return list(seen)


def format_records(
    records: Sequence[Mapping[str, Any]],
    delimiter: str = DEFAULT_DELIMITER,
) -> str:
    delimiter = _checked(delimiter)
    if not records:
        return ""
    header = collect_keys(records)
    rows = [[record.get(key, "") for key in header] for record in records]
    return format_rows(rows, header, delimiter)
