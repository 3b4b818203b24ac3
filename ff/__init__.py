"""Awaitable filesystem helpers and a lenient CSV/TSV engine."""

from .errors import ErrorEnvelope, ErrorType, classify_error, make_error
from .files import (
    append,
    append_csv,
    cp,
    csv_to_obj,
    mkdir,
    mv,
    obj_to_csv,
    path,
    read,
    read_csv,
    read_json,
    readdir,
    rename,
    rmrf,
    stat,
    touch,
    write,
    write_csv,
    write_json,
)
from .models import CsvOptions
from .normalize import (
    collect_keys,
    decode_text,
    format_records,
    format_rows,
    normalize_field,
    parse_csv,
    parse_records,
    parse_table,
    rows_to_records,
    split_rows,
)

__version__ = "0.1.0"

__all__ = [
    "CsvOptions",
    "ErrorEnvelope",
    "ErrorType",
    "append",
    "append_csv",
    "classify_error",
    "collect_keys",
    "cp",
    "csv_to_obj",
    "decode_text",
    "format_records",
    "format_rows",
    "make_error",
    "mkdir",
    "mv",
    "normalize_field",
    "obj_to_csv",
    "parse_csv",
    "parse_records",
    "parse_table",
    "path",
    "read",
    "read_csv",
    "read_json",
    "readdir",
    "rename",
    "rmrf",
    "rows_to_records",
    "split_rows",
    "stat",
    "touch",
    "write",
    "write_csv",
    "write_json",
]
