"""
Fixed delimited-text and file rules.

Kept in one place so parsing and writing agree on them.
"""

DEFAULT_DELIMITER = ","
ROW_SEPARATOR = "\n"
TEXT_ENCODING = "utf-8"

# Trimmed from both ends of every field in addition to Unicode whitespace.
NBSP = "\u00a0"
BOM = "\ufeff"

# Compact JSON output: {"key":"value"}
JSON_SEPARATORS = (",", ":")

UPLOAD_SUFFIXES = (".csv", ".tsv", ".txt")
