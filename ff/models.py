from __future__ import annotations

from typing import Dict, List, Optional, Union
from pydantic import BaseModel, Field, field_validator

from .rules import DEFAULT_DELIMITER, ROW_SEPARATOR


def _check_delimiter(value: str) -> str:
    if len(value) != 1:
        raise ValueError("delimiter must be a single character")
    if value == ROW_SEPARATOR:
        raise ValueError("delimiter cannot be the row separator")
    return value


class CsvOptions(BaseModel):
    delimiter: str = Field(default=DEFAULT_DELIMITER, examples=[",", "\t"])
    has_header: bool = True

    check_delimiter = field_validator("delimiter")(_check_delimiter)


class RowsResponse(BaseModel):
    header: Optional[List[str]] = None
    rows: List[List[str]] = Field(default_factory=list)


class RecordsResponse(BaseModel):
    header: List[str] = Field(default_factory=list)
    records: List[Dict[str, str]] = Field(default_factory=list)


class FormatRequest(BaseModel):
    records: List[Dict[str, Optional[Union[str, int, float, bool]]]]
    delimiter: str = DEFAULT_DELIMITER

    check_delimiter = field_validator("delimiter")(_check_delimiter)


class HealthResponse(BaseModel):
    ok: bool = True
