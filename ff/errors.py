"""Error taxonomy for ff.

Library calls raise the platform exception unchanged. This module only names
the categories so callers (and the HTTP service) can react to them uniformly.
"""

from __future__ import annotations

import json
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError


class ErrorType(str, Enum):
    NOT_FOUND = "NOT_FOUND"
    ALREADY_EXISTS = "ALREADY_EXISTS"
    IO_FAILURE = "IO_FAILURE"
    PARSE_FAILURE = "PARSE_FAILURE"


class ErrorEnvelope(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    type: ErrorType
    message: str
    context: dict[str, Any] = Field(default_factory=dict)


def classify_error(exc: BaseException) -> Optional[ErrorType]:
    """Return the category of ``exc``, or None when it is outside the taxonomy."""
    if isinstance(exc, (FileNotFoundError, NotADirectoryError)):
        return ErrorType.NOT_FOUND
    if isinstance(exc, FileExistsError):
        return ErrorType.ALREADY_EXISTS
    if isinstance(exc, OSError):
        return ErrorType.IO_FAILURE
    if isinstance(exc, (json.JSONDecodeError, UnicodeDecodeError, ValidationError)):
        return ErrorType.PARSE_FAILURE
    return None


def make_error(exc: BaseException, **context: Any) -> ErrorEnvelope:
    error_type = classify_error(exc)
    if error_type is None:
        raise TypeError(f"unclassified error: {type(exc).__name__}") from exc
    return ErrorEnvelope(type=error_type, message=str(exc), context=dict(context))
