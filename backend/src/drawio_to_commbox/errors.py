"""Conversion error taxonomy: decode, parse and upload validation failures."""

from __future__ import annotations

from enum import Enum


class DecodeFailure(str, Enum):
    INVALID_BASE64 = "invalid_base64"
    INFLATE_FAILURE = "inflate_failure"
    INVALID_ENCODING = "invalid_encoding"


class ParseFailure(str, Enum):
    MALFORMED_DIAGRAM_FILE = "malformed_diagram_file"
    NO_DIAGRAM_FOUND = "no_diagram_found"
    MALFORMED_GRAPH_MODEL = "malformed_graph_model"


class ValidationFailure(str, Enum):
    MISSING_FILE = "missing_file"
    UNSUPPORTED_FILE_TYPE = "unsupported_file_type"
    FILE_TOO_LARGE = "file_too_large"


class ConversionError(Exception):
    """Base for every failure that aborts a conversion."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class DecodeError(ConversionError):
    """The diagram payload could not be decompressed."""

    def __init__(self, reason: DecodeFailure, message: str) -> None:
        super().__init__(message)
        self.reason = reason


class ParseError(ConversionError):
    """The diagram file or its graph model is structurally unusable."""

    def __init__(self, reason: ParseFailure, message: str) -> None:
        super().__init__(message)
        self.reason = reason


class ValidationError(ConversionError):
    """The upload was rejected before conversion (transport level)."""

    def __init__(self, reason: ValidationFailure, message: str) -> None:
        super().__init__(message)
        self.reason = reason
