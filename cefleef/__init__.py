"""cefleef - CEF and LEEF event line parsing."""

from cefleef.exceptions import (
    IncompleteHeaderError,
    MalformedExtensionError,
    MissingMarkerError,
    ParseError,
)
from cefleef.parsers import ParsedRecord, ParserOptions, parse, parse_cef, parse_leef

__version__ = "0.3.0"

__all__ = [
    "IncompleteHeaderError",
    "MalformedExtensionError",
    "MissingMarkerError",
    "ParseError",
    "ParsedRecord",
    "ParserOptions",
    "parse",
    "parse_cef",
    "parse_leef",
]
