"""cefleef line parser system.

Parses CEF and LEEF security event lines, with or without a syslog
preamble, into flat ordered field mappings.
"""

from cefleef.parsers.base import BaseLineParser, ParsedRecord, ParserOptions
from cefleef.parsers.registry import (
    ParserRegistry,
    get_parser,
    get_registry,
    parse,
    register_parser,
)
from cefleef.parsers.formats import CEFParser, LEEFParser, parse_cef, parse_leef

__all__ = [
    "BaseLineParser",
    "CEFParser",
    "LEEFParser",
    "ParsedRecord",
    "ParserOptions",
    "ParserRegistry",
    "get_parser",
    "get_registry",
    "parse",
    "parse_cef",
    "parse_leef",
    "register_parser",
]
