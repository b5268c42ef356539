"""Built-in event format parsers."""

from cefleef.parsers.formats.cef import CEFParser, parse_cef
from cefleef.parsers.formats.leef import LEEFParser, parse_leef

__all__ = [
    "CEFParser",
    "LEEFParser",
    "parse_cef",
    "parse_leef",
]
