"""LEEF (Log Event Extended Format) line parser.

LEEF 1.0: LEEF:Version|Vendor|Product|Version|EventID|Attributes
LEEF 2.0: LEEF:Version|Vendor|Product|Version|EventID|DelimiterCharacter|Attributes

Attributes are tab-delimited unless a LEEF 2.0 header declares another
delimiter, either as the character itself or as a hex code (``x5e``,
``0x5e``, ``\\x5e``). Lines without any tab fall back to tabs written as
``\\t`` and then to spaces.
"""

import logging
import re

from cefleef.parsers.base import BaseLineParser, ParsedRecord, ParserOptions
from cefleef.parsers.header import HEADER_DELIMITER
from cefleef.parsers.registry import register_parser
from cefleef.parsers.tokenizer import ESCAPE

logger = logging.getLogger(__name__)

LEEF_MARKER = "LEEF:"

LEEF_HEADER_FIELDS = (
    "LEEFVersion",
    "Vendor",
    "Product",
    "Version",
    "EventID",
)

HEX_DELIMITER_PATTERN = re.compile(r"^(?:0x|\\x|x)([0-9a-f]{1,4})$", re.IGNORECASE)

# Tabs written out as backslash-t by some senders
LITERAL_TAB = "\\t"
SPACE_DELIMITER = " "


def decode_delimiter(declaration: str) -> str | None:
    """Decode a LEEF 2.0 delimiter declaration.

    Returns:
        The delimiter character, or None if ``declaration`` is not a valid one
    """
    if len(declaration) == 1:
        return declaration if declaration not in ("=", ESCAPE) else None
    match = HEX_DELIMITER_PATTERN.match(declaration)
    if match:
        return chr(int(match.group(1), 16))
    return None


@register_parser
class LEEFParser(BaseLineParser):
    """Parser for LEEF (Log Event Extended Format) lines."""

    marker = LEEF_MARKER
    header_fields = LEEF_HEADER_FIELDS

    @property
    def name(self) -> str:
        return "leef"

    @property
    def description(self) -> str:
        return "IBM QRadar LEEF (Log Event Extended Format) line parser"

    def attribute_delimiter(self, header: dict[str, str], extension: str) -> tuple[str, str]:
        if not header["LEEFVersion"].startswith("2"):
            return self._undeclared_delimiter(extension)

        declaration, sep, rest = extension.partition(HEADER_DELIMITER)
        if not sep:
            return self._undeclared_delimiter(extension)

        if declaration == "":
            return self._undeclared_delimiter(rest)

        delimiter = decode_delimiter(declaration)
        if delimiter is None:
            return self._undeclared_delimiter(extension)

        logger.debug("LEEF header declares delimiter %r", delimiter)
        return delimiter, rest

    def _undeclared_delimiter(self, extension: str) -> tuple[str, str]:
        """Pick the delimiter for attributes without a declaration.

        The default delimiter wins when it occurs. Failing that, senders that
        write tabs as the two characters ``\\t`` get them read as tabs, and
        anything else is treated as space-separated pairs.
        """
        default = self.options.leef_default_delimiter
        if default in extension:
            return default, extension
        if default == "\t" and LITERAL_TAB in extension:
            return default, extension.replace(LITERAL_TAB, default)
        if extension:
            logger.debug("No %r in LEEF attributes, splitting on spaces", default)
        return SPACE_DELIMITER, extension


def parse_leef(
    line: str,
    preserve_original: bool = False,
    *,
    include_syslog: bool = False,
    resolve_labels: bool = False,
) -> ParsedRecord:
    """Parse a LEEF line into an ordered field mapping."""
    options = ParserOptions(
        preserve_original=preserve_original,
        include_syslog=include_syslog,
        resolve_labels=resolve_labels,
    )
    return LEEFParser(options).parse(line)
