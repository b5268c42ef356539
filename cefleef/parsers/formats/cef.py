"""CEF (Common Event Format) line parser.

Parses ArcSight CEF lines, with or without a syslog preamble.
CEF format: CEF:Version|Device Vendor|Device Product|Device Version|Signature ID|Name|Severity|Extension
"""

from cefleef.parsers.base import BaseLineParser, ParsedRecord, ParserOptions
from cefleef.parsers.registry import register_parser

CEF_MARKER = "CEF:"

CEF_HEADER_FIELDS = (
    "CEFVersion",
    "DeviceVendor",
    "DeviceProduct",
    "DeviceVersion",
    "DeviceEventClassId",
    "Name",
    "Severity",
)

# Extension pairs are separated by single spaces
CEF_DELIMITER = " "


@register_parser
class CEFParser(BaseLineParser):
    """Parser for CEF (Common Event Format) lines."""

    marker = CEF_MARKER
    header_fields = CEF_HEADER_FIELDS
    expand_newlines = True

    @property
    def name(self) -> str:
        return "cef"

    @property
    def description(self) -> str:
        return "ArcSight CEF (Common Event Format) line parser"

    def attribute_delimiter(self, header: dict[str, str], extension: str) -> tuple[str, str]:
        return CEF_DELIMITER, extension


def parse_cef(
    line: str,
    preserve_original: bool = False,
    *,
    include_syslog: bool = False,
    resolve_labels: bool = False,
) -> ParsedRecord:
    """Parse a CEF line into an ordered field mapping.

    Example:
        >>> parse_cef("CEF:0|Vendor|Product|1.0|600|User Signed In|3|src=127.0.0.1")["src"]
        '127.0.0.1'
    """
    options = ParserOptions(
        preserve_original=preserve_original,
        include_syslog=include_syslog,
        resolve_labels=resolve_labels,
    )
    return CEFParser(options).parse(line)
