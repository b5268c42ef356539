"""Base parser interface and data structures.

Defines the shared parse pipeline for pipe-delimited security event lines.
Format parsers only declare their marker, header field names and how the
attribute delimiter is chosen.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, fields, replace
from typing import Any, ClassVar

from cefleef.config import Settings, get_settings
from cefleef.exceptions import ParseError
from cefleef.parsers.extension import parse_extension, resolve_labels
from cefleef.parsers.header import extract_header
from cefleef.parsers.syslog import parse_preamble, strip_preamble

logger = logging.getLogger(__name__)

# Field name -> value, in header / extension / trailer order
ParsedRecord = dict[str, str]


@dataclass(frozen=True)
class ParserOptions:
    """Per-parser behaviour switches."""

    preserve_original: bool = False
    include_syslog: bool = False
    resolve_labels: bool = False
    raw_event_key: str = "Event"
    leef_default_delimiter: str = "\t"

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "ParserOptions":
        """Build options from application settings."""
        settings = settings or get_settings()
        return cls(**{f.name: getattr(settings, f.name) for f in fields(cls)})

    def merged(self, **overrides: Any) -> "ParserOptions":
        """Return a copy with every non-None override applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **changes) if changes else self


class BaseLineParser(ABC):
    """Abstract base class for CEF-style line parsers.

    A line is parsed in three steps: the syslog preamble in front of
    ``marker`` is split off, the ``|``-delimited header is assigned to
    ``header_fields`` by position, and the remainder is parsed into
    ``key=value`` pairs. Instances only hold immutable options and are safe
    to share between threads.
    """

    marker: ClassVar[str]
    header_fields: ClassVar[tuple[str, ...]]
    expand_newlines: ClassVar[bool] = False

    def __init__(self, options: ParserOptions | None = None):
        self.options = options or ParserOptions()

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique identifier for this parser."""
        ...

    @property
    def description(self) -> str:
        """Human-readable description of what this parser handles."""
        return ""

    def can_parse(self, line: str) -> bool:
        """Check whether ``line`` carries this parser's marker."""
        return self.marker in line

    @abstractmethod
    def attribute_delimiter(self, header: dict[str, str], extension: str) -> tuple[str, str]:
        """Choose the pair delimiter for the extension section.

        Returns:
            Tuple of (delimiter, extension section left to parse)
        """
        ...

    def parse(
        self,
        line: str,
        preserve_original: bool | None = None,
        *,
        include_syslog: bool | None = None,
        resolve_labels: bool | None = None,
    ) -> ParsedRecord:
        """Parse a single line into an ordered record.

        Arguments left as None fall back to the parser's options.

        Raises:
            ParseError: If the line is not a well-formed event of this format
        """
        options = self.options.merged(
            preserve_original=preserve_original,
            include_syslog=include_syslog,
            resolve_labels=resolve_labels,
        )
        try:
            return self._parse_line(line, options)
        except ParseError as e:
            logger.debug("Failed to parse %s line: %s", self.name, e.message)
            raise

    def _parse_line(self, line: str, options: ParserOptions) -> ParsedRecord:
        preamble, body = strip_preamble(line, self.marker)
        header, extension = extract_header(body, self.marker, self.header_fields)
        delimiter, extension = self.attribute_delimiter(header, extension)

        pairs = parse_extension(extension, delimiter, newlines=self.expand_newlines)
        if options.resolve_labels:
            pairs = resolve_labels(pairs)

        record: ParsedRecord = dict(header)
        for key, value in pairs:
            record[key] = value

        if options.include_syslog and preamble:
            record.update(parse_preamble(preamble).as_fields())

        if options.preserve_original:
            # The raw line always comes last, even over an extension key of the same name
            record.pop(options.raw_event_key, None)
            record[options.raw_event_key] = line

        return record
