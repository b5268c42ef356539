"""Parser registry for format lookup and detection.

The registry maintains the available line parsers and picks the right one
for a given line from the markers it carries.
"""

import logging
from typing import Any, Type

from cefleef.exceptions import MissingMarkerError
from cefleef.parsers.base import BaseLineParser, ParsedRecord, ParserOptions

logger = logging.getLogger(__name__)


class ParserRegistry:
    """Central registry for line parsers.

    Parsers are stored by class and instantiated on lookup with the options
    supplied by the caller.
    """

    def __init__(self):
        self._parsers: dict[str, Type[BaseLineParser]] = {}

    def __len__(self) -> int:
        return len(self._parsers)

    def register(self, parser_class: Type[BaseLineParser]) -> None:
        """Register a parser class.

        Args:
            parser_class: Parser class to register
        """
        name = parser_class().name

        if name in self._parsers:
            logger.warning("Parser '%s' already registered, overwriting", name)

        self._parsers[name] = parser_class
        logger.debug("Registered parser: %s", name)

    def unregister(self, name: str) -> bool:
        """Unregister a parser by name.

        Returns:
            True if parser was found and removed
        """
        return self._parsers.pop(name, None) is not None

    def get(self, name: str, options: ParserOptions | None = None) -> BaseLineParser | None:
        """Get a parser instance by name."""
        parser_class = self._parsers.get(name.lower())
        return parser_class(options) if parser_class else None

    def markers(self) -> tuple[str, ...]:
        """Markers of all registered parsers."""
        return tuple(cls.marker for cls in self._parsers.values())

    def find_parser(
        self,
        line: str,
        hint: str | None = None,
        options: ParserOptions | None = None,
    ) -> BaseLineParser | None:
        """Find the parser for a line.

        Uses two strategies:
        1. If hint provided, use that parser when its marker is present
        2. Otherwise pick the parser whose marker occurs earliest in the line

        Args:
            line: Line to inspect
            hint: Parser name hint
            options: Options for the returned parser

        Returns:
            Matching parser or None
        """
        if hint:
            parser = self.get(hint, options)
            if parser and parser.can_parse(line):
                return parser

        best: tuple[int, Type[BaseLineParser]] | None = None
        for parser_class in self._parsers.values():
            offset = line.find(parser_class.marker)
            if offset != -1 and (best is None or offset < best[0]):
                best = (offset, parser_class)

        return best[1](options) if best else None

    def list_parsers(self) -> list[dict[str, Any]]:
        """List all registered parsers.

        Returns:
            List of parser info dictionaries
        """
        result = []
        for name, parser_class in self._parsers.items():
            parser = parser_class()
            result.append({
                "name": name,
                "description": parser.description,
                "marker": parser.marker,
                "header_fields": list(parser.header_fields),
            })
        return result


# Global registry instance
_registry = ParserRegistry()


def get_registry() -> ParserRegistry:
    """Get the global parser registry."""
    return _registry


def register_parser(parser_class: Type[BaseLineParser]) -> Type[BaseLineParser]:
    """Decorator to register a parser class.

    Usage:
        @register_parser
        class MyParser(BaseLineParser):
            ...
    """
    _registry.register(parser_class)
    return parser_class


def get_parser(
    line: str,
    hint: str | None = None,
    options: ParserOptions | None = None,
) -> BaseLineParser | None:
    """Find a parser for the given line using the global registry."""
    return _registry.find_parser(line, hint, options)


def parse(
    line: str,
    preserve_original: bool = False,
    *,
    hint: str | None = None,
    include_syslog: bool = False,
    resolve_labels: bool = False,
) -> ParsedRecord:
    """Detect the format of ``line`` and parse it.

    Raises:
        MissingMarkerError: If no registered marker occurs in the line
        ParseError: If the detected parser rejects the line
    """
    parser = get_parser(line, hint)
    if parser is None:
        raise MissingMarkerError(_registry.markers())
    return parser.parse(
        line,
        preserve_original,
        include_syslog=include_syslog,
        resolve_labels=resolve_labels,
    )


def load_builtin_parsers() -> None:
    """Load all built-in parsers.

    Importing the format modules triggers their registration.
    """
    from cefleef.parsers.formats import cef, leef  # noqa: F401

    logger.debug("Loaded %d built-in parsers", len(_registry))
