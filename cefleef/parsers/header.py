"""Positional header extraction for pipe-delimited event headers."""

from collections.abc import Sequence

from cefleef.exceptions import IncompleteHeaderError
from cefleef.parsers.tokenizer import split_escaped

HEADER_DELIMITER = "|"


def extract_header(
    body: str,
    marker: str,
    field_names: Sequence[str],
) -> tuple[dict[str, str], str]:
    """Split the header of ``body`` into its named positional fields.

    ``body`` starts with ``marker``; the version follows directly after it.
    The header ends at the Nth unescaped ``|`` where N is
    ``len(field_names)``, and everything after that is returned untouched
    as the extension section.

    Args:
        body: Event text starting at the format marker
        marker: Format marker, e.g. ``"CEF:"``
        field_names: Header field names in positional order

    Returns:
        Tuple of (header fields, raw extension section)

    Raises:
        IncompleteHeaderError: If fewer than N header fields are terminated
    """
    expected = len(field_names)
    tokens = list(split_escaped(body[len(marker):], HEADER_DELIMITER, maxsplit=expected))

    if len(tokens) <= expected:
        # The last token was never terminated by a pipe
        raise IncompleteHeaderError(marker.rstrip(":"), expected, len(tokens) - 1)

    header = {name: value.strip() for name, value in zip(field_names, tokens)}
    return header, tokens[expected]
