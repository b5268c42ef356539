"""Extension / attribute section parser.

The trailing section of a CEF or LEEF event is a run of ``key=value`` pairs
separated by a delimiter (space for CEF, tab or a declared character for
LEEF). Values may contain the delimiter, so a pair only ends where the
delimiter is followed by another ``key=``:

    ExpectKey -> ReadingKey -> ExpectEquals -> ReadingValue
        -> (next key boundary ? ExpectKey : Done)

The scan is a single left-to-right pass and never backtracks, so a value
that contains natural text of the form `` word=`` is cut at that point.
"""

import logging

from cefleef.exceptions import MalformedExtensionError
from cefleef.parsers.tokenizer import ESCAPE

logger = logging.getLogger(__name__)

LABEL_SUFFIX = "Label"
LINE_TERMINATORS = "\r\n"

# Characters that may be escaped inside a value besides the delimiter itself
VALUE_ESCAPES = "=|"
NEWLINE_ESCAPES = {"n": "\n", "r": "\r"}


def _skip_delimiters(text: str, i: int, delimiter: str) -> int:
    n = len(text)
    while i < n and text[i] == delimiter:
        i += 1
    return i


def _key_end(text: str, i: int, delimiter: str, escape: str) -> int:
    """Return the end offset of the identifier starting at ``i``."""
    n = len(text)
    while i < n:
        ch = text[i]
        if ch == delimiter or ch == "=" or ch == escape or ch.isspace():
            break
        i += 1
    return i


def _read_key(text: str, i: int, delimiter: str, escape: str) -> tuple[str, int]:
    """Read ``key=`` at ``i`` and return the key and the value offset."""
    end = _key_end(text, i, delimiter, escape)
    if end < len(text) and text[end] == "=":
        if end == i:
            raise MalformedExtensionError("'=' without a preceding key", end)
        return text[i:end], end + 1
    raise MalformedExtensionError(f"expected '=' after {text[i:end]!r}", end)


def parse_extension(
    text: str,
    delimiter: str,
    escape: str = ESCAPE,
    newlines: bool = False,
) -> list[tuple[str, str]]:
    """Parse an extension section into ordered ``(key, value)`` pairs.

    Args:
        text: Raw extension section, escapes intact
        delimiter: Pair delimiter (single character)
        escape: Escape character
        newlines: Expand ``\\n`` and ``\\r`` escapes in values (CEF)

    Returns:
        Pairs in input order; duplicate keys are all kept

    Raises:
        MalformedExtensionError: On a token that is not a ``key=value`` pair
            or an unterminated escape at the end of the section
    """
    if len(delimiter) != 1:
        raise ValueError("delimiter must be a single character")

    text = text.rstrip(LINE_TERMINATORS)
    pairs: list[tuple[str, str]] = []
    n = len(text)

    i = _skip_delimiters(text, 0, delimiter)
    if i == n:
        return pairs

    key, i = _read_key(text, i, delimiter, escape)
    value: list[str] = []

    while i < n:
        ch = text[i]

        if ch == escape:
            if i + 1 == n:
                raise MalformedExtensionError("unterminated escape", i)
            nxt = text[i + 1]
            if nxt == delimiter or nxt == escape or nxt in VALUE_ESCAPES:
                value.append(nxt)
            elif newlines and nxt in NEWLINE_ESCAPES:
                value.append(NEWLINE_ESCAPES[nxt])
            else:
                value.append(text[i : i + 2])
            i += 2
            continue

        if ch == delimiter:
            start = _skip_delimiters(text, i, delimiter)
            if start == n:
                # Trailing delimiters are not part of the last value
                break
            end = _key_end(text, start, delimiter, escape)
            if end < n and text[end] == "=":
                if end == start:
                    raise MalformedExtensionError("'=' without a preceding key", end)
                pairs.append((key, "".join(value)))
                key = text[start:end]
                value = []
                i = end + 1
                continue
            # Not a key boundary: the delimiters and the word are value text
            value.append(text[i:end])
            i = end
            continue

        value.append(ch)
        i += 1

    pairs.append((key, "".join(value)))
    return pairs


def resolve_labels(pairs: list[tuple[str, str]]) -> list[tuple[str, str]]:
    """Rename custom fields after their ``<key>Label`` companions.

    ``cs1=Primary cs1Label=Tenant Name`` becomes ``TenantName=Primary`` at the
    position of ``cs1``; the label pair itself is dropped. Labels without a
    matching base key are left alone.
    """
    present = {key for key, _ in pairs}
    labels: dict[str, str] = {}
    for key, value in pairs:
        if len(key) > len(LABEL_SUFFIX) and key.endswith(LABEL_SUFFIX):
            base = key[: -len(LABEL_SUFFIX)]
            name = value.replace(" ", "")
            if base in present and name:
                labels[base] = name

    if not labels:
        return list(pairs)

    resolved = []
    for key, value in pairs:
        if key in labels:
            resolved.append((labels[key], value))
        elif key.endswith(LABEL_SUFFIX) and key[: -len(LABEL_SUFFIX)] in labels:
            continue
        else:
            resolved.append((key, value))

    logger.debug("Resolved %d custom field labels", len(labels))
    return resolved
