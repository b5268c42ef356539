"""Delimiter-aware tokenizer shared by the CEF and LEEF parsers.

Both formats escape their structural characters with a backslash. The
splitter here honours those escapes in a single left-to-right pass.
"""

from collections.abc import Iterator

ESCAPE = "\\"


def split_escaped(
    text: str,
    delimiter: str,
    escape: str = ESCAPE,
    maxsplit: int = -1,
) -> Iterator[str]:
    """Lazily split ``text`` on delimiters not preceded by ``escape``.

    An escaped delimiter is kept in the token as a literal delimiter and a
    doubled escape collapses to a single escape character. An escape in front
    of any other character is left untouched. A trailing delimiter yields a
    trailing empty token.

    Args:
        text: Input to split
        delimiter: Single delimiter character
        escape: Single escape character
        maxsplit: Maximum number of splits; once reached, the rest of the
            input is yielded verbatim (escapes intact). Negative means no limit.

    Yields:
        Tokens in input order
    """
    if len(delimiter) != 1 or len(escape) != 1:
        raise ValueError("delimiter and escape must be single characters")

    token: list[str] = []
    splits = 0
    i = 0
    n = len(text)

    while i < n:
        if 0 <= maxsplit <= splits:
            break

        ch = text[i]
        if ch == escape and i + 1 < n and text[i + 1] in (delimiter, escape):
            token.append(text[i + 1])
            i += 2
            continue
        if ch == delimiter:
            yield "".join(token)
            token = []
            splits += 1
            i += 1
            continue

        token.append(ch)
        i += 1

    if 0 <= maxsplit <= splits:
        yield text[i:]
    else:
        yield "".join(token)

