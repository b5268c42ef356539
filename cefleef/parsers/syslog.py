"""Syslog preamble handling.

CEF and LEEF events are usually shipped over syslog, so the marker is often
preceded by ``<PRI>``, a timestamp and a hostname. Only the marker position
matters for parsing; the preamble fields are extracted on request.
"""

import logging
import re
from dataclasses import dataclass

from cefleef.exceptions import MissingMarkerError

logger = logging.getLogger(__name__)

PRI_PATTERN = re.compile(r"^<(\d{1,3})>")

# RFC 3164 "Feb 14 19:04:54" or ISO 8601 / RFC 5424 "2022-02-14T03:17:30-08:00",
# the latter optionally preceded by the RFC 5424 version digit
TIMESTAMP_PATTERN = re.compile(
    r"^(?:\d\s+(?=\d{4}-))?"
    r"(?P<ts>[A-Z][a-z]{2}\s+\d{1,2}\s+\d{2}:\d{2}:\d{2}"
    r"|\d{4}-\d{2}-\d{2}[T ]\d{2}:\d{2}:\d{2}(?:\.\d+)?(?:Z|[+-]\d{2}:?\d{2})?)"
    r"(?:\s+|$)"
)
DATE_LIKE_PATTERN = re.compile(r"^\d{1,4}[-/]\d{1,2}[-/]\d{1,4}")


@dataclass(frozen=True)
class SyslogPreamble:
    """Fields recovered from a syslog preamble."""

    facility: str | None = None
    priority: str | None = None
    at: str | None = None
    ahost: str | None = None

    def as_fields(self) -> dict[str, str]:
        """Return the populated fields under their record key names."""
        fields = {
            "syslog_facility": self.facility,
            "syslog_priority": self.priority,
            "at": self.at,
            "ahost": self.ahost,
        }
        return {k: v for k, v in fields.items() if v is not None}


def find_marker(line: str, marker: str) -> int:
    """Return the offset of ``marker`` in ``line``.

    Raises:
        MissingMarkerError: If the marker does not occur
    """
    offset = line.find(marker)
    if offset == -1:
        raise MissingMarkerError((marker,))
    return offset


def strip_preamble(line: str, marker: str) -> tuple[str, str]:
    """Split ``line`` into ``(preamble, body)`` at the first ``marker``.

    The preamble is whatever precedes the marker (empty for a regular line)
    and is not interpreted. The body starts with the marker itself.
    """
    offset = find_marker(line, marker)
    return line[:offset], line[offset:]


def _looks_like_datetime(token: str) -> bool:
    return DATE_LIKE_PATTERN.match(token) is not None


def parse_preamble(preamble: str) -> SyslogPreamble:
    """Best-effort extraction of syslog fields from a preamble.

    Never fails: anything that cannot be recognised is left unset.
    """
    data = preamble.strip()
    facility = priority = at = ahost = None

    match = PRI_PATTERN.match(data)
    if match:
        pri = int(match.group(1))
        facility = str(pri >> 3)
        priority = str(pri & 7)
        data = data[match.end():].lstrip()

    match = TIMESTAMP_PATTERN.match(data)
    if match:
        at = match.group("ts")
        data = data[match.end():]

    tokens = data.split()
    if tokens:
        if at is None and len(tokens) == 1 and _looks_like_datetime(tokens[0]):
            at = tokens[0]
        else:
            ahost = tokens[0]

    logger.debug("Syslog preamble %r -> host=%s at=%s", preamble, ahost, at)
    return SyslogPreamble(facility=facility, priority=priority, at=at, ahost=ahost)
