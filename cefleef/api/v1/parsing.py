"""Parsing API endpoints.

Exposes the line parsers over HTTP: one line in, one ordered field mapping
out. Parse failures surface through the standard error response.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from cefleef.config import Settings, get_settings
from cefleef.exceptions import MissingMarkerError
from cefleef.parsers.base import ParserOptions
from cefleef.parsers.registry import get_registry, load_builtin_parsers

logger = logging.getLogger(__name__)
router = APIRouter()


# Pydantic schemas
class ParseRequest(BaseModel):
    """Request to parse a single event line."""

    line: str = Field(..., min_length=1, description="Raw CEF or LEEF line")
    format: str | None = Field(
        None,
        description="Parser name hint ('cef' or 'leef'); detected when omitted",
    )
    preserve_original: bool | None = Field(
        None,
        description="Include the raw line in the result",
    )
    include_syslog: bool | None = Field(
        None,
        description="Include fields recovered from the syslog preamble",
    )
    resolve_labels: bool | None = Field(
        None,
        description="Rename custom fields after their *Label companions",
    )


class ParseResponse(BaseModel):
    """Parsed event line."""

    format: str
    fields: dict[str, str]


class ParserInfo(BaseModel):
    """Parser information."""

    name: str
    description: str
    marker: str
    header_fields: list[str]


class ParsersListResponse(BaseModel):
    """List of available parsers."""

    parsers: list[ParserInfo]
    total: int


@router.get("/parsers", response_model=ParsersListResponse)
async def list_parsers() -> ParsersListResponse:
    """List the available line parsers."""
    load_builtin_parsers()
    parsers = [ParserInfo(**info) for info in get_registry().list_parsers()]
    return ParsersListResponse(parsers=parsers, total=len(parsers))


@router.post("/parse", response_model=ParseResponse)
def parse_line(
    request: ParseRequest,
    settings: Annotated[Settings, Depends(get_settings)],
) -> ParseResponse:
    """Parse one CEF or LEEF line.

    Options left unset in the request fall back to the configured defaults.
    """
    load_builtin_parsers()

    registry = get_registry()
    options = ParserOptions.from_settings(settings)
    parser = registry.find_parser(request.line, hint=request.format, options=options)
    if parser is None:
        raise MissingMarkerError(registry.markers())

    fields = parser.parse(
        request.line,
        request.preserve_original,
        include_syslog=request.include_syslog,
        resolve_labels=request.resolve_labels,
    )
    logger.debug("Parsed %s line into %d fields", parser.name, len(fields))
    return ParseResponse(format=parser.name, fields=fields)
