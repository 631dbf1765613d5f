"""Enums for the display-filter query language."""

from enum import StrEnum


class FilterKind(StrEnum):
    """Display-filter query forms.

    Prefixed forms are written ``<kind>:<value>``, e.g. ``protocol:tcp``.
    ALL is the empty query, SEARCH is free text with no recognised prefix.
    """

    ALL = "all"
    PROTOCOL = "protocol"
    IP = "ip"
    PORT = "port"
    SRC = "src"
    DST = "dst"
    SEARCH = "search"

    @property
    def prefix(self) -> str:
        return f"{self.value}:"


# Prefix detection order; the first match wins.
PREFIXED_KINDS: tuple[FilterKind, ...] = (
    FilterKind.PROTOCOL,
    FilterKind.IP,
    FilterKind.PORT,
    FilterKind.SRC,
    FilterKind.DST,
)
