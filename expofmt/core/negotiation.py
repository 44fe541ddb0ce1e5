"""Pick an exposition format from an Accept header.

The first ranked preference that matches a supported format wins; when none
does the Prometheus text format is used. Negotiation never fails.
"""

from expofmt.core.accept import parse_accept
from expofmt.core.formats import (
    OPENMETRICS_TYPE,
    OPENMETRICS_VERSION,
    PROTO_PROTOCOL,
    PROTO_TYPE,
    TEXT_VERSION,
    Format,
)
from expofmt.core.logging import logger

_PROTO_ENCODINGS = {
    "delimited": Format.PROTO_DELIMITED,
    "text": Format.PROTO_TEXT,
    "compact-text": Format.PROTO_COMPACT,
}


def negotiate(header: str | None, allow_experimental: bool = False) -> Format:
    """Return the format to answer a scrape with.

    Args:
        header: Raw ``Accept`` header value, ``None`` when absent.
        allow_experimental: Also consider ``application/openmetrics-text``.

    Returns:
        The negotiated format, ``Format.TEXT`` when nothing matches.
    """
    for pref in parse_accept(header):
        version = pref.parameters.get("version", "")
        if pref.media_type == PROTO_TYPE and pref.parameters.get("proto") == PROTO_PROTOCOL:
            fmt = _PROTO_ENCODINGS.get(pref.parameters.get("encoding", ""))
            if fmt is not None:
                return _chosen(fmt, header)
        if pref.type == "text" and pref.subtype == "plain" and version in ("", TEXT_VERSION):
            return _chosen(Format.TEXT, header)
        if (
            allow_experimental
            and pref.media_type == OPENMETRICS_TYPE
            and version in ("", OPENMETRICS_VERSION)
        ):
            return _chosen(Format.OPENMETRICS, header)
    return _chosen(Format.TEXT, header)


def negotiate_including_openmetrics(header: str | None) -> Format:
    """Like ``negotiate`` but OpenMetrics may be chosen."""
    return negotiate(header, allow_experimental=True)


def _chosen(fmt: Format, header: str | None) -> Format:
    logger.debug("Negotiated %s for Accept %r", fmt.name, header)
    return fmt
