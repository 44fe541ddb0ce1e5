"""Wire formats a metrics endpoint can answer with.

Each ``Format`` member's value is the canonical Content-Type sent back to the
scraper, so a negotiated format can be put straight into a response header.
"""

from enum import Enum

TEXT_VERSION = "0.0.4"
PROTO_TYPE = "application/vnd.google.protobuf"
PROTO_PROTOCOL = "io.prometheus.client.MetricFamily"
OPENMETRICS_TYPE = "application/openmetrics-text"
OPENMETRICS_VERSION = "0.0.1"

_PROTO_FMT = f"{PROTO_TYPE}; proto={PROTO_PROTOCOL};"


class Format(str, Enum):
    """Content-Type of each supported exposition format."""

    UNKNOWN = "<unknown>"
    TEXT = f"text/plain; version={TEXT_VERSION}; charset=utf-8"
    PROTO_DELIMITED = f"{_PROTO_FMT} encoding=delimited"
    PROTO_TEXT = f"{_PROTO_FMT} encoding=text"
    PROTO_COMPACT = f"{_PROTO_FMT} encoding=compact-text"
    OPENMETRICS = f"{OPENMETRICS_TYPE}; version={OPENMETRICS_VERSION}; charset=utf-8"

    @property
    def content_type(self) -> str:
        return self.value

    def __str__(self) -> str:
        return self.value
