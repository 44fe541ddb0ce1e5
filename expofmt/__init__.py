"""Content negotiation and wire encoding for a Prometheus metrics endpoint."""

from expofmt.core.accept import MediaRangePreference, parse_accept
from expofmt.core.encoder import Encoder, UnknownFormatError, new_encoder
from expofmt.core.formats import Format
from expofmt.core.negotiation import negotiate, negotiate_including_openmetrics

__all__ = [
    "Encoder",
    "Format",
    "MediaRangePreference",
    "UnknownFormatError",
    "negotiate",
    "negotiate_including_openmetrics",
    "new_encoder",
    "parse_accept",
]
