"""Encoders that write metric families in a negotiated wire format.

``new_encoder`` looks the format up in a fixed dispatch table and binds the
matching writer to the caller's binary stream. Usage:

    fmt = negotiate(request.headers.get("Accept"))
    with new_encoder(buf, fmt) as enc:
        for family in registry.collect():
            enc.encode(family)
"""

from typing import BinaryIO, Callable, Optional

from google.protobuf import text_format
from prometheus_client import Metric

from expofmt.adapters.client_model import to_metric_family
from expofmt.adapters.prometheus_text import finalize_openmetrics, write_openmetrics, write_text
from expofmt.core.delimited import write_bytes, write_delimited
from expofmt.core.formats import Format
from expofmt.core.logging import logger


class UnknownFormatError(RuntimeError):
    """An encoder was requested for a value that is not a supported ``Format``.

    Formats come out of ``negotiate``, so this is a programming error rather
    than bad input and is not meant to be handled.
    """


class Encoder:
    """Writes metric families to one stream in one format.

    ``encode`` may be called any number of times before a single ``close``.
    ``close`` is idempotent; OpenMetrics writes its terminator on the first call.
    """

    def __init__(
        self,
        fmt: Format,
        encode: Callable[[Metric], object],
        close: Optional[Callable[[], object]] = None,
    ) -> None:
        self.format = fmt
        self._encode = encode
        self._close = close
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def encode(self, family: Metric) -> None:
        if self._closed:
            raise ValueError("encode on a closed encoder")
        self._encode(family)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self._close is not None:
            self._close()

    def __enter__(self) -> "Encoder":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        # On failure the stream is abandoned; no terminator after a partial body.
        if exc_type is None:
            self.close()


def _proto_delimited(stream: BinaryIO) -> Encoder:
    return Encoder(
        Format.PROTO_DELIMITED,
        lambda family: write_delimited(stream, to_metric_family(family)),
    )


def _proto_line(stream: BinaryIO, text: str) -> int:
    return write_bytes(stream, (text + "\n").encode("utf-8"))


def _proto_compact(stream: BinaryIO) -> Encoder:
    return Encoder(
        Format.PROTO_COMPACT,
        lambda family: _proto_line(
            stream, text_format.MessageToString(to_metric_family(family), as_one_line=True)
        ),
    )


def _proto_text(stream: BinaryIO) -> Encoder:
    return Encoder(
        Format.PROTO_TEXT,
        lambda family: _proto_line(stream, text_format.MessageToString(to_metric_family(family))),
    )


def _text(stream: BinaryIO) -> Encoder:
    return Encoder(Format.TEXT, lambda family: write_text(stream, family))


def _openmetrics(stream: BinaryIO) -> Encoder:
    return Encoder(
        Format.OPENMETRICS,
        lambda family: write_openmetrics(stream, family),
        lambda: finalize_openmetrics(stream),
    )


_ENCODERS: dict[Format, Callable[[BinaryIO], Encoder]] = {
    Format.PROTO_DELIMITED: _proto_delimited,
    Format.PROTO_COMPACT: _proto_compact,
    Format.PROTO_TEXT: _proto_text,
    Format.TEXT: _text,
    Format.OPENMETRICS: _openmetrics,
}


def new_encoder(stream: BinaryIO, fmt: Format) -> Encoder:
    """Return an encoder writing ``fmt`` to ``stream``.

    Raises:
        UnknownFormatError: ``fmt`` is not one of the encodable formats.
    """
    try:
        factory = _ENCODERS[Format(fmt)]
    except (ValueError, KeyError):
        logger.error("No encoder for format %r", fmt)
        raise UnknownFormatError(f"unknown format {fmt!r}") from None
    return factory(stream)
