"""Unit tests for length-delimited framing."""

import io

import pytest

from expofmt.adapters.client_model.metrics_pb import MetricFamily
from expofmt.core.delimited import (
    DelimitedFormatError,
    decode_uvarint,
    encode_uvarint,
    read_delimited,
    write_delimited,
)

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _family_of_size(size: int) -> MetricFamily:
    """MetricFamily whose serialization is exactly ``size`` bytes.

    A lone ``help`` field costs one tag byte plus its varint length prefix.
    """
    if size == 0:
        return MetricFamily()
    for prefix_len in (1, 2, 3):
        text_len = size - 1 - prefix_len
        if len(encode_uvarint(text_len)) == prefix_len:
            family = MetricFamily(help="x" * text_len)
            assert len(family.SerializeToString()) == size
            return family
    raise AssertionError(f"cannot build a family of {size} bytes")


class FailingStream:
    """Stream whose writes always raise, counting attempts."""

    def __init__(self) -> None:
        self.write_calls = 0

    def write(self, data: bytes) -> int:
        self.write_calls += 1
        raise OSError("broken pipe")


# ---------------------------------------------------------------------------
# Varints
# ---------------------------------------------------------------------------


class TestUvarint:
    """Tests for the base-128 varint codec."""

    @pytest.mark.parametrize(
        "value,encoded",
        [
            (0, b"\x00"),
            (1, b"\x01"),
            (127, b"\x7f"),
            (128, b"\x80\x01"),
            (300, b"\xac\x02"),
            (16384, b"\x80\x80\x01"),
            (2**32 - 1, b"\xff\xff\xff\xff\x0f"),
        ],
    )
    def test_known_encodings(self, value, encoded):
        assert encode_uvarint(value) == encoded
        assert decode_uvarint(encoded) == (value, len(encoded))

    def test_negative_rejected(self):
        with pytest.raises(ValueError):
            encode_uvarint(-1)

    def test_decode_at_offset(self):
        assert decode_uvarint(b"\xff\xac\x02", offset=1) == (300, 2)

    def test_truncated_varint(self):
        with pytest.raises(DelimitedFormatError):
            decode_uvarint(b"\x80\x80")


# ---------------------------------------------------------------------------
# Framing
# ---------------------------------------------------------------------------


class TestWriteDelimited:
    """Tests for write_delimited / read_delimited."""

    @pytest.mark.parametrize("size", [0, 127, 128, 16384])
    def test_prefix_then_payload(self, size):
        family = _family_of_size(size)
        buf = io.BytesIO()

        written = write_delimited(buf, family)

        data = buf.getvalue()
        length, consumed = decode_uvarint(data)
        assert length == size
        assert data[consumed:] == family.SerializeToString()
        assert written == consumed + size == len(data)

    @pytest.mark.parametrize("size", [0, 127, 128, 16384])
    def test_read_back(self, size):
        family = _family_of_size(size)
        buf = io.BytesIO()
        write_delimited(buf, family)
        buf.seek(0)

        assert read_delimited(buf, MetricFamily) == family
        assert read_delimited(buf, MetricFamily) is None

    def test_multiple_records_on_one_stream(self):
        families = [MetricFamily(name=f"metric_{i}", help="h" * i) for i in range(5)]
        buf = io.BytesIO()
        for family in families:
            write_delimited(buf, family)
        buf.seek(0)

        decoded = []
        while (msg := read_delimited(buf, MetricFamily)) is not None:
            decoded.append(msg)

        assert decoded == families

    def test_failed_prefix_write_skips_payload(self):
        stream = FailingStream()

        with pytest.raises(OSError, match="broken pipe"):
            write_delimited(stream, MetricFamily(name="up"))

        assert stream.write_calls == 1

    def test_truncated_payload(self):
        buf = io.BytesIO(b"\x05abc")

        with pytest.raises(DelimitedFormatError):
            read_delimited(buf, MetricFamily)

    def test_truncated_prefix(self):
        buf = io.BytesIO(b"\x80")

        with pytest.raises(DelimitedFormatError):
            read_delimited(buf, MetricFamily)

    def test_prefix_longer_than_32_bits(self):
        buf = io.BytesIO(b"\x80\x80\x80\x80\x80\x01")

        with pytest.raises(DelimitedFormatError):
            read_delimited(buf, MetricFamily)

    def test_byte_count_comes_from_stream(self):
        class CountingStream:
            def write(self, data):
                return 1

        assert write_delimited(CountingStream(), MetricFamily(name="up")) == 2
