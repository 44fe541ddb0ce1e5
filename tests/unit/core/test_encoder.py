"""Unit tests for format-to-encoder dispatch."""

import io

import pytest
from prometheus_client import CollectorRegistry, Counter, Gauge

from expofmt.adapters.client_model import metrics_pb as pb
from expofmt.core.delimited import read_delimited
from expofmt.core.encoder import Encoder, UnknownFormatError, new_encoder
from expofmt.core.formats import Format

# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def families():
    """Two collected families: a counter at 3 and a gauge at 7."""
    registry = CollectorRegistry()
    requests = Counter("requests", "Total requests", registry=registry)
    requests.inc(3)
    temperature = Gauge("temperature_celsius", "Current temperature", registry=registry)
    temperature.set(7)
    return list(registry.collect())


def _encode_all(fmt: Format, families) -> bytes:
    buf = io.BytesIO()
    with new_encoder(buf, fmt) as enc:
        for family in families:
            enc.encode(family)
    return buf.getvalue()


# ---------------------------------------------------------------------------
# Dispatch
# ---------------------------------------------------------------------------


class TestNewEncoder:
    """Tests for new_encoder's dispatch table."""

    @pytest.mark.parametrize(
        "fmt",
        [
            Format.TEXT,
            Format.PROTO_DELIMITED,
            Format.PROTO_TEXT,
            Format.PROTO_COMPACT,
            Format.OPENMETRICS,
        ],
    )
    def test_every_format_has_an_encoder(self, fmt):
        enc = new_encoder(io.BytesIO(), fmt)

        assert isinstance(enc, Encoder)
        assert enc.format is fmt

    def test_content_type_string_is_accepted(self):
        enc = new_encoder(io.BytesIO(), "text/plain; version=0.0.4; charset=utf-8")

        assert enc.format is Format.TEXT

    def test_unknown_member_is_a_contract_violation(self):
        with pytest.raises(UnknownFormatError):
            new_encoder(io.BytesIO(), Format.UNKNOWN)

    @pytest.mark.parametrize("value", ["application/json", "", None, 42])
    def test_foreign_value_is_a_contract_violation(self, value):
        with pytest.raises(UnknownFormatError):
            new_encoder(io.BytesIO(), value)


# ---------------------------------------------------------------------------
# Formats
# ---------------------------------------------------------------------------


class TestEncodedOutput:
    """Tests for what each encoder writes."""

    def test_text(self, families):
        output = _encode_all(Format.TEXT, families).decode()

        assert "# TYPE requests_total counter" in output
        assert "requests_total 3.0" in output
        assert "# TYPE temperature_celsius gauge" in output
        assert "temperature_celsius 7.0" in output
        assert "# EOF" not in output

    def test_openmetrics_terminated_once(self, families):
        buf = io.BytesIO()
        enc = new_encoder(buf, Format.OPENMETRICS)
        for family in families:
            enc.encode(family)
        enc.close()
        enc.close()

        output = buf.getvalue().decode()
        assert "# TYPE requests counter" in output
        assert "requests_total 3.0" in output
        assert output.count("# EOF") == 1
        assert output.endswith("# EOF\n")

    def test_openmetrics_without_families_is_just_terminator(self):
        assert _encode_all(Format.OPENMETRICS, []) == b"# EOF\n"

    def test_proto_delimited_reads_back(self, families):
        buf = io.BytesIO(_encode_all(Format.PROTO_DELIMITED, families))

        counter = read_delimited(buf, pb.MetricFamily)
        gauge = read_delimited(buf, pb.MetricFamily)

        assert counter.name == "requests_total"
        assert counter.type == pb.COUNTER
        assert counter.metric[0].counter.value == 3.0
        assert gauge.name == "temperature_celsius"
        assert gauge.type == pb.GAUGE
        assert gauge.metric[0].gauge.value == 7.0
        assert read_delimited(buf, pb.MetricFamily) is None

    def test_proto_compact_is_one_line_per_family(self, families):
        lines = _encode_all(Format.PROTO_COMPACT, families).decode().splitlines()

        assert len(lines) == 2
        assert lines[0].startswith('name: "requests_total"')
        assert "type: COUNTER" in lines[0]
        assert "type: GAUGE" in lines[1]

    def test_proto_text_is_multiline(self, families):
        output = _encode_all(Format.PROTO_TEXT, families).decode()

        assert 'name: "requests_total"\n' in output
        assert "type: COUNTER\n" in output
        assert "metric {\n" in output
        assert output.endswith("\n\n")


# ---------------------------------------------------------------------------
# Lifecycle
# ---------------------------------------------------------------------------


class TestEncoderLifecycle:
    """Tests for encode/close ordering."""

    def test_encode_after_close_raises(self, families):
        enc = new_encoder(io.BytesIO(), Format.TEXT)
        enc.close()

        assert enc.closed
        with pytest.raises(ValueError):
            enc.encode(families[0])

    def test_context_manager_closes_on_success(self):
        buf = io.BytesIO()
        with new_encoder(buf, Format.OPENMETRICS) as enc:
            pass

        assert enc.closed
        assert buf.getvalue() == b"# EOF\n"

    def test_context_manager_skips_terminator_on_error(self, families):
        buf = io.BytesIO()

        with pytest.raises(RuntimeError):
            with new_encoder(buf, Format.OPENMETRICS) as enc:
                enc.encode(families[0])
                raise RuntimeError("collector failed")

        assert not enc.closed
        assert b"# EOF" not in buf.getvalue()

    def test_stream_errors_propagate(self, families):
        class BrokenStream:
            def write(self, data):
                raise OSError("disk full")

        enc = new_encoder(BrokenStream(), Format.TEXT)

        with pytest.raises(OSError, match="disk full"):
            enc.encode(families[0])
