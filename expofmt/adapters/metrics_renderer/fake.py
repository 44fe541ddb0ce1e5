"""Fake MetricsRenderer for testing.

Records negotiate()/generate() calls so tests can assert on metrics-server
behaviour without depending on prometheus-client.
"""

from expofmt.core.formats import Format
from expofmt.core.protocols.metrics_renderer import MetricsRenderer


class FakeMetricsRenderer(MetricsRenderer):
    """In-memory spy implementing the MetricsRenderer protocol.

    Usage:
        fake = FakeMetricsRenderer(fmt=Format.OPENMETRICS)
        # ... inject into MetricsServer ...
        assert fake.accept_headers == ["application/openmetrics-text"]
    """

    def __init__(self, fmt: Format = Format.TEXT, body: bytes = b"# fake metrics\n") -> None:
        self.fmt = fmt
        self.body = body
        self.error: Exception | None = None
        self.accept_headers: list[str | None] = []
        self.generated: list[Format] = []

    @property
    def generate_calls(self) -> int:
        return len(self.generated)

    def negotiate(self, accept: str | None) -> Format:
        self.accept_headers.append(accept)
        return self.fmt

    def generate(self, fmt: Format) -> bytes:
        self.generated.append(fmt)
        if self.error is not None:
            raise self.error
        return self.body

    # -- test helpers --

    def clear(self) -> None:
        """Reset all recorded state."""
        self.accept_headers.clear()
        self.generated.clear()
        self.error = None
