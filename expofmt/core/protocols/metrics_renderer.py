"""MetricsRenderer protocol for serializing collected metrics.

Separates *which* format a scraper gets (negotiate) from producing the
body in that format (generate), so the metrics server only deals with
headers and bytes.
"""

from typing import Protocol, runtime_checkable

from expofmt.core.formats import Format


@runtime_checkable
class MetricsRenderer(Protocol):
    """Protocol for rendering collected metrics into a scrapeable format."""

    def negotiate(self, accept: str | None) -> Format:
        """Pick the format to answer a request with this Accept header."""
        ...

    def generate(self, fmt: Format) -> bytes:
        """Serialize all collected metrics in ``fmt``."""
        ...
