"""Prometheus implementation of the MetricsRenderer protocol.

Wraps a CollectorRegistry so the metrics server can serialize every
registered collector in whichever format the scraper negotiated.
"""

import io
from typing import Protocol

from prometheus_client import REGISTRY, Metric

from expofmt.core.encoder import new_encoder
from expofmt.core.formats import Format
from expofmt.core.negotiation import negotiate
from expofmt.core.protocols.metrics_renderer import MetricsRenderer


class _Collectable(Protocol):
    def collect(self) -> "list[Metric]": ...


class PrometheusMetricsRenderer(MetricsRenderer):
    """Render all metrics in a shared CollectorRegistry."""

    def __init__(self, registry: _Collectable = REGISTRY, allow_experimental: bool = False) -> None:
        self._registry = registry
        self._allow_experimental = allow_experimental

    def negotiate(self, accept: str | None) -> Format:
        return negotiate(accept, allow_experimental=self._allow_experimental)

    def generate(self, fmt: Format) -> bytes:
        buf = io.BytesIO()
        with new_encoder(buf, fmt) as enc:
            for family in self._registry.collect():
                enc.encode(family)
        return buf.getvalue()
