"""Metrics renderer adapters."""

from expofmt.adapters.metrics_renderer.fake import FakeMetricsRenderer
from expofmt.adapters.metrics_renderer.prometheus import PrometheusMetricsRenderer

__all__ = ["PrometheusMetricsRenderer", "FakeMetricsRenderer"]
