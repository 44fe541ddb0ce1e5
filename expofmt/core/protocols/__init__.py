"""Protocols the server depends on instead of concrete adapters."""

from expofmt.core.protocols.metrics_renderer import MetricsRenderer

__all__ = ["MetricsRenderer"]
