"""Protobuf rendition of the Prometheus client data model."""

from expofmt.adapters.client_model.convert import family_name, to_metric_family
from expofmt.adapters.client_model.metrics_pb import MetricFamily

__all__ = ["MetricFamily", "family_name", "to_metric_family"]
