"""Single-family wrappers around the prometheus_client text renderers.

prometheus_client renders whole registries; these helpers render one family
at a time so an ``Encoder`` can stream families as they are collected.
"""

from typing import BinaryIO

from prometheus_client import Metric
from prometheus_client.exposition import generate_latest as generate_text
from prometheus_client.openmetrics.exposition import generate_latest as generate_openmetrics

from expofmt.core.delimited import write_bytes

OPENMETRICS_EOF = b"# EOF\n"


class _SingleFamily:
    """Collector-shaped view of one metric family."""

    def __init__(self, family: Metric) -> None:
        self._family = family

    def collect(self):
        return [self._family]


def write_text(stream: BinaryIO, family: Metric) -> int:
    """Write ``family`` in the Prometheus text format (0.0.4)."""
    return write_bytes(stream, generate_text(_SingleFamily(family)))


def write_openmetrics(stream: BinaryIO, family: Metric) -> int:
    """Write ``family`` in OpenMetrics text without the ``# EOF`` terminator."""
    data = generate_openmetrics(_SingleFamily(family))
    if data.endswith(OPENMETRICS_EOF):
        data = data[: -len(OPENMETRICS_EOF)]
    return write_bytes(stream, data)


def finalize_openmetrics(stream: BinaryIO) -> int:
    """Write the terminator that ends an OpenMetrics exposition."""
    return write_bytes(stream, OPENMETRICS_EOF)
