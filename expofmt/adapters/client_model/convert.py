"""Convert ``prometheus_client`` metric families into ``MetricFamily`` messages.

prometheus_client collectors yield flat samples (``x_total``, ``x_bucket{le=..}``,
``x_sum``, ...). The protobuf model groups them back into one ``Metric`` per
label set, with the suffix deciding which field a sample lands in.
"""

import math

from prometheus_client import Metric as PromMetric

from expofmt.adapters.client_model import metrics_pb as pb

_TYPES = {
    "counter": pb.COUNTER,
    "gauge": pb.GAUGE,
    "info": pb.GAUGE,
    "stateset": pb.GAUGE,
    "summary": pb.SUMMARY,
    "histogram": pb.HISTOGRAM,
    "gaugehistogram": pb.GAUGE_HISTOGRAM,
}

# Labels that address a bucket or quantile inside one metric, not the metric itself.
_INNER_LABELS = {
    "summary": {"quantile"},
    "histogram": {"le"},
    "gaugehistogram": {"le"},
}


def family_name(metric: PromMetric) -> str:
    """Exposed family name; counters and infos carry their sample suffix."""
    if metric.type == "counter":
        return metric.name + "_total"
    if metric.type == "info":
        return metric.name + "_info"
    return metric.name


def to_metric_family(metric: PromMetric):
    """Build a ``MetricFamily`` message from one prometheus_client family."""
    family = pb.MetricFamily(name=family_name(metric), help=metric.documentation)
    family.type = _TYPES.get(metric.type, pb.UNTYPED)

    inner = _INNER_LABELS.get(metric.type, set())
    by_labels = {}
    for sample in metric.samples:
        suffix = sample.name[len(metric.name):]
        if suffix == "_created":
            continue

        key = tuple(sorted((k, v) for k, v in sample.labels.items() if k not in inner))
        m = by_labels.get(key)
        if m is None:
            m = family.metric.add()
            for name, value in key:
                m.label.add(name=name, value=value)
            by_labels[key] = m

        _fill(metric.type, m, suffix, sample)
        if sample.timestamp is not None:
            m.timestamp_ms = int(float(sample.timestamp) * 1000)
    return family


def _fill(mtype: str, m, suffix: str, sample) -> None:
    if mtype == "counter":
        m.counter.value = sample.value
    elif mtype in ("gauge", "info", "stateset"):
        m.gauge.value = sample.value
    elif mtype == "summary":
        if suffix == "_count":
            m.summary.sample_count = int(sample.value)
        elif suffix == "_sum":
            m.summary.sample_sum = sample.value
        else:
            m.summary.quantile.add(quantile=float(sample.labels["quantile"]), value=sample.value)
    elif mtype in ("histogram", "gaugehistogram"):
        if suffix == "_bucket":
            upper = float(sample.labels["le"])
            # +Inf is implied by sample_count.
            if not math.isinf(upper):
                m.histogram.bucket.add(cumulative_count=int(sample.value), upper_bound=upper)
        elif suffix in ("_count", "_gcount"):
            m.histogram.sample_count = int(sample.value)
        elif suffix in ("_sum", "_gsum"):
            m.histogram.sample_sum = sample.value
    else:
        m.untyped.value = sample.value
