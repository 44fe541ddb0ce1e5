"""Prometheus client data model (``io.prometheus.client``) as protobuf classes.

The schema is declared with ``descriptor_pb2`` and loaded into a private
descriptor pool, so no generated ``_pb2`` module is needed and another copy
of the same schema in the default pool cannot collide with ours.
Exemplars and created timestamps are not part of this subset.
"""

from google.protobuf import descriptor_pb2, descriptor_pool, message_factory

PACKAGE = "io.prometheus.client"

_F = descriptor_pb2.FieldDescriptorProto
_OPTIONAL = _F.LABEL_OPTIONAL
_REPEATED = _F.LABEL_REPEATED

# name -> [(field, number, label, type, type_name)]
_MESSAGES = {
    "LabelPair": [
        ("name", 1, _OPTIONAL, _F.TYPE_STRING, None),
        ("value", 2, _OPTIONAL, _F.TYPE_STRING, None),
    ],
    "Gauge": [("value", 1, _OPTIONAL, _F.TYPE_DOUBLE, None)],
    "Counter": [("value", 1, _OPTIONAL, _F.TYPE_DOUBLE, None)],
    "Quantile": [
        ("quantile", 1, _OPTIONAL, _F.TYPE_DOUBLE, None),
        ("value", 2, _OPTIONAL, _F.TYPE_DOUBLE, None),
    ],
    "Summary": [
        ("sample_count", 1, _OPTIONAL, _F.TYPE_UINT64, None),
        ("sample_sum", 2, _OPTIONAL, _F.TYPE_DOUBLE, None),
        ("quantile", 3, _REPEATED, _F.TYPE_MESSAGE, "Quantile"),
    ],
    "Untyped": [("value", 1, _OPTIONAL, _F.TYPE_DOUBLE, None)],
    "Bucket": [
        ("cumulative_count", 1, _OPTIONAL, _F.TYPE_UINT64, None),
        ("upper_bound", 2, _OPTIONAL, _F.TYPE_DOUBLE, None),
    ],
    "Histogram": [
        ("sample_count", 1, _OPTIONAL, _F.TYPE_UINT64, None),
        ("sample_sum", 2, _OPTIONAL, _F.TYPE_DOUBLE, None),
        ("bucket", 3, _REPEATED, _F.TYPE_MESSAGE, "Bucket"),
    ],
    "Metric": [
        ("label", 1, _REPEATED, _F.TYPE_MESSAGE, "LabelPair"),
        ("gauge", 2, _OPTIONAL, _F.TYPE_MESSAGE, "Gauge"),
        ("counter", 3, _OPTIONAL, _F.TYPE_MESSAGE, "Counter"),
        ("summary", 4, _OPTIONAL, _F.TYPE_MESSAGE, "Summary"),
        ("untyped", 5, _OPTIONAL, _F.TYPE_MESSAGE, "Untyped"),
        ("timestamp_ms", 6, _OPTIONAL, _F.TYPE_INT64, None),
        ("histogram", 7, _OPTIONAL, _F.TYPE_MESSAGE, "Histogram"),
    ],
    "MetricFamily": [
        ("name", 1, _OPTIONAL, _F.TYPE_STRING, None),
        ("help", 2, _OPTIONAL, _F.TYPE_STRING, None),
        ("type", 3, _OPTIONAL, _F.TYPE_ENUM, "MetricType"),
        ("metric", 4, _REPEATED, _F.TYPE_MESSAGE, "Metric"),
    ],
}

_METRIC_TYPES = [
    ("COUNTER", 0),
    ("GAUGE", 1),
    ("SUMMARY", 2),
    ("UNTYPED", 3),
    ("HISTOGRAM", 4),
    ("GAUGE_HISTOGRAM", 5),
]


def _file_descriptor() -> descriptor_pb2.FileDescriptorProto:
    fdp = descriptor_pb2.FileDescriptorProto(
        name="io/prometheus/client/metrics.proto",
        package=PACKAGE,
        syntax="proto2",
    )
    enum = fdp.enum_type.add(name="MetricType")
    for name, number in _METRIC_TYPES:
        enum.value.add(name=name, number=number)

    for msg_name, fields in _MESSAGES.items():
        msg = fdp.message_type.add(name=msg_name)
        for name, number, label, type_, type_name in fields:
            f = msg.field.add(name=name, number=number, label=label, type=type_)
            if type_name:
                f.type_name = f".{PACKAGE}.{type_name}"
    return fdp


_pool = descriptor_pool.DescriptorPool()
_pool.AddSerializedFile(_file_descriptor().SerializeToString())


def _message_class(name: str):
    return message_factory.GetMessageClass(_pool.FindMessageTypeByName(f"{PACKAGE}.{name}"))


LabelPair = _message_class("LabelPair")
Gauge = _message_class("Gauge")
Counter = _message_class("Counter")
Quantile = _message_class("Quantile")
Summary = _message_class("Summary")
Untyped = _message_class("Untyped")
Bucket = _message_class("Bucket")
Histogram = _message_class("Histogram")
Metric = _message_class("Metric")
MetricFamily = _message_class("MetricFamily")

MetricType = _pool.FindEnumTypeByName(f"{PACKAGE}.MetricType")
COUNTER = MetricType.values_by_name["COUNTER"].number
GAUGE = MetricType.values_by_name["GAUGE"].number
SUMMARY = MetricType.values_by_name["SUMMARY"].number
UNTYPED = MetricType.values_by_name["UNTYPED"].number
HISTOGRAM = MetricType.values_by_name["HISTOGRAM"].number
GAUGE_HISTOGRAM = MetricType.values_by_name["GAUGE_HISTOGRAM"].number
