"""Stats domain - decoding Dovecot's EXPORT output and collecting scopes."""

from dovecot_exporter.domains.stats.classifier import ScopeClassifier, StaticScopeClassifier
from dovecot_exporter.domains.stats.collector import (
    MeasurementSink,
    ScopeCollector,
    build_export_request,
)
from dovecot_exporter.domains.stats.decoder import ProtocolDecoder, decode
from dovecot_exporter.domains.stats.exceptions import (
    ColumnCountMismatch,
    DecodeError,
    MalformedHeader,
    PrematureEndOfStream,
    StatsExportError,
    TransportUnavailable,
    ValueParseFailure,
)
from dovecot_exporter.domains.stats.types import (
    EMPTY_ROW_LABEL,
    ColumnDescriptor,
    MeasurementRecord,
    ScopeHealth,
    ScopeKind,
)

__all__ = [
    "EMPTY_ROW_LABEL",
    "ColumnCountMismatch",
    "ColumnDescriptor",
    "DecodeError",
    "MalformedHeader",
    "MeasurementRecord",
    "MeasurementSink",
    "PrematureEndOfStream",
    "ProtocolDecoder",
    "ScopeClassifier",
    "ScopeCollector",
    "ScopeHealth",
    "ScopeKind",
    "StaticScopeClassifier",
    "StatsExportError",
    "TransportUnavailable",
    "ValueParseFailure",
    "build_export_request",
    "decode",
]
