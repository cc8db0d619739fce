"""prometheus-client collector exposing Dovecot's stats.

Each scrape runs a fresh collection cycle. Every decoded column becomes an
untyped family ``dovecot_<namespace>_<column>``; detail rows carry a label
named after the namespace (e.g. ``user="alice"``). ``dovecot_up`` reports
per-scope health.
"""

import re
from collections.abc import Iterator, Sequence
from typing import Optional

from prometheus_client.core import GaugeMetricFamily, Metric, UnknownMetricFamily
from prometheus_client.registry import Collector

from dovecot_exporter.core.logging import logger
from dovecot_exporter.domains.stats.collector import ScopeCollector
from dovecot_exporter.domains.stats.types import ColumnDescriptor, MeasurementRecord, ScopeHealth

NAMESPACE = "dovecot"

UP_NAME = f"{NAMESPACE}_up"
UP_HELP = "Whether scraping Dovecot's metrics was successful."
COLUMN_HELP = "Help text not provided by this exporter."

_INVALID_NAME_CHARS = re.compile(r"[^a-zA-Z0-9_]")


def sanitize_name(name: str) -> str:
    """Make ``name`` a valid Prometheus metric or label name."""
    name = _INVALID_NAME_CHARS.sub("_", name)
    if not name or name[0].isdigit():
        name = f"_{name}"
    return name


def metric_name(column: ColumnDescriptor) -> str:
    """Fully qualified metric name for a column, e.g. ``dovecot_user_num_logins``."""
    parts = [NAMESPACE, column.scope, column.name]
    return sanitize_name("_".join(part for part in parts if part))


def _up_family() -> GaugeMetricFamily:
    return GaugeMetricFamily(UP_NAME, UP_HELP, labels=["scope"])


class MetricFamilySink:
    """MeasurementSink that groups records into metric families by metric name.

    A scrape must not expose the same series twice, so records that would
    repeat one are dropped with a warning:

    * a second row with an already seen label set,
    * a column whose sanitized name is taken by a different column,
    * a name already exposed by an earlier scope (``claimed_names``).
    """

    def __init__(self, claimed_names: Optional[set[str]] = None) -> None:
        self.families: dict[str, UnknownMetricFamily] = {}
        self.health: list[ScopeHealth] = []
        self.dropped: int = 0
        self._claimed = claimed_names if claimed_names is not None else set()
        self._owners: dict[str, ColumnDescriptor] = {}
        self._series: set[tuple[str, tuple[str, ...]]] = set()
        self._rejected: set[ColumnDescriptor] = set()

    def _family_for(self, record: MeasurementRecord, name: str) -> Optional[UnknownMetricFamily]:
        owner = self._owners.get(name)
        if owner == record.column:
            return self.families[name]
        if owner is not None or name in self._claimed:
            if record.column not in self._rejected:
                self._rejected.add(record.column)
                logger.warning(
                    f"Dropping column {record.column.name!r} of {record.column.scope!r}: "
                    f"{name} is already exposed"
                )
            return None

        labels = [] if record.row_label is None else [sanitize_name(record.column.scope)]
        family = UnknownMetricFamily(name, COLUMN_HELP, labels=labels)
        self._owners[name] = record.column
        self.families[name] = family
        return family

    def emit(self, record: MeasurementRecord) -> None:
        name = metric_name(record.column)
        family = self._family_for(record, name)
        if family is None:
            self.dropped += 1
            return

        label_values = () if record.row_label is None else (record.row_label,)
        if (name, label_values) in self._series:
            logger.warning(f"Dropping duplicate series {name}{list(label_values)}")
            self.dropped += 1
            return
        self._series.add((name, label_values))
        family.add_metric(list(label_values), record.value)

    def report_health(self, health: ScopeHealth) -> None:
        self.health.append(health)


class DovecotCollector(Collector):
    """Custom collector registered on the exporter's CollectorRegistry.

    Repeated scopes are queried once.
    """

    def __init__(self, scope_collector: ScopeCollector, scopes: Sequence[str]) -> None:
        self._scope_collector = scope_collector
        self._scopes = tuple(dict.fromkeys(scopes))

    @property
    def scopes(self) -> tuple[str, ...]:
        return self._scopes

    def describe(self) -> Iterator[Metric]:
        # Column families depend on the server's response and are not known up front.
        yield _up_family()

    def collect(self) -> Iterator[Metric]:
        up = _up_family()
        claimed = {UP_NAME}
        for scope in self._scopes:
            sink = MetricFamilySink(claimed)
            health = self._scope_collector.collect_scope(scope, sink)
            claimed.update(sink.families)
            yield from sink.families.values()
            up.add_metric([scope], 1.0 if health.healthy else 0.0)
        yield up
