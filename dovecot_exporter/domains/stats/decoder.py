"""Decoder for the output of Dovecot's ``EXPORT`` stats command.

Two formats exist, chosen by the kind of scope that was requested:

* global: a header of whitespace separated column names followed by at most
  one row of values. Anything after that row is ignored.
* detail: a tab separated header ``<namespace>\\t<col1>\\t<col2>...`` followed
  by one ``<label>\\t<v1>\\t<v2>...`` row per entity, up to a blank line or
  the end of the stream.

Decoding is a lazy, single pass over the stream. Records are yielded row by
row as soon as a whole row has been parsed; an error aborts the remainder of
the stream but leaves rows already yielded in place.
"""

from collections.abc import Callable, Iterable, Iterator

from dovecot_exporter.core.logging import logger
from dovecot_exporter.domains.stats.classifier import ScopeClassifier, StaticScopeClassifier
from dovecot_exporter.domains.stats.exceptions import (
    ColumnCountMismatch,
    MalformedHeader,
    PrematureEndOfStream,
    ValueParseFailure,
)
from dovecot_exporter.domains.stats.types import (
    EMPTY_ROW_LABEL,
    ColumnDescriptor,
    MeasurementRecord,
    ScopeKind,
)

_Line = tuple[int, str]


def _iter_lines(stream: Iterable[bytes]) -> Iterator[_Line]:
    """Yield ``(line_number, text)`` with line terminators removed.

    Raises:
        PrematureEndOfStream: if the last line has no ``\\n`` terminator.
    """
    for number, raw in enumerate(stream, start=1):
        if not raw.endswith(b"\n"):
            raise PrematureEndOfStream(number)
        yield number, raw.decode("utf-8", errors="replace").rstrip("\r\n")


def _parse_row(
    columns: list[ColumnDescriptor], raw_values: list[str], line_number: int
) -> list[float]:
    values = []
    for column, raw in zip(columns, raw_values):
        # float() also takes digit separators and padding, which Dovecot never writes.
        if "_" in raw or raw != raw.strip():
            raise ValueParseFailure(raw, column.name, line_number)
        try:
            values.append(float(raw))
        except ValueError:
            raise ValueParseFailure(raw, column.name, line_number) from None
    return values


def decode_global(stream: Iterable[bytes], scope: str) -> Iterator[MeasurementRecord]:
    """Decode a single-row export; columns are namespaced by ``scope``."""
    lines = _iter_lines(stream)

    header = next(lines, None)
    if header is None:
        raise MalformedHeader(f"empty export for scope {scope!r}")
    names = header[1].split()
    if not names:
        raise MalformedHeader(f"no column names in export for scope {scope!r}")
    columns = [ColumnDescriptor(scope, name) for name in names]

    row = next(lines, None)
    if row is None:
        return
    line_number, text = row
    raw_values = text.split()
    if not raw_values:
        return
    if len(raw_values) != len(columns):
        raise ColumnCountMismatch(len(columns), len(raw_values), line_number)

    for column, value in zip(columns, _parse_row(columns, raw_values, line_number)):
        yield MeasurementRecord(column, value)


def decode_detail(stream: Iterable[bytes], scope: str) -> Iterator[MeasurementRecord]:
    """Decode a per-entity export; columns are namespaced by the header's qualifier."""
    lines = _iter_lines(stream)

    header = next(lines, None)
    if header is None:
        raise MalformedHeader(f"empty export for scope {scope!r}")
    fields = header[1].split("\t")
    if len(fields) < 2:
        raise MalformedHeader(
            f"header for scope {scope!r} needs a namespace and at least one column"
        )
    namespace, names = fields[0], fields[1:]
    if not namespace or not all(names):
        raise MalformedHeader(f"empty field in header for scope {scope!r}")
    if namespace != scope:
        logger.with_context(scope=scope).warning(
            f"Export header names namespace {namespace!r}, not the requested scope"
        )
    columns = [ColumnDescriptor(namespace, name) for name in names]

    for line_number, text in lines:
        if not text:
            break
        fields = text.split("\t")
        if len(fields) != len(columns) + 1:
            raise ColumnCountMismatch(len(columns) + 1, len(fields), line_number)
        label = fields[0] or EMPTY_ROW_LABEL
        values = _parse_row(columns, fields[1:], line_number)
        for column, value in zip(columns, values):
            yield MeasurementRecord(column, value, label)


_DECODERS: dict[ScopeKind, Callable[[Iterable[bytes], str], Iterator[MeasurementRecord]]] = {
    ScopeKind.GLOBAL: decode_global,
    ScopeKind.DETAIL: decode_detail,
}


def decode(stream: Iterable[bytes], scope: str, kind: ScopeKind) -> Iterator[MeasurementRecord]:
    """Decode ``stream`` using the format variant registered for ``kind``.

    Args:
        stream: Iterable of raw, newline terminated byte lines, e.g. a file
            object opened in binary mode.
        scope: The scope the stream was requested for.
        kind: Which response format ``scope`` answers with.

    Returns:
        A generator of ``MeasurementRecord``. Nothing is read until it is
        iterated, and it cannot be restarted.

    Raises:
        DecodeError: subclasses are raised during iteration.
    """
    return _DECODERS[kind](stream, scope)


class ProtocolDecoder:
    """Decoder that picks the format for each scope through a ``ScopeClassifier``."""

    def __init__(self, classifier: ScopeClassifier | None = None) -> None:
        self._classifier = classifier or StaticScopeClassifier()

    @property
    def classifier(self) -> ScopeClassifier:
        return self._classifier

    def decode(self, stream: Iterable[bytes], scope: str) -> Iterator[MeasurementRecord]:
        return decode(stream, scope, self._classifier.classify(scope))
