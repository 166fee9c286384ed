"""
CSV row sources for the pairs engine.

A source is an iterator of row events: any number of RowRead events followed
by exactly one EndOfInput or TransportFailure. Failures of the underlying
stream are reported as events instead of being raised.
"""

import csv
from collections.abc import Iterable, Iterator

from models.assignments import EndOfInput, RowEvent, RowRead, TransportFailure

COMMENT_PREFIX = "#"

# Errors raised by the stream itself, as opposed to bad row content
TRANSPORT_ERRORS = (OSError, UnicodeDecodeError, csv.Error)


class _RecordLines:
    """
    Physical lines fed to csv.reader.

    Blank and '#' comment lines are dropped only between records. Once a
    record has started, every line is passed through so quoted fields that
    span lines keep their content.
    """

    def __init__(self, lines: Iterable[str]):
        self._lines = iter(lines)
        self.at_record_start = True

    def __iter__(self):
        return self

    def __next__(self) -> str:
        for line in self._lines:
            if self.at_record_start:
                stripped = line.strip()
                if not stripped or stripped.startswith(COMMENT_PREFIX):
                    continue
            self.at_record_start = False
            return line
        raise StopIteration


def iter_csv_rows(stream: Iterable[str]) -> Iterator[RowEvent]:
    """
    Read a text stream (file object or iterable of lines) as row events.

    Fields are whitespace-trimmed. Blank and comment lines between records
    are skipped.
    """
    lines = _RecordLines(stream)
    reader = csv.reader(lines)
    try:
        for row in reader:
            lines.at_record_start = True
            yield RowRead(tuple(field.strip() for field in row))
    except TRANSPORT_ERRORS as e:
        yield TransportFailure(str(e))
        return
    yield EndOfInput()


def events_from_rows(rows: Iterable[Iterable[str]]) -> Iterator[RowEvent]:
    """
    Wrap already-split rows as row events.

    Any exception raised while iterating rows is a failure of the source and
    ends the sequence with a TransportFailure.
    """
    try:
        for row in rows:
            yield RowRead(tuple(str(field).strip() for field in row))
    except Exception as e:
        yield TransportFailure(str(e))
        return
    yield EndOfInput()
