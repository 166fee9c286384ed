"""Tests for CSV row sources."""

import io

from models.assignments import EndOfInput, RowRead, TransportFailure
from services.csv_source import events_from_rows, iter_csv_rows


class FailingStream:
    """Text stream that yields some lines and then raises."""

    def __init__(self, lines, error):
        self.lines = lines
        self.error = error

    def __iter__(self):
        yield from self.lines
        raise self.error


class TestIterCsvRows:
    def test_rows_then_end_of_input(self, sample_csv):
        events = list(iter_csv_rows(io.StringIO(sample_csv)))

        assert events == [
            RowRead(("143", "10", "2023-01-01", "2023-01-05")),
            RowRead(("218", "10", "2023-01-03", "2023-01-10")),
            RowRead(("999", "20", "2023-02-01", "2023-02-10")),
            EndOfInput(),
        ]

    def test_fields_are_trimmed(self):
        events = list(iter_csv_rows(io.StringIO("  143 , 10,2023-01-01,  NULL \n")))

        assert events[0] == RowRead(("143", "10", "2023-01-01", "NULL"))

    def test_blank_and_comment_lines_are_skipped(self):
        text = "\n   \n# header\n  # indented comment\n143,10,2023-01-01,2023-01-05\n\n"

        events = list(iter_csv_rows(io.StringIO(text)))

        assert events == [RowRead(("143", "10", "2023-01-01", "2023-01-05")), EndOfInput()]

    def test_quoted_fields(self):
        events = list(iter_csv_rows(io.StringIO('143,"Project, North","Jan 5, 2023",NULL\n')))

        assert events[0] == RowRead(("143", "Project, North", "Jan 5, 2023", "NULL"))

    def test_quoted_field_keeps_blank_and_hash_lines(self):
        text = (
            '143,"North\n\n# phase 2",2023-01-01,2023-01-05\n'
            "# between records\n"
            "\n"
            '218,"North\n\n# phase 2",2023-01-03,2023-01-10\n'
        )

        events = list(iter_csv_rows(io.StringIO(text)))

        assert events == [
            RowRead(("143", "North\n\n# phase 2", "2023-01-01", "2023-01-05")),
            RowRead(("218", "North\n\n# phase 2", "2023-01-03", "2023-01-10")),
            EndOfInput(),
        ]

    def test_empty_input(self):
        assert list(iter_csv_rows(io.StringIO(""))) == [EndOfInput()]

    def test_stream_failure_ends_with_transport_failure(self):
        stream = FailingStream(["143,10,2023-01-01,2023-01-05\n"], OSError("disk gone"))

        events = list(iter_csv_rows(stream))

        assert events == [
            RowRead(("143", "10", "2023-01-01", "2023-01-05")),
            TransportFailure("disk gone"),
        ]

    def test_decode_failure_is_a_transport_failure(self):
        raw = io.BytesIO(b"143,10,2023-01-01,2023-01-05\n\xff\xfe\xfa,10\n")
        stream = io.TextIOWrapper(raw, encoding="utf-8")

        events = list(iter_csv_rows(stream))

        assert isinstance(events[-1], TransportFailure)


class TestEventsFromRows:
    def test_wraps_rows(self):
        events = list(events_from_rows([["143", " 10 ", "2023-01-01", "2023-01-05"]]))

        assert events == [RowRead(("143", "10", "2023-01-01", "2023-01-05")), EndOfInput()]

    def test_source_exception_becomes_transport_failure(self):
        def rows():
            yield ["143", "10", "2023-01-01", "2023-01-05"]
            raise ConnectionError("connection reset")

        events = list(events_from_rows(rows()))

        assert events[-1] == TransportFailure("connection reset")
        assert len(events) == 2
