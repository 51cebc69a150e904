"""Tests for CSV output."""

import csv
import io

from cnxcheck.report import COLUMNS, CsvReportWriter
from cnxcheck.types import Issue


def make_issue(**overrides):
    fields = dict(
        title="Forces, and Motion",
        issue_type="grammar",
        message='Use "an" instead of "a"',
        context="This is [a] apple.\nNext line",
        rule_id="EN_A_VS_AN",
        file="modules/m1/index.cnxml",
        node_path="document > content > para#p1",
    )
    fields.update(overrides)
    return Issue(**fields)


class TestCsvReportWriter:
    """Test CSV rows and header handling."""

    def test_header_then_rows(self):
        buf = io.StringIO()
        writer = CsvReportWriter(buf)
        writer.write_issue(make_issue())
        writer.write_issue(make_issue(rule_id="OTHER"))

        rows = list(csv.reader(io.StringIO(buf.getvalue())))
        assert rows[0] == COLUMNS
        assert rows[1] == [
            "Forces, and Motion",
            "grammar",
            'Use "an" instead of "a"',
            "This is [a] apple.\nNext line",
            "EN_A_VS_AN",
            "modules/m1/index.cnxml",
            "document > content > para#p1",
        ]
        assert rows[2][4] == "OTHER"
        assert writer.rows_written == 2

    def test_header_written_once(self):
        buf = io.StringIO()
        writer = CsvReportWriter(buf)
        writer.write_header()
        writer.write_header()
        writer.write_issue(make_issue())
        rows = list(csv.reader(io.StringIO(buf.getvalue())))
        assert [r for r in rows if r == COLUMNS] == [COLUMNS]

    def test_header_only_when_no_issues(self):
        buf = io.StringIO()
        CsvReportWriter(buf).write_header()
        assert buf.getvalue() == ",".join(COLUMNS) + "\n"

    def test_without_header(self):
        buf = io.StringIO()
        writer = CsvReportWriter(buf, header=False)
        writer.write_issue(make_issue())
        rows = list(csv.reader(io.StringIO(buf.getvalue())))
        assert len(rows) == 1
        assert rows[0][0] == "Forces, and Motion"
