"""CSV output for linter issues."""

from __future__ import annotations

import csv
from dataclasses import dataclass, field
from typing import IO, Any

from cnxcheck.types import Issue

COLUMNS = ["page title", "type", "message", "text", "rule", "file", "node path"]


@dataclass
class CsvReportWriter:
    """Writes one CSV row per issue, header first, flushing as it goes."""

    stream: IO[str]
    header: bool = True
    rows_written: int = 0
    _writer: Any = field(init=False, repr=False)
    _header_done: bool = field(default=False, init=False, repr=False)

    def __post_init__(self):
        self._writer = csv.writer(self.stream, lineterminator="\n")

    def write_header(self) -> None:
        """Write the header row once; later calls are no-ops."""
        if self.header and not self._header_done:
            self._writer.writerow(COLUMNS)
            self.stream.flush()
        self._header_done = True

    def write_issue(self, issue: Issue) -> None:
        self.write_header()
        self._writer.writerow(issue.as_row())
        self.stream.flush()
        self.rows_written += 1
