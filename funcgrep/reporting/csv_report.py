from __future__ import annotations

import csv
from typing import TextIO

from funcgrep.findings.model import FunctionMatch


CSV_COLUMNS = ["File", "Match line", "Start line", "End line"]


def write_csv_report(out: TextIO, matches: list[FunctionMatch]) -> None:
    writer = csv.writer(out, lineterminator="\n")
    writer.writerow(CSV_COLUMNS)
    for item in matches:
        writer.writerow([item.file, item.match_line, item.start_line, item.end_line])
