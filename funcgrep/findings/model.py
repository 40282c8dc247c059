from __future__ import annotations

from dataclasses import dataclass


@dataclass
class FunctionMatch:
    file: str
    match_line: int
    start_line: int
    end_line: int
    text: str | None = None

    @property
    def line_count(self) -> int:
        return self.end_line - self.start_line + 1
