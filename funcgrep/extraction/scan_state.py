from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class ScanState:
    # depth may go negative once scope openers are absorbed.
    keep_lines: bool = True
    lines: list[str] = field(default_factory=list)
    depth: int = 0
    match_line: int | None = None
    in_comment: bool = False
    start_line: int = 1
    line_no: int = 0

    def reset(self) -> None:
        self.lines.clear()
        self.depth = 0
        self.match_line = None
        self.start_line = self.line_no + 1

    def text(self) -> str:
        return "".join(f"{line}\n" for line in self.lines)
