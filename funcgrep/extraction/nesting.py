from __future__ import annotations

from funcgrep.extraction.scan_state import ScanState


def count_braces(text: str) -> tuple[int, int]:
    return text.count("{"), text.count("}")


def track_braces(state: ScanState, text: str) -> bool:
    # True when the line holds a "}" and leaves the depth at or below zero.
    opens, closes = count_braces(text)
    state.depth += opens
    if closes == 0:
        return False
    state.depth -= closes
    return state.depth <= 0
