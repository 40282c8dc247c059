from __future__ import annotations

import argparse
import re
import sys
import time
from pathlib import Path

# Allow running as `python scripts/bench.py` without installing the package.
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from funcgrep.config import FilesConfig
from funcgrep.extraction.stream_driver import scan_file
from funcgrep.scanner.file_scanner import expand_paths


def _count_lines(path: Path) -> int:
    with path.open("r", encoding="utf-8", errors="ignore") as f:
        return sum(1 for _ in f)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Benchmark funcgrep extraction throughput")
    p.add_argument("pattern")
    p.add_argument("path", nargs="?", default=".")
    p.add_argument("--lang", default="c,cpp")
    p.add_argument("--include", action="append")
    p.add_argument("--exclude", action="append")
    p.add_argument("--max-file-bytes", type=int, default=10_000_000)
    p.add_argument("--headers-only", action="store_true")
    p.add_argument("--no-prescan", action="store_true")
    return p


def main() -> None:
    args = build_parser().parse_args()
    pattern = re.compile(args.pattern)

    files_cfg = FilesConfig(
        languages=[x.strip() for x in args.lang.split(",") if x.strip()],
        include=args.include or [],
        exclude=args.exclude or FilesConfig().exclude,
        max_file_bytes=args.max_file_bytes,
    )

    t0 = time.perf_counter()
    files = expand_paths([args.path], files_cfg)

    functions = 0
    lines = 0
    for f in files:
        lines += _count_lines(f)
        functions += len(
            scan_file(f, pattern, keep_text=not args.headers_only, prescan=not args.no_prescan)
        )
    elapsed = max(1e-9, time.perf_counter() - t0)

    print(f"files: {len(files)}")
    print(f"functions: {functions}")
    print(f"lines: {lines}")
    print(f"files/sec: {len(files)/elapsed:.2f}")
    print(f"lines/sec: {lines/elapsed:.2f}")


if __name__ == "__main__":
    main()
