from __future__ import annotations

from pathlib import Path, PurePosixPath

from funcgrep.config import FilesConfig
from funcgrep.scanner.language_filter import allowed_extensions
from funcgrep.scanner.size_filter import within_size_limit


def _match_any(path: str, patterns: list[str]) -> bool:
    p = PurePosixPath(path)
    for pattern in patterns:
        if p.match(pattern):
            return True
        # Treat "**/" as zero-or-more directories for common glob expectations.
        if "**/" in pattern and p.match(pattern.replace("**/", "")):
            return True
    return False


def discover_files(root: Path, files_cfg: FilesConfig) -> list[Path]:
    iterator = root.rglob("*") if files_cfg.follow_symlinks else root.glob("**/*")
    candidates = [p for p in iterator if p.is_file()]

    exts = allowed_extensions(files_cfg.languages)
    found: list[Path] = []
    for p in sorted(candidates):
        rel_posix = str(p.relative_to(root)).replace("\\", "/")
        if exts and p.suffix.lower() not in exts:
            continue
        if files_cfg.exclude and _match_any(rel_posix, files_cfg.exclude):
            continue
        if files_cfg.include and not _match_any(rel_posix, files_cfg.include):
            continue
        if not within_size_limit(p, files_cfg.max_file_bytes):
            continue
        found.append(p)
    return found


def expand_paths(paths: list[str], files_cfg: FilesConfig) -> list[Path]:
    # File arguments pass through unfiltered.
    out: list[Path] = []
    for raw in paths:
        p = Path(raw)
        if p.is_dir():
            out.extend(discover_files(p, files_cfg))
        else:
            out.append(p)
    return out
