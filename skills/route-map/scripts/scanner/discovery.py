from __future__ import annotations

import fnmatch
import os
from pathlib import Path
from typing import Iterable, List, Sequence

from utils import progress

from .constants import NOISE_FILE_SUFFIXES


def is_generated_noise_file(path: str) -> bool:
    lower = path.lower()
    return any(lower.endswith(suffix) for suffix in NOISE_FILE_SUFFIXES)


def match_globs(path: str, globs: Sequence[str]) -> bool:
    if not globs:
        return False
    lower_path = path.lower()
    lower_name = Path(path).name.lower()
    for glob in globs:
        lowered = glob.lower()
        if any(token in lowered for token in ("*", "?", "[")):
            if fnmatch.fnmatch(lower_path, lowered) or fnmatch.fnmatch(lower_name, lowered):
                return True
            continue
        if lowered in lower_path or lowered == lower_name:
            return True
    return False


def list_source_files(
    root: Path,
    extensions: Iterable[str],
    *,
    exclude_dirs: Iterable[str] = (),
    exclude_globs: Sequence[str] = (),
    label: str = "source",
) -> List[Path]:
    """Absolute paths of files under ``root`` with one of ``extensions``, sorted."""
    exts = tuple(ext.lower() for ext in extensions)
    skip_dirs = set(exclude_dirs)
    files: List[Path] = []
    skipped_symlinks = 0
    progress(f"Discovering {label} files...")
    for current, dirs, filenames in os.walk(root):
        dirs[:] = sorted(d for d in dirs if d not in skip_dirs)
        for filename in filenames:
            if not filename.lower().endswith(exts):
                continue
            full = Path(current) / filename
            if full.is_symlink():
                skipped_symlinks += 1
                continue
            try:
                rel = full.relative_to(root).as_posix()
            except ValueError:
                continue
            if is_generated_noise_file(rel) or match_globs(rel, exclude_globs):
                continue
            files.append(full)
    if skipped_symlinks > 0:
        progress(f"Found {len(files)} {label} files (skipped {skipped_symlinks} symlinks)", done=True)
    else:
        progress(f"Found {len(files)} {label} files", done=True)
    return sorted(set(files))
