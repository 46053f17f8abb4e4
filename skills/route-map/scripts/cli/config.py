from __future__ import annotations

from pathlib import Path
from typing import Optional

from scanner.constants import SOURCE_PREFIX

DEFAULT_TESTS_DIR = "tests"


def resolve_scan_dir(src: Optional[str], cwd: Path) -> Optional[Path]:
    """The scan root: ``src`` when given, else ``cwd/src``, else ``cwd`` itself."""
    if src:
        base = Path(src)
        if not base.is_absolute():
            base = cwd / base
        return base.resolve() if base.is_dir() else None
    nested = cwd / SOURCE_PREFIX.strip("/")
    if nested.is_dir():
        return nested.resolve()
    return cwd.resolve() if cwd.is_dir() else None


def resolve_out_dir(out: Optional[str], cwd: Path) -> Path:
    out_path = Path(out) if out else Path(DEFAULT_TESTS_DIR)
    if out_path.is_absolute():
        return out_path
    return (cwd / out_path).resolve()
