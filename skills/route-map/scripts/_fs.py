"""Filesystem pattern helpers.

Rules:
- generated artifacts go under an explicit output directory
- existing user files are never overwritten by scaffolding (write_text_if_absent)
"""
from __future__ import annotations

from pathlib import Path
from typing import Optional


def _resolve_path(out_dir: Path, filename: str) -> Path:
    path = out_dir / filename
    path.parent.mkdir(parents=True, exist_ok=True)
    return path


def write_text(out_dir: Path, filename: str, text: str) -> Path:
    path = _resolve_path(out_dir, filename)
    path.write_text(text, encoding="utf-8")
    return path


def write_text_if_absent(out_dir: Path, filename: str, text: str) -> Optional[Path]:
    path = out_dir / filename
    if path.exists():
        return None
    return write_text(out_dir, filename, text)


def read_text(path: Path) -> str:
    return path.read_text(encoding="utf-8")

