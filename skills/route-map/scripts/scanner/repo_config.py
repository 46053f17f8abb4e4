from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from .constants import ROUTEMAP_CONFIG_FILES


def strip_json_comments(text: str) -> str:
    """Remove // and /* */ comments from JSON-like text."""
    out: List[str] = []
    in_str = False
    escape = False
    idx = 0
    while idx < len(text):
        ch = text[idx]
        if in_str:
            out.append(ch)
            if escape:
                escape = False
            elif ch == "\\":
                escape = True
            elif ch == '"':
                in_str = False
            idx += 1
            continue
        if ch == '"':
            in_str = True
            out.append(ch)
            idx += 1
            continue
        if ch == "/" and idx + 1 < len(text):
            nxt = text[idx + 1]
            if nxt == "/":
                idx = text.find("\n", idx + 2)
                if idx == -1:
                    break
                continue
            if nxt == "*":
                end = text.find("*/", idx + 2)
                if end == -1:
                    break
                idx = end + 2
                continue
        out.append(ch)
        idx += 1
    return "".join(out)


def normalize_globs(value: Any) -> List[str]:
    if isinstance(value, str) and value.strip():
        return [value.strip()]
    if isinstance(value, list):
        return [item.strip() for item in value if isinstance(item, str) and item.strip()]
    return []


def normalize_extensions(value: Any) -> List[str]:
    exts = []
    for item in normalize_globs(value):
        exts.append(item if item.startswith(".") else f".{item}")
    return exts


def config_search_dirs(root: Path) -> List[Path]:
    dirs = [root]
    if root.parent != root:
        dirs.append(root.parent)
    return dirs


def load_repo_config(root: Path, warnings: List[str]) -> Tuple[Dict[str, object], Optional[Path]]:
    for directory in config_search_dirs(root):
        for filename in ROUTEMAP_CONFIG_FILES:
            path = directory / filename
            if not path.is_file():
                continue
            try:
                payload = json.loads(strip_json_comments(path.read_text(encoding="utf-8")))
            except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
                warnings.append(f"Failed to parse {path}: {exc}")
                return {}, path
            if not isinstance(payload, dict):
                warnings.append(f"Invalid {path}: expected a JSON object")
                return {}, path
            config: Dict[str, object] = {
                "exclude_globs": normalize_globs(payload.get("exclude_globs")),
                "exclude_dirs": normalize_globs(payload.get("exclude_dirs")),
                "routes_files": normalize_globs(payload.get("routes_files")),
                "extensions": normalize_extensions(payload.get("extensions")),
            }
            for key in ("router_dir", "source_prefix"):
                value = payload.get(key)
                if isinstance(value, str) and value.strip():
                    config[key] = value.strip()
            return config, path
    return {}, None
