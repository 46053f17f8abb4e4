from __future__ import annotations

import subprocess
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence, Set


@dataclass
class ToolState:
    missing: Set[str] = field(default_factory=set)


def progress(message: str, done: bool = False) -> None:
    """Print a progress message to stderr (doesn't interfere with stdout output)."""
    if done:
        print(f"  [done] {message}", file=sys.stderr)
    else:
        print(f"  [....] {message}", file=sys.stderr)


def warn(message: str) -> None:
    print(f"  [warn] {message}", file=sys.stderr)


def emit_warnings(warnings: Sequence[str], limit: int = 50) -> None:
    for message in warnings[:limit]:
        warn(message)
    if len(warnings) > limit:
        warn(f"... {len(warnings) - limit} more warnings")


def run_cmd(
    cmd: Sequence[str],
    *,
    cwd: Optional[Path],
    warnings: List[str],
    tools: ToolState,
    capture: bool = True,
) -> Optional[subprocess.CompletedProcess]:
    tool = cmd[0]
    if tool in tools.missing:
        return None
    try:
        return subprocess.run(
            cmd,
            cwd=str(cwd) if cwd else None,
            check=False,
            text=True,
            stdout=subprocess.PIPE if capture else None,
            stderr=subprocess.PIPE if capture else None,
        )
    except FileNotFoundError:
        tools.missing.add(tool)
        warnings.append(f"Missing tool: {tool}")
        return None
