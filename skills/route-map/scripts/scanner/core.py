from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from ir import Route
from utils import progress

from .context import ScanOptions
from .react import scan_react_files
from .repo_config import load_repo_config
from .vue import scan_vue_files

ECOSYSTEMS = ("react", "vue")


@dataclass
class ScanResult:
    routes: List[Route]
    warnings: List[str] = field(default_factory=list)
    files: int = 0


def scan_project(root: Path, ecosystem: str = "react", options: Optional[ScanOptions] = None) -> ScanResult:
    """Discover every route under ``root``; problems are reported as warnings."""
    if ecosystem not in ECOSYSTEMS:
        raise ValueError(f"Unknown ecosystem: {ecosystem}")
    root = Path(root).resolve()
    warnings: List[str] = []
    if options is None:
        config, config_path = load_repo_config(root, warnings)
        if config_path is not None:
            progress(f"Using config {config_path}", done=True)
        options = ScanOptions.from_config(config)
    if ecosystem == "vue":
        routes, files = scan_vue_files(root, options, warnings)
    else:
        routes, files = scan_react_files(root, options, warnings)
    return ScanResult(routes=routes, warnings=warnings, files=files)
