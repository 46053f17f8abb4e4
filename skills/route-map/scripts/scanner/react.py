from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Tuple

from ir import Route, fold_routes
from utils import progress

from .context import ScanContext, ScanOptions
from .discovery import list_source_files
from .parsers import REACT_PASSES, Contribution


def react_contributions(ctx: ScanContext, path: Path) -> List[Contribution]:
    """Every pass over one file, in pass order; an unreadable file yields nothing."""
    source = ctx.load(path)
    if source is None:
        return []
    found: List[Contribution] = []
    for name, parser in REACT_PASSES:
        try:
            found.extend(parser(source, ctx))
        except (ValueError, RecursionError) as exc:
            ctx.warnings.append(f"Skipped {name} routes in {ctx.display(path)}: {exc}")
    return found


def scan_react_files(root: Path, options: ScanOptions, warnings: List[str]) -> Tuple[List[Route], int]:
    ctx = ScanContext(root=root, options=options, warnings=warnings)
    files = list_source_files(
        root,
        options.extensions,
        exclude_dirs=options.exclude_dirs,
        exclude_globs=options.exclude_globs,
    )
    found: List[Contribution] = []
    progress(f"Scanning {len(files)} files for routes...")
    for path in files:
        found.extend(react_contributions(ctx, path))
    routes = list(fold_routes(found).values())
    progress(f"Found {len(routes)} routes", done=True)
    return routes, len(files)


def scan_react(
    root: Path,
    options: Optional[ScanOptions] = None,
    warnings: Optional[List[str]] = None,
) -> List[Route]:
    routes, _ = scan_react_files(
        Path(root).resolve(),
        options or ScanOptions(),
        warnings if warnings is not None else [],
    )
    return routes
