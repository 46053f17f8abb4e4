from __future__ import annotations

from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence

from _fs import write_text
from ai import enrich_assertions
from ir import Route
from scanner import scan_project
from scanner.constants import ROUTER_DIR
from utils import progress

from .template import flatten_routes, make_spec, slugify

Enricher = Callable[..., List[str]]

SPEC_SUFFIX = ".spec.ts"


def detect_ecosystem(src_dir: Path) -> str:
    return "vue" if (src_dir / ROUTER_DIR).is_dir() else "react"


def generate_tests(
    src_dir: Path,
    out_dir: Path,
    *,
    use_ai: bool = False,
    separator: str = "_",
    routes: Optional[Sequence[Route]] = None,
    enrich: Optional[Enricher] = None,
    warnings: Optional[List[str]] = None,
) -> List[Path]:
    """Write one Playwright smoke test per route into ``out_dir``."""
    if warnings is None:
        warnings = []
    if routes is None:
        result = scan_project(src_dir, detect_ecosystem(src_dir))
        warnings.extend(result.warnings)
        routes = result.routes
    enrich = enrich or enrich_assertions
    progress(f"Generating tests (AI enabled: {use_ai})")
    written: List[Path] = []
    slugs: Dict[str, str] = {}
    for path in flatten_routes(routes):
        slug = slugify(path, separator)
        if slug in slugs:
            warnings.append(f"Skipping {path}: file name {slug}{SPEC_SUFFIX} already used by {slugs[slug]}")
            continue
        slugs[slug] = path
        extra: List[str] = enrich(path, warnings=warnings) if use_ai else []
        spec = make_spec(path, "body", extra)
        written.append(write_text(out_dir, f"{slug}{SPEC_SUFFIX}", spec))
    progress(f"Generated {len(written)} test(s) in {out_dir}", done=True)
    return written
