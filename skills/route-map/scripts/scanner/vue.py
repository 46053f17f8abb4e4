"""Template ecosystem: single-file components plus router config modules."""
from __future__ import annotations

import re
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from ir import Route, fold_routes
from utils import progress

from .constants import PARAM_MARKER, ROUTER_CONFIG_EXTENSIONS, TEMPLATE_EXTENSIONS
from .context import ScanContext, ScanOptions
from .discovery import list_source_files
from .parsers import Contribution, contributions
from .patterns import pattern
from .syntax import SourceFile, iter_nodes, property_name, string_value


def _template_close(content: str, start: int) -> Optional["re.Match[str]"]:
    """Closing tag of the template opened just before ``start``; nested templates balance."""
    opens = pattern("template_open")
    closes = pattern("template_close")
    depth = 1
    pos = start
    while True:
        close = closes.search(content, pos)
        if close is None:
            return None
        nested = opens.search(content, pos, close.start())
        if nested is not None:
            depth += 1
            pos = nested.end()
            continue
        depth -= 1
        if depth == 0:
            return close
        pos = close.end()


def split_sfc(content: str) -> Dict[str, str]:
    """Top-level ``template`` / ``script`` / ``style`` block bodies; first block of a kind wins."""
    blocks: Dict[str, str] = {}
    pos = 0
    while True:
        opening = pattern("sfc_block").search(content, pos)
        if opening is None:
            break
        tag = opening.group("tag").lower()
        if tag == "template":
            close = _template_close(content, opening.end())
        else:
            close = re.compile(rf"</{tag}\s*>", re.IGNORECASE).search(content, opening.end())
        if close is None:
            break
        blocks.setdefault(tag, content[opening.end() : close.start()])
        pos = close.end()
    return blocks


def parse_template_links(content: str) -> List[Route]:
    template = split_sfc(content).get("template")
    if not template:
        return []
    return [Route(path=match.group("path")) for match in pattern("router_link").finditer(template)]


def parse_router_config(source: SourceFile) -> List[Route]:
    routes: List[Route] = []
    for pair in iter_nodes(source.root, {"pair"}):
        if property_name(source, pair.child_by_field_name("key")) != "path":
            continue
        value = string_value(source, pair.child_by_field_name("value"))
        if value:
            routes.append(Route(path=value))
    return routes


def is_concrete_path(path: str) -> bool:
    return bool(path) and not path.startswith(PARAM_MARKER)


def scan_vue_files(root: Path, options: ScanOptions, warnings: List[str]) -> Tuple[List[Route], int]:
    ctx = ScanContext(root=root, options=options, warnings=warnings)
    found: List[Contribution] = []
    components = list_source_files(
        root,
        TEMPLATE_EXTENSIONS,
        exclude_dirs=options.exclude_dirs,
        exclude_globs=options.exclude_globs,
        label="component",
    )
    for path in components:
        source = ctx.load(path)
        if source is not None:
            found.extend(contributions(parse_template_links(source.text)))
    router_root = root / options.router_dir
    config_files: List[Path] = []
    if router_root.is_dir():
        config_files = list_source_files(
            router_root,
            ROUTER_CONFIG_EXTENSIONS,
            exclude_dirs=options.exclude_dirs,
            exclude_globs=options.exclude_globs,
            label="router config",
        )
    for path in config_files:
        source = ctx.load(path)
        if source is None:
            continue
        try:
            found.extend(contributions(parse_router_config(source)))
        except (ValueError, RecursionError) as exc:
            warnings.append(f"Skipped router config {ctx.display(path)}: {exc}")
    routes = [route for path, route in fold_routes(found).items() if is_concrete_path(path)]
    progress(f"Found {len(routes)} routes", done=True)
    return routes, len(components) + len(config_files)


def scan_vue(
    root: Path,
    options: Optional[ScanOptions] = None,
    warnings: Optional[List[str]] = None,
) -> List[Route]:
    routes, _ = scan_vue_files(
        Path(root).resolve(),
        options or ScanOptions(),
        warnings if warnings is not None else [],
    )
    return routes
