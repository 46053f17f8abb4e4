#!/usr/bin/env python3
"""Route mapper CLI: discover front-end routes and generate Playwright smoke tests."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from gen import generate_tests
from ir import Route, load_routes, routes_to_json, save_routes
from scanner import scan_project
from utils import ToolState, emit_warnings
from .config import resolve_out_dir, resolve_scan_dir
from .init import init_project


def format_routes(routes: Sequence[Route], indent: int = 1) -> List[str]:
    lines: List[str] = []
    for route in routes:
        line = f"{'  ' * indent}- {route.path}"
        if route.tags:
            line += f"  [{', '.join(route.tags)}]"
        lines.append(line)
        if route.children:
            lines.extend(format_routes(route.children, indent + 1))
    return lines


def build_summary(routes: Sequence[Route]) -> str:
    if not routes:
        return "Found routes:\n  (no routes found)"
    return "\n".join(["Found routes:"] + format_routes(routes))


def run_scan(args: argparse.Namespace, cwd: Path) -> int:
    root = resolve_scan_dir(args.src, cwd)
    if root is None:
        print(f"Scan root not found: {args.src}", file=sys.stderr)
        return 1
    result = scan_project(root, "vue" if args.vue else "react")
    emit_warnings(result.warnings)
    if args.out:
        out_path = Path(args.out)
        if not out_path.is_absolute():
            out_path = cwd / out_path
        save_routes(out_path, result.routes, root=root, ecosystem="vue" if args.vue else "react")
        print(f"Routes: {out_path}", file=sys.stderr)
    if args.json:
        print(routes_to_json(result.routes))
    else:
        print(build_summary(result.routes))
    return 0


def run_gen(args: argparse.Namespace, cwd: Path) -> int:
    warnings: List[str] = []
    routes: Optional[List[Route]] = None
    if args.routes:
        routes_path = Path(args.routes)
        if not routes_path.is_absolute():
            routes_path = cwd / routes_path
        try:
            routes = load_routes(routes_path)
        except (OSError, json.JSONDecodeError) as exc:
            print(f"Failed to read routes from {routes_path}: {exc}", file=sys.stderr)
            return 1
        if routes is None:
            print(f"Routes file not found: {routes_path}", file=sys.stderr)
            return 1
    src_dir = resolve_scan_dir(args.src, cwd)
    if routes is None and src_dir is None:
        print(f"Source directory not found: {args.src or cwd}", file=sys.stderr)
        return 1
    written = generate_tests(
        src_dir or cwd,
        resolve_out_dir(args.out, cwd),
        use_ai=args.ai,
        separator="-" if args.dash else "_",
        routes=routes,
        warnings=warnings,
    )
    emit_warnings(warnings)
    for path in written:
        print(f"Created {path}")
    return 0


def run_init(cwd: Path) -> int:
    warnings: List[str] = []
    status = init_project(cwd, warnings, ToolState())
    emit_warnings(warnings)
    if status != 0:
        print("Failed to install Playwright browsers", file=sys.stderr)
    return status


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="route-map",
        description="Discover front-end routes and generate Playwright smoke tests",
    )
    subparsers = parser.add_subparsers(dest="command")

    subparsers.add_parser("init", help="Install Playwright browsers and scaffold its config")

    scan_parser = subparsers.add_parser(
        "scan", help="Detect routes in a React (default) or Vue source tree"
    )
    scan_parser.add_argument("src", help="Source directory to scan")
    scan_parser.add_argument("--vue", action="store_true", help="Scan as a Vue project")
    scan_parser.add_argument("--json", action="store_true", help="Print routes as JSON only")
    scan_parser.add_argument("--out", default=None, help="Also write routes (with metadata) to FILE")

    gen_parser = subparsers.add_parser("gen", help="Generate Playwright specs for discovered routes")
    gen_parser.add_argument("--ai", action="store_true", help="Enrich specs with AI-suggested assertions")
    gen_parser.add_argument("--src", default=None, help="Source directory to scan (default: ./src, else .)")
    gen_parser.add_argument("--out", default=None, help="Output directory for specs (default: tests)")
    gen_parser.add_argument("--routes", default=None, help="Use routes from a saved scan instead of scanning")
    gen_parser.add_argument(
        "--dash", action="store_true", help="Join nested path segments with '-' in file names"
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    cwd = Path.cwd()

    if args.command == "init":
        return run_init(cwd)

    if args.command == "scan":
        return run_scan(args, cwd)

    if args.command == "gen":
        return run_gen(args, cwd)

    parser.print_help(sys.stderr)
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
