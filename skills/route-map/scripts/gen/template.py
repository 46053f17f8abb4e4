from __future__ import annotations

from typing import Iterable, List, Optional, Sequence

from ir import Route

HOME_SLUG = "home"


def slugify(path: str, separator: str = "_") -> str:
    """File-name slug for a route path: ``/`` is ``home``, ``/about/team`` is ``about_team``."""
    if path == "/":
        return HOME_SLUG
    stripped = path[1:] if path.startswith("/") else path
    return stripped.replace("/", separator)


def make_spec(route: str, root_selector: str = "body", extra: Sequence[str] = ()) -> str:
    """Playwright smoke test that opens ``route`` and waits for ``root_selector``."""
    extra_lines = "\n  ".join(extra)
    return (
        'import { test, expect } from "@playwright/test";\n'
        "\n"
        f'test("{route} renders", async ({{ page }}) => {{\n'
        f'  await page.goto("{route}");\n'
        f'  await expect(page.locator("{root_selector}")).toBeVisible();\n'
        f"  {extra_lines}\n"
        "});\n"
    )


def join_route_path(parent: str, child: str) -> str:
    if child.startswith("/"):
        return child
    if not parent.endswith("/"):
        parent = f"{parent}/"
    return f"{parent}{child}"


def flatten_routes(routes: Iterable[Route], parent: Optional[str] = None) -> List[str]:
    """Every navigable path, parents before their children, without repeats."""
    seen = set()
    paths: List[str] = []
    for route in routes:
        path = join_route_path(parent, route.path) if parent is not None else route.path
        candidates = [path]
        if route.children:
            candidates.extend(flatten_routes(route.children, path))
        for candidate in candidates:
            if candidate in seen:
                continue
            seen.add(candidate)
            paths.append(candidate)
    return paths
