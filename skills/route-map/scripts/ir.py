from __future__ import annotations

import json
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple


ROUTES_VERSION = 1


@dataclass
class Route:
    path: str
    component: Optional[str] = None
    tags: List[str] = field(default_factory=list)
    children: Optional[List["Route"]] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"path": self.path}
        if self.component:
            data["component"] = self.component
        data["tags"] = list(self.tags)
        if self.children:
            data["children"] = [child.to_dict() for child in self.children]
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Route":
        children = data.get("children")
        return cls(
            path=str(data["path"]),
            component=data.get("component") or None,
            tags=[str(tag) for tag in data.get("tags") or []],
            children=[cls.from_dict(child) for child in children] if children else None,
        )


def now_iso() -> str:
    return time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime())


def fold_routes(contributions: Iterable[Tuple[str, Route]]) -> Dict[str, Route]:
    """Reduce ordered (path, route) pairs into the route store.

    A later contribution for a path replaces the earlier one; the path keeps
    the position of its first appearance.
    """
    store: Dict[str, Route] = {}
    for path, route in contributions:
        if not path:
            continue
        store[path] = route
    return store


def routes_to_dicts(routes: Iterable[Route]) -> List[Dict[str, Any]]:
    return [route.to_dict() for route in routes]


def routes_to_json(routes: Iterable[Route]) -> str:
    return json.dumps(routes_to_dicts(routes), ensure_ascii=True, indent=2)


def save_routes(path: Path, routes: List[Route], *, root: Optional[Path] = None, ecosystem: str = "react") -> None:
    payload = {
        "meta": {
            "version": ROUTES_VERSION,
            "generated_at": now_iso(),
            "root": root.as_posix() if root else None,
            "ecosystem": ecosystem,
        },
        "routes": routes_to_dicts(routes),
    }
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, ensure_ascii=True, indent=2), encoding="utf-8")


def load_routes(path: Path) -> List[Route] | None:
    if not path.exists():
        return None
    payload = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(payload, list):
        items = payload
    elif isinstance(payload, dict):
        items = payload.get("routes") or []
    else:
        return None
    routes: List[Route] = []
    for item in items:
        if isinstance(item, str) and item:
            routes.append(Route(path=item))
        elif isinstance(item, dict) and item.get("path"):
            routes.append(Route.from_dict(item))
    return routes
