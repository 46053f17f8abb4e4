"""Named text patterns for every recognised route-declaration shape.

Patterns only locate a declaration and capture its identity (names, import
sources, the offset of the opening bracket). The structure behind the match
is read from the syntax tree, so a match that falls inside a comment or a
string literal simply finds no node and is ignored.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Tuple

_IDENT = r"[A-Za-z_$][\w$]*"

PATTERNS: Mapping[str, "re.Pattern[str]"] = MappingProxyType(
    {
        # Inline elements
        "route_element": re.compile(r"<\s*(?P<tag>Route)(?=[\s/>])"),
        # Arrays of path objects
        "path_property": re.compile(r"[\"']?\bpath[\"']?\s*:\s*[\"'](?P<path>[^\"']*)[\"']"),
        "local_array": re.compile(
            rf"(?<![\w$.])(?P<kind>const|let|var)\s+(?P<name>{_IDENT})\s*=\s*(?P<open>\[)"
        ),
        "typed_array": re.compile(
            rf"(?<![\w$.])(?P<kind>const|let|var)\s+(?P<name>{_IDENT})\s*:\s*"
            rf"(?:(?P<type>[\w$.]+)\s*\[\s*\]|Array\s*<\s*(?P<generic>[\w$.]+)\s*>)\s*=\s*(?P<open>\[)"
        ),
        # Exports
        "export_array": re.compile(
            rf"\bexport\s+(?:const|let|var)\s+(?P<name>{_IDENT})\s*(?::[^=]+)?=\s*(?P<open>\[)"
        ),
        "export_default_array": re.compile(r"\bexport\s+default\s+(?P<open>\[)"),
        "export_default_name": re.compile(
            rf"\bexport\s+default\s+(?P<name>{_IDENT})\s*;?\s*$", re.MULTILINE
        ),
        "export_named": re.compile(r"\bexport\s*\{(?P<names>[^}]*)\}(?!\s*from)"),
        # Imports
        "import_named": re.compile(
            r"\bimport\s+(?P<type>type\s+)?\{(?P<names>[^}]*)\}\s*from\s*[\"'](?P<source>[^\"']+)[\"']"
        ),
        "import_default": re.compile(
            rf"\bimport\s+(?!type\s)(?P<default>{_IDENT})\s*(?:,\s*\{{(?P<names>[^}}]*)\}})?\s*"
            r"from\s*[\"'](?P<source>[^\"']+)[\"']"
        ),
        # Tags
        "tag_marker": re.compile(r"@tags\s+(?P<tags>[^\n]+)"),
        # Providers and router builders
        "router_provider": re.compile(
            r"<\s*(?P<provider>RouterProvider|RoutingProvider)\b[^>]*?\b(?P<prop>router|routes)\s*=\s*(?P<open>\{)"
        ),
        "create_hash_router": re.compile(r"\b(?P<builder>createHashRouter)\s*\("),
        "create_browser_router": re.compile(r"\b(?P<builder>createBrowserRouter)\s*\("),
        "create_memory_router": re.compile(r"\b(?P<builder>createMemoryRouter)\s*\("),
        "create_routes_from_elements": re.compile(r"\b(?P<builder>createRoutesFromElements)\s*\("),
        # Template ecosystem
        "router_link": re.compile(
            r"<(?:router-link|RouterLink)\b[^>]*?(?<![:@\w-])to\s*=\s*[\"'](?P<path>[^\"']+)[\"']"
        ),
        "sfc_block": re.compile(r"<(?P<tag>template|script|style)(?=[\s>])[^>]*>", re.IGNORECASE),
        "template_open": re.compile(r"<template(?=[\s>])[^>]*>"),
        "template_close": re.compile(r"</template\s*>"),
    }
)

ROUTER_BUILDERS: Tuple[str, ...] = (
    "create_hash_router",
    "create_browser_router",
    "create_memory_router",
    "create_routes_from_elements",
)

ELEMENT_BUILDER = "createRoutesFromElements"


def pattern(name: str) -> "re.Pattern[str]":
    return PATTERNS[name]


@dataclass(frozen=True)
class ArrayShape:
    """Which catalog entries declare route arrays, and which matches count."""

    name: str
    patterns: Tuple[str, ...]
    scope: str = "any"  # "any" | "local" | "exported"
    route_types_only: bool = False


ARRAY_SHAPES: Mapping[str, ArrayShape] = MappingProxyType(
    {
        "exported": ArrayShape("exported", ("export_array", "export_default_array"), scope="exported"),
        "constants": ArrayShape("constants", ("local_array",), scope="local"),
        "typed": ArrayShape("typed", ("typed_array",), route_types_only=True),
        "routes_file": ArrayShape("routes_file", ("local_array", "typed_array", "export_default_array")),
    }
)


def is_exported_at(content: str, offset: int) -> bool:
    """True when the declaration starting at ``offset`` is prefixed by ``export``."""
    head = content[max(0, offset - 40) : offset]
    return re.search(r"\bexport\s+(?:default\s+)?$", head) is not None


def is_route_type(name: str) -> bool:
    return "Route" in name.split(".")[-1]
