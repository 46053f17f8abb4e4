from __future__ import annotations

from typing import List, Optional

from tree_sitter import Node

from ir import Route
from .syntax import SourceFile, named_elements, object_property, string_value, unwrap_expression
from .tags import tags_above_line


def route_path(source: SourceFile, obj: Node) -> Optional[str]:
    value = string_value(source, object_property(source, obj, "path"))
    if value is None:
        return None
    value = value.strip()
    return value or None


def routes_from_array(source: SourceFile, array: Optional[Node]) -> List[Route]:
    """Route objects of one array literal, in source order.

    Objects without a string ``path`` are dropped unless they carry children
    of their own (layout routes); those children take the object's place.
    """
    array = unwrap_expression(array)
    if array is None or array.type != "array":
        return []
    routes: List[Route] = []
    for element in named_elements(array):
        obj = unwrap_expression(element)
        if obj is None or obj.type != "object":
            continue
        path = route_path(source, obj)
        children = extract_children(source, obj)
        if path is None:
            if children:
                routes.extend(children)
            continue
        routes.append(
            Route(
                path=path,
                tags=tags_above_line(source.lines, source.line_of(obj)),
                children=children,
            )
        )
    return routes


def extract_children(source: SourceFile, obj: Node) -> Optional[List[Route]]:
    block = unwrap_expression(object_property(source, obj, "children"))
    if block is None or block.type != "array":
        return None
    children = routes_from_array(source, block)
    return children or None
