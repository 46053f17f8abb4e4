"""Per-shape route parsers for the component-tree ecosystem.

Each parser takes one source file and returns ``(path, Route)`` contributions;
none of them mutates shared state. The engine folds the contributions of all
parsers, in ``REACT_PASSES`` order, into the route store.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Dict, List, Optional, Sequence, Tuple

from tree_sitter import Node

from ir import Route
from .children import routes_from_array
from .imports import load_import_target, parse_imports, parse_specifiers
from .patterns import (
    ARRAY_SHAPES,
    ELEMENT_BUILDER,
    ROUTER_BUILDERS,
    ArrayShape,
    is_exported_at,
    is_route_type,
    pattern,
)
from .syntax import (
    SourceFile,
    call_arguments,
    call_name,
    iter_nodes,
    jsx_attributes,
    jsx_child_elements,
    jsx_expression_inner,
    jsx_tag_name,
    string_value,
    unwrap_expression,
)
from .tags import tags_above_line

if TYPE_CHECKING:
    from .context import ScanContext

Contribution = Tuple[str, Route]
Parser = Callable[[SourceFile, "ScanContext"], List[Contribution]]

COMPONENT_ATTRIBUTES = ("element", "Component", "component")
ELEMENT_TAGS = {"jsx_opening_element", "jsx_self_closing_element"}


def contributions(routes: Sequence[Route]) -> List[Contribution]:
    return [(route.path, route) for route in routes]


def has_path_properties(source: SourceFile) -> bool:
    return pattern("path_property").search(source.text) is not None


# -- array declarations -----------------------------------------------------


def declared_arrays(source: SourceFile, shape: ArrayShape) -> List[Tuple[Optional[str], Node]]:
    found: Dict[int, Tuple[Optional[str], Node]] = {}
    for name in shape.patterns:
        for match in pattern(name).finditer(source.text):
            if shape.scope == "local" and is_exported_at(source.text, match.start()):
                continue
            if shape.route_types_only:
                type_name = match.group("type") or match.group("generic") or ""
                if not is_route_type(type_name):
                    continue
            node = source.node_at(match.start("open"), {"array"})
            if node is None:
                continue
            found[node.start_byte] = (match.groupdict().get("name"), node)
    return [found[offset] for offset in sorted(found)]


def routes_for_shape(source: SourceFile, shape: ArrayShape) -> List[Route]:
    routes: List[Route] = []
    for _, node in declared_arrays(source, shape):
        routes.extend(routes_from_array(source, node))
    return routes


def find_local_array(source: SourceFile, name: str) -> Optional[Node]:
    for key in ("local_array", "typed_array", "export_array"):
        for match in pattern(key).finditer(source.text):
            if match.group("name") != name:
                continue
            node = source.node_at(match.start("open"), {"array"})
            if node is not None:
                return node
    return None


def export_aliases(source: SourceFile) -> Dict[str, str]:
    """``export { a, b as c }`` clauses as exported name -> local name."""
    aliases: Dict[str, str] = {}
    for match in pattern("export_named").finditer(source.text):
        aliases.update(parse_specifiers(match.group("names")))
    return aliases


def default_export_array(source: SourceFile) -> Optional[Node]:
    for match in pattern("export_default_array").finditer(source.text):
        node = source.node_at(match.start("open"), {"array"})
        if node is not None:
            return node
    for match in pattern("export_default_name").finditer(source.text):
        node = find_local_array(source, match.group("name"))
        if node is not None:
            return node
    local = export_aliases(source).get("default")
    if local:
        return find_local_array(source, local)
    return None


def find_exported_array(source: SourceFile, name: str) -> Optional[Node]:
    if name == "default":
        return default_export_array(source)
    for match in pattern("export_array").finditer(source.text):
        if match.group("name") == name:
            node = source.node_at(match.start("open"), {"array"})
            if node is not None:
                return node
    local = export_aliases(source).get(name)
    if local:
        return find_local_array(source, local)
    return None


def named_export_routes(source: SourceFile) -> List[Route]:
    arrays: Dict[int, Node] = {}
    for match in pattern("export_array").finditer(source.text):
        node = source.node_at(match.start("open"), {"array"})
        if node is not None:
            arrays[node.start_byte] = node
    for exported, local in export_aliases(source).items():
        if exported == "default":
            continue
        node = find_local_array(source, local)
        if node is not None:
            arrays[node.start_byte] = node
    routes: List[Route] = []
    for offset in sorted(arrays):
        routes.extend(routes_from_array(source, arrays[offset]))
    return routes


def default_export_routes(source: SourceFile) -> List[Route]:
    return routes_from_array(source, default_export_array(source))


# -- passes -----------------------------------------------------------------


def parse_exported_routes(source: SourceFile, ctx: "ScanContext") -> List[Contribution]:
    if not has_path_properties(source):
        return []
    routes = routes_for_shape(source, ARRAY_SHAPES["exported"])
    seen = {route.path for route in routes}
    # `export default routes` / `export { routes }` naming a local array
    for route in named_export_routes(source) + default_export_routes(source):
        if route.path not in seen:
            routes.append(route)
            seen.add(route.path)
    return contributions(routes)


def parse_imported_routes(source: SourceFile, ctx: "ScanContext") -> List[Contribution]:
    routes: List[Route] = []
    for statement in parse_imports(source):
        target = load_import_target(ctx, source.path, statement.source)
        if target is None or not has_path_properties(target):
            continue
        if statement.named:
            routes.extend(named_export_routes(target))
        if statement.default:
            routes.extend(default_export_routes(target))
    return contributions(routes)


def route_from_element(source: SourceFile, node: Node, children: Optional[List[Route]] = None) -> Optional[Route]:
    attrs = jsx_attributes(source, node)
    value = attrs.get("path")
    path = string_value(source, value)
    if path is None:
        path = string_value(source, jsx_expression_inner(value))
    if path is None or not path.strip():
        return None
    component = None
    for attr in COMPONENT_ATTRIBUTES:
        inner = jsx_expression_inner(attrs.get(attr))
        if inner is not None:
            component = source.node_text(inner).strip() or None
            break
    return Route(
        path=path.strip(),
        component=component,
        tags=tags_above_line(source.lines, source.line_of(node)),
        children=children or None,
    )


def parse_route_elements(source: SourceFile, ctx: "ScanContext") -> List[Contribution]:
    routes: List[Route] = []
    for match in pattern("route_element").finditer(source.text):
        node = source.node_at(match.start(), ELEMENT_TAGS)
        if node is None:
            continue
        route = route_from_element(source, node)
        if route is not None:
            routes.append(route)
    return contributions(routes)


def parse_route_constants(source: SourceFile, ctx: "ScanContext") -> List[Contribution]:
    if not has_path_properties(source):
        return []
    return contributions(routes_for_shape(source, ARRAY_SHAPES["constants"]))


def parse_route_object_trees(source: SourceFile, ctx: "ScanContext") -> List[Contribution]:
    if not has_path_properties(source):
        return []
    return contributions(routes_for_shape(source, ARRAY_SHAPES["typed"]))


def is_routes_file(source: SourceFile, ctx: "ScanContext") -> bool:
    return source.path.name in ctx.options.routes_file_names


def parse_routes_file(source: SourceFile, ctx: "ScanContext") -> List[Contribution]:
    if not is_routes_file(source, ctx) or not has_path_properties(source):
        return []
    return contributions(routes_for_shape(source, ARRAY_SHAPES["routes_file"]))


# -- router builders and providers ------------------------------------------


def element_tree_routes(source: SourceFile, node: Optional[Node]) -> List[Route]:
    """Routes of a ``<Route>`` element tree; nesting becomes ``children``."""
    node = unwrap_expression(node)
    if node is None or node.type not in {"jsx_element", "jsx_self_closing_element"}:
        return []
    nested: List[Route] = []
    for child in jsx_child_elements(node):
        nested.extend(element_tree_routes(source, child))
    if jsx_tag_name(source, node) != "Route":
        return nested
    route = route_from_element(source, node, children=nested)
    if route is None:
        # layout or index route without a path of its own
        return nested
    return [route]


def find_declared_value(source: SourceFile, name: str) -> Optional[Node]:
    for declarator in iter_nodes(source.root, {"variable_declarator"}):
        ident = declarator.child_by_field_name("name")
        if ident is None or source.node_text(ident) != name:
            continue
        return unwrap_expression(declarator.child_by_field_name("value"))
    return None


def resolve_array_reference(source: SourceFile, ctx: "ScanContext", name: str) -> List[Route]:
    """Routes of the array bound to ``name``: same file first, then imports.

    Imports are tried in file order; the first one that yields routes wins.
    """
    node = find_local_array(source, name)
    if node is not None:
        return routes_from_array(source, node)
    for statement in parse_imports(source):
        exported = statement.exported_name(name)
        if exported is None:
            continue
        target = load_import_target(ctx, source.path, statement.source)
        if target is None:
            continue
        routes = routes_from_array(target, find_exported_array(target, exported))
        if routes:
            return routes
    return []


def builder_routes(source: SourceFile, ctx: "ScanContext", call: Node) -> List[Route]:
    args = call_arguments(call)
    if not args:
        return []
    arg = unwrap_expression(args[0])
    if arg is None:
        return []
    if call_name(source, call) == ELEMENT_BUILDER:
        return element_tree_routes(source, arg)
    if arg.type == "array":
        return routes_from_array(source, arg)
    if arg.type == "identifier":
        return resolve_array_reference(source, ctx, source.node_text(arg))
    # nested createRoutesFromElements(...) calls are matched on their own
    return []


def provider_routes(source: SourceFile, ctx: "ScanContext", prop: str, expr: Optional[Node]) -> List[Route]:
    if expr is None:
        return []
    if expr.type == "array":
        return routes_from_array(source, expr)
    if expr.type != "identifier":
        return []
    name = source.node_text(expr)
    value = find_declared_value(source, name)
    if value is not None:
        if value.type == "array":
            return routes_from_array(source, value)
        # a router built in this file is picked up through its builder call
        return []
    if prop == "routes":
        return resolve_array_reference(source, ctx, name)
    return []


def parse_router_builders(source: SourceFile, ctx: "ScanContext") -> List[Contribution]:
    routes: List[Route] = []
    seen = set()
    for key in ROUTER_BUILDERS:
        for match in pattern(key).finditer(source.text):
            call = source.node_at(match.start("builder"), {"call_expression"})
            if call is None or call.start_byte in seen:
                continue
            seen.add(call.start_byte)
            routes.extend(builder_routes(source, ctx, call))
    for match in pattern("router_provider").finditer(source.text):
        expr = source.node_at(match.start("open"), {"jsx_expression"})
        if expr is None:
            continue
        routes.extend(provider_routes(source, ctx, match.group("prop"), jsx_expression_inner(expr)))
    return contributions(routes)


REACT_PASSES: Tuple[Tuple[str, Parser], ...] = (
    ("exported", parse_exported_routes),
    ("imported", parse_imported_routes),
    ("inline", parse_route_elements),
    ("constants", parse_route_constants),
    ("typed", parse_route_object_trees),
    ("builders", parse_router_builders),
    ("routes_file", parse_routes_file),
)
