from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

import tree_sitter_typescript
from tree_sitter import Language, Node, Parser, Tree

from .constants import TYPESCRIPT_EXTENSIONS

_PARSERS: Dict[str, Parser] = {}

# Expression wrappers that do not change which literal a declaration holds.
TRANSPARENT_EXPRESSIONS = {
    "parenthesized_expression",
    "as_expression",
    "satisfies_expression",
    "non_null_expression",
}

STRING_TYPES = {"string"}


def grammar_for_path(path: Path) -> str:
    if path.suffix.lower() in TYPESCRIPT_EXTENSIONS:
        return "typescript"
    return "tsx"


def get_parser(grammar: str) -> Parser:
    parser = _PARSERS.get(grammar)
    if parser is None:
        if grammar == "typescript":
            language = Language(tree_sitter_typescript.language_typescript())
        else:
            language = Language(tree_sitter_typescript.language_tsx())
        parser = Parser(language)
        _PARSERS[grammar] = parser
    return parser


@dataclass
class SourceFile:
    path: Path
    text: str
    _data: Optional[bytes] = field(default=None, repr=False)
    _lines: Optional[List[str]] = field(default=None, repr=False)
    _tree: Optional[Tree] = field(default=None, repr=False)

    @property
    def data(self) -> bytes:
        if self._data is None:
            self._data = self.text.encode("utf-8")
        return self._data

    @property
    def lines(self) -> List[str]:
        if self._lines is None:
            self._lines = self.text.split("\n")
        return self._lines

    @property
    def tree(self) -> Tree:
        if self._tree is None:
            parser = get_parser(grammar_for_path(self.path))
            self._tree = parser.parse(self.data)
        return self._tree

    @property
    def root(self) -> Node:
        return self.tree.root_node

    def byte_offset(self, char_offset: int) -> int:
        if self.text.isascii():
            return char_offset
        return len(self.text[:char_offset].encode("utf-8"))

    def node_text(self, node: Node) -> str:
        return self.data[node.start_byte : node.end_byte].decode("utf-8", errors="replace")

    def line_of(self, node: Node) -> int:
        return node.start_point[0]

    def node_at(self, char_offset: int, types: Iterable[str]) -> Optional[Node]:
        return node_starting_at(self.root, self.byte_offset(char_offset), set(types))


def node_starting_at(root: Node, offset: int, types: Iterable[str]) -> Optional[Node]:
    wanted = set(types)
    node: Optional[Node] = root
    while node is not None:
        if node.start_byte == offset and node.type in wanted:
            return node
        nxt = None
        for child in node.children:
            if child.start_byte <= offset < child.end_byte:
                nxt = child
                break
        node = nxt
    return None


def iter_nodes(node: Node, types: Optional[Iterable[str]] = None) -> Iterator[Node]:
    """Pre-order walk; yields every node, or only those of ``types``."""
    wanted = set(types) if types is not None else None
    stack = [node]
    while stack:
        current = stack.pop()
        if wanted is None or current.type in wanted:
            yield current
        stack.extend(reversed(current.children))


def named_elements(node: Node) -> List[Node]:
    return [child for child in node.named_children if child.type != "comment"]


def unwrap_expression(node: Optional[Node]) -> Optional[Node]:
    while node is not None and node.type in TRANSPARENT_EXPRESSIONS:
        inner = named_elements(node)
        if not inner:
            return None
        node = inner[0]
    return node


def string_value(source: SourceFile, node: Optional[Node]) -> Optional[str]:
    node = unwrap_expression(node)
    if node is None or node.type not in STRING_TYPES:
        return None
    raw = source.node_text(node)
    if len(raw) < 2:
        return None
    return raw[1:-1]


def property_name(source: SourceFile, key: Optional[Node]) -> Optional[str]:
    if key is None:
        return None
    if key.type in {"property_identifier", "identifier"}:
        return source.node_text(key)
    if key.type in STRING_TYPES:
        return string_value(source, key)
    return None


def object_properties(source: SourceFile, obj: Node) -> List[Tuple[str, Node]]:
    props: List[Tuple[str, Node]] = []
    for child in obj.named_children:
        if child.type != "pair":
            continue
        name = property_name(source, child.child_by_field_name("key"))
        value = child.child_by_field_name("value")
        if name and value is not None:
            props.append((name, value))
    return props


def object_property(source: SourceFile, obj: Node, name: str) -> Optional[Node]:
    for key, value in object_properties(source, obj):
        if key == name:
            return value
    return None


def call_name(source: SourceFile, call: Node) -> str:
    func = call.child_by_field_name("function")
    if func is None:
        return ""
    if func.type == "member_expression":
        prop = func.child_by_field_name("property")
        return source.node_text(prop) if prop is not None else ""
    return source.node_text(func)


def call_arguments(call: Node) -> List[Node]:
    args = call.child_by_field_name("arguments")
    if args is None:
        return []
    return named_elements(args)


def jsx_tag(node: Node) -> Optional[Node]:
    """Opening or self-closing tag of a JSX element node."""
    if node.type == "jsx_element":
        return node.child_by_field_name("open_tag") or (node.named_children[0] if node.named_children else None)
    if node.type in {"jsx_opening_element", "jsx_self_closing_element"}:
        return node
    return None


def jsx_tag_name(source: SourceFile, node: Node) -> str:
    tag = jsx_tag(node)
    if tag is None:
        return ""
    name = tag.child_by_field_name("name")
    return source.node_text(name) if name is not None else ""


def jsx_attributes(source: SourceFile, node: Node) -> Dict[str, Optional[Node]]:
    tag = jsx_tag(node)
    attrs: Dict[str, Optional[Node]] = {}
    if tag is None:
        return attrs
    for child in tag.named_children:
        if child.type != "jsx_attribute" or not child.named_children:
            continue
        name_node = child.named_children[0]
        value = child.named_children[1] if len(child.named_children) > 1 else None
        attrs[source.node_text(name_node)] = value
    return attrs


def jsx_expression_inner(node: Optional[Node]) -> Optional[Node]:
    if node is None or node.type != "jsx_expression":
        return None
    inner = named_elements(node)
    return unwrap_expression(inner[0]) if inner else None


def jsx_child_elements(node: Node) -> List[Node]:
    if node.type != "jsx_element":
        return []
    return [
        child
        for child in node.named_children
        if child.type in {"jsx_element", "jsx_self_closing_element"}
    ]
