from collections.abc import Iterator

from tree_sitter import Node
from tree_sitter_language_pack import get_parser

from orm_annotator.core.names import short_name

_TYPE_DECLARATIONS = frozenset({"class_declaration", "trait_declaration", "interface_declaration"})


def _node_text(node: Node | None) -> str:
    if node is None or node.text is None:
        return ""
    return node.text.decode("utf-8")


def _walk(node: Node) -> Iterator[Node]:
    yield node
    for child in node.children:
        yield from _walk(child)


def _name_of(node: Node) -> str:
    name = node.child_by_field_name("name")
    if name is None:
        name = next((child for child in node.named_children if child.type == "name"), None)
    return _node_text(name)


def find_type_declarations(source: str, class_name: str) -> list[Node]:
    """Every class, trait or interface declaration named like ``class_name``, in source order."""
    parser = get_parser("php")
    tree = parser.parse(source.encode("utf-8"))
    wanted = short_name(class_name)
    return [node for node in _walk(tree.root_node) if node.type in _TYPE_DECLARATIONS and _name_of(node) == wanted]


def find_type_declaration(source: str, class_name: str) -> Node | None:
    declarations = find_type_declarations(source, class_name)
    return declarations[0] if declarations else None


def declaration_start_bytes(source: str, class_name: str) -> list[int]:
    """Byte offsets where each declaration of ``class_name`` begins, leading attributes included."""
    starts = []
    for node in find_type_declarations(source, class_name):
        previous = node.prev_named_sibling
        if previous is not None and previous.type == "attribute_list":
            node = previous
        starts.append(node.start_byte)
    return starts


def declared_method_names(source: str, class_name: str) -> set[str]:
    declaration = find_type_declaration(source, class_name)
    if declaration is None:
        return set()
    body = declaration.child_by_field_name("body")
    if body is None:
        return set()
    return {_name_of(child) for child in body.named_children if child.type == "method_declaration"}
