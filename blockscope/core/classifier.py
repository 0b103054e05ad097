"""
Classifier -- Declaration vs. reference position for identifiers

Purely syntactic: the verdict depends on the parent's kind and on which
field of the parent holds the identifier. The scope stack is never
consulted.
"""

from typing import Optional

from .nodes import SyntaxNode, NodeKind, FUNCTION_KINDS, CLASS_KINDS


def _is_field(node: SyntaxNode, parent: SyntaxNode, field_name: str) -> bool:
    return parent.get(field_name) is node


def _in_list_field(node: SyntaxNode, parent: SyntaxNode, field_name: str) -> bool:
    return any(item is node for item in parent.get_list(field_name))


def is_declaration(node: SyntaxNode, parent: Optional[SyntaxNode]) -> bool:
    """
    Determine whether an identifier introduces a binding.

    Args:
        node: The identifier node
        parent: Its immediate syntactic parent (None at the root)

    Returns:
        True when the identifier is in declaration position
    """
    if parent is None:
        return False

    kind = parent.kind

    if kind in FUNCTION_KINDS:
        return _is_field(node, parent, "id") or _in_list_field(node, parent, "params")
    if kind == NodeKind.VARIABLE_DECLARATOR:
        return _is_field(node, parent, "id")
    if kind == NodeKind.CATCH_CLAUSE:
        return _is_field(node, parent, "param")
    if kind in CLASS_KINDS:
        return _is_field(node, parent, "id")

    # Pattern kinds only exist in binding positions
    if kind == NodeKind.ARRAY_PATTERN:
        return _in_list_field(node, parent, "elements")
    if kind == NodeKind.OBJECT_PATTERN:
        return any(child is node for child in parent.children)
    if kind == NodeKind.PATTERN_PROPERTY:
        return _is_field(node, parent, "value")
    if kind == NodeKind.ASSIGNMENT_PATTERN:
        return _is_field(node, parent, "left")
    if kind == NodeKind.REST_ELEMENT:
        return _is_field(node, parent, "argument")
    if kind == NodeKind.IMPORT_SPECIFIER:
        return _is_field(node, parent, "local")

    return False


def is_reference(node: SyntaxNode, parent: Optional[SyntaxNode]) -> bool:
    """An identifier in any position that is not a declaration."""
    return node.kind == NodeKind.IDENTIFIER and not is_declaration(node, parent)
