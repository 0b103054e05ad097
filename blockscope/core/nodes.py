"""
Nodes -- Syntax tree model consumed by rules

A small, parser-independent tree. The tree-sitter builder produces it;
tests build it by hand. Node kinds form a closed Enum so that handler
tables and the classifier switch over a fixed set of cases.

Conventions:
- children: every child node in source order (drives traversal)
- fields: named structural slots pointing at members of children
  (e.g. "id", "params", "body", "declarations")
- Field checks compare node identity, never structure
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Union


class NodeKind(Enum):
    """Syntactic categories the analysis distinguishes."""
    PROGRAM = "Program"
    BLOCK = "BlockStatement"
    VARIABLE_DECLARATION = "VariableDeclaration"
    VARIABLE_DECLARATOR = "VariableDeclarator"
    FUNCTION_DECLARATION = "FunctionDeclaration"
    FUNCTION_EXPRESSION = "FunctionExpression"
    ARROW_FUNCTION = "ArrowFunctionExpression"
    CLASS_DECLARATION = "ClassDeclaration"
    CLASS_EXPRESSION = "ClassExpression"
    CATCH_CLAUSE = "CatchClause"
    FOR_STATEMENT = "ForStatement"
    FOR_IN_STATEMENT = "ForInStatement"
    IMPORT_DECLARATION = "ImportDeclaration"
    IMPORT_SPECIFIER = "ImportSpecifier"
    EXPORT_DECLARATION = "ExportDeclaration"
    OBJECT_PATTERN = "ObjectPattern"
    ARRAY_PATTERN = "ArrayPattern"
    ASSIGNMENT_PATTERN = "AssignmentPattern"
    PATTERN_PROPERTY = "Property"
    REST_ELEMENT = "RestElement"
    IDENTIFIER = "Identifier"
    PROPERTY_NAME = "PropertyName"
    OTHER = "Other"


class Phase(Enum):
    """When a handler fires relative to a node's children."""
    ENTER = "enter"
    EXIT = "exit"


FUNCTION_KINDS = frozenset({
    NodeKind.FUNCTION_DECLARATION,
    NodeKind.FUNCTION_EXPRESSION,
    NodeKind.ARROW_FUNCTION,
})

CLASS_KINDS = frozenset({NodeKind.CLASS_DECLARATION, NodeKind.CLASS_EXPRESSION})

PATTERN_KINDS = frozenset({
    NodeKind.OBJECT_PATTERN,
    NodeKind.ARRAY_PATTERN,
    NodeKind.ASSIGNMENT_PATTERN,
    NodeKind.PATTERN_PROPERTY,
    NodeKind.REST_ELEMENT,
})


FieldValue = Union["SyntaxNode", List["SyntaxNode"], None]


@dataclass(eq=False)
class SyntaxNode:
    """
    One node of the analysed tree.

    Attributes:
        kind: Closed syntactic category
        line: 1-based line of the node start
        column: 1-based column of the node start
        name: Identifier text (IDENTIFIER / PROPERTY_NAME only)
        children: Child nodes in source order
        fields: Named structural slots (subset of children)
        type_name: Parser-specific type, kept for OTHER nodes and debugging
        value: Literal payload for tokens such as declaration kind ("var")
    """
    kind: NodeKind
    line: int = 1
    column: int = 1
    name: Optional[str] = None
    children: List["SyntaxNode"] = field(default_factory=list)
    fields: Dict[str, FieldValue] = field(default_factory=dict)
    type_name: str = ""
    value: Optional[str] = None

    def get(self, field_name: str) -> FieldValue:
        """Return a named field, or None when absent."""
        return self.fields.get(field_name)

    def get_list(self, field_name: str) -> List["SyntaxNode"]:
        """Return a list field, normalising absent/single values to a list."""
        value = self.fields.get(field_name)
        if value is None:
            return []
        if isinstance(value, list):
            return value
        return [value]

    def __repr__(self) -> str:
        label = self.name if self.name is not None else self.type_name
        return f"SyntaxNode({self.kind.name}, {label!r}, {self.line}:{self.column})"


def bound_names(target: Optional[SyntaxNode]) -> List[str]:
    """
    Collect the names a binding target introduces.

    Handles plain identifiers and destructuring patterns, including
    defaults ("a = 1"), rest elements and nested patterns. Default value
    expressions are not bindings and are skipped.
    """
    if target is None:
        return []

    if target.kind == NodeKind.IDENTIFIER:
        return [target.name]

    if target.kind == NodeKind.ASSIGNMENT_PATTERN:
        return bound_names(target.get("left"))

    if target.kind == NodeKind.REST_ELEMENT:
        return bound_names(target.get("argument"))

    if target.kind == NodeKind.PATTERN_PROPERTY:
        return bound_names(target.get("value"))

    if target.kind in (NodeKind.OBJECT_PATTERN, NodeKind.ARRAY_PATTERN):
        names: List[str] = []
        for element in target.children:
            names.extend(bound_names(element))
        return names

    return []


def declared_names(statement: SyntaxNode) -> List[str]:
    """
    Names a statement declares into the block that directly contains it.

    Used by the block pre-scan and by ambient (top-level) collection.
    Covers var/let/const, function and class declarations, loop heads
    with a declaration, and the same statements wrapped in export.
    """
    kind = statement.kind

    if kind == NodeKind.VARIABLE_DECLARATION:
        names: List[str] = []
        for declarator in statement.get_list("declarations"):
            names.extend(bound_names(declarator.get("id")))
        return names

    if kind in (NodeKind.FUNCTION_DECLARATION, NodeKind.CLASS_DECLARATION):
        ident = statement.get("id")
        return [ident.name] if ident is not None else []

    if kind in (NodeKind.FOR_STATEMENT, NodeKind.FOR_IN_STATEMENT):
        head = statement.get("init") if kind == NodeKind.FOR_STATEMENT else statement.get("left")
        if head is not None and head.kind == NodeKind.VARIABLE_DECLARATION:
            return declared_names(head)
        return []

    if kind == NodeKind.EXPORT_DECLARATION:
        inner = statement.get("declaration")
        return declared_names(inner) if inner is not None else []

    if kind == NodeKind.IMPORT_DECLARATION:
        return [spec.get("local").name for spec in statement.get_list("specifiers")
                if spec.get("local") is not None]

    return []
