"""
TreeBuilder -- Converts tree-sitter parse trees into SyntaxNode trees.

Structural node types (declarations, functions, classes, catch clauses,
loop heads, imports, exports and destructuring patterns) get dedicated
handling so their binding slots land in SyntaxNode.fields. Every other
named node becomes NodeKind.OTHER with its named children preserved, so
identifiers nested anywhere are still visited.

Comments are not part of the tree; they are collected separately so the
linter can read /* global */ directives.

Usage:
    from blockscope.parsing import TreeBuilder

    parsed = TreeBuilder().build("if (a) { var b = 1; }")
    parsed.tree          # SyntaxNode(PROGRAM, ...)
    parsed.comments      # [Comment(...), ...]
"""

from dataclasses import dataclass, field
from typing import Callable, Dict, Iterator, List, Optional, Tuple, TYPE_CHECKING

from ..core.nodes import SyntaxNode, NodeKind
from ..errors import BlockscopeError, ParseError
from .config import LanguageConfig
from .languages import JAVASCRIPT_CONFIG

if TYPE_CHECKING:
    from tree_sitter import Parser, Node

# Lazy import for tree-sitter-language-pack
_language_pack_available = None


def _check_language_pack() -> bool:
    """Check if tree-sitter-language-pack is available."""
    global _language_pack_available
    if _language_pack_available is None:
        try:
            import tree_sitter_language_pack  # noqa: F401
            _language_pack_available = True
        except ImportError:
            _language_pack_available = False
    return _language_pack_available


@dataclass
class Comment:
    """A source comment with its 1-based start position."""
    text: str
    line: int
    column: int


@dataclass
class ParsedSource:
    """Result of building one source text."""
    tree: SyntaxNode
    comments: List[Comment] = field(default_factory=list)


FUNCTION_DECLARATION_TYPES = frozenset({
    "function_declaration",
    "generator_function_declaration",
})

FUNCTION_EXPRESSION_TYPES = frozenset({
    "function",              # older grammars
    "function_expression",
    "generator_function",
    "method_definition",
})

JSX_ELEMENT_TYPES = frozenset({
    "jsx_opening_element",
    "jsx_closing_element",
    "jsx_self_closing_element",
})


class TreeBuilder:
    """
    Builds SyntaxNode trees from source text.

    One builder can be reused for many sources; per-source state is reset
    on every build() call. Not thread-safe.
    """

    def __init__(self, config: LanguageConfig = JAVASCRIPT_CONFIG):
        """
        Initialize builder for one language.

        Args:
            config: Language configuration (grammar and node mappings)
        """
        self.config = config
        self._parser: Optional['Parser'] = None
        self._source = b""
        self._line_starts: List[int] = [0]
        self._comments: List[Comment] = []

        self._structural: Dict[str, Callable[['Node'], SyntaxNode]] = {
            "variable_declaration": self._declaration,
            "lexical_declaration": self._declaration,
            "variable_declarator": self._declarator,
            "arrow_function": self._function,
            "class_declaration": self._class,
            "class": self._class,
            "catch_clause": self._catch,
            "for_statement": self._for,
            "for_in_statement": self._for_in,
            "import_statement": self._import,
            "export_statement": self._export,
        }
        for ts_type in FUNCTION_DECLARATION_TYPES | FUNCTION_EXPRESSION_TYPES:
            self._structural[ts_type] = self._function
        for ts_type in JSX_ELEMENT_TYPES:
            self._structural[ts_type] = self._jsx_element
        # <svg:rect xlink:href=...>
        self._structural["jsx_namespace_name"] = lambda ts: self._name(NodeKind.PROPERTY_NAME, ts)

    # =========================================================================
    # Entry points
    # =========================================================================

    def _get_parser(self) -> 'Parser':
        if self._parser is not None:
            return self._parser

        if not _check_language_pack():
            raise BlockscopeError(
                "tree-sitter-language-pack is not installed",
                details="pip install tree-sitter-language-pack",
            )

        from tree_sitter_language_pack import get_parser
        self._parser = get_parser(self.config.tree_sitter_name)
        return self._parser

    def build(self, source: str) -> ParsedSource:
        """
        Parse source text and convert it.

        Args:
            source: Complete source text

        Returns:
            ParsedSource with the PROGRAM tree and collected comments

        Raises:
            ParseError: If the source contains a syntax error
        """
        self._source = source.encode("utf-8")
        self._line_starts = [0]
        for index, byte in enumerate(self._source):
            if byte == 0x0A:
                self._line_starts.append(index + 1)
        self._comments = []

        tree = self._get_parser().parse(self._source)
        root = tree.root_node
        if root.has_error:
            raise self._parse_error(root)

        program = self._build(root)
        if program is None or program.kind != NodeKind.PROGRAM:
            raise ParseError(f"Unexpected root node '{root.type}'")
        return ParsedSource(tree=program, comments=list(self._comments))

    def _parse_error(self, root: 'Node') -> ParseError:
        """Locate the first syntax error below root."""
        stack = [root]
        while stack:
            node = stack.pop()
            if node.is_missing:
                line, column = self._position(node)
                return ParseError(f"Missing {node.type}", line, column)
            if node.type == "ERROR":
                line, column = self._position(node)
                text = self._text(node).strip()
                snippet = text.splitlines()[0][:20] if text else ""
                message = f"Unexpected token {snippet}" if snippet else "Unexpected token"
                return ParseError(message, line, column)
            if node.has_error:
                stack.extend(reversed(node.children))
        return ParseError("Unexpected token")

    # =========================================================================
    # Helpers
    # =========================================================================

    def _text(self, ts: 'Node') -> str:
        return self._source[ts.start_byte:ts.end_byte].decode("utf-8", errors="replace")

    def _position(self, ts: 'Node') -> Tuple[int, int]:
        """1-based line and character column of a node start."""
        row = ts.start_point[0]
        line_start = self._line_starts[row] if row < len(self._line_starts) else 0
        prefix = self._source[line_start:ts.start_byte].decode("utf-8", errors="replace")
        return row + 1, len(prefix) + 1

    def _node(self, kind: NodeKind, ts: 'Node', **kwargs) -> SyntaxNode:
        line, column = self._position(ts)
        return SyntaxNode(kind=kind, line=line, column=column, type_name=ts.type, **kwargs)

    def _named(self, ts: 'Node') -> Iterator[Tuple[Optional[str], 'Node']]:
        """Named children with their field names, comments collected on the way."""
        for index, child in enumerate(ts.children):
            if not child.is_named:
                continue
            if child.type in self.config.comment_types:
                self._collect_comment(child)
                continue
            yield ts.field_name_for_child(index), child

    def _collect_comment(self, ts: 'Node') -> None:
        line, column = self._position(ts)
        self._comments.append(Comment(text=self._text(ts), line=line, column=column))

    def _name(self, kind: NodeKind, ts: 'Node') -> SyntaxNode:
        return self._node(kind, ts, name=self._text(ts))

    # =========================================================================
    # Generic conversion
    # =========================================================================

    def _build(self, ts: 'Node') -> Optional[SyntaxNode]:
        """Convert one node in expression/statement position."""
        ts_type = ts.type

        if ts_type in self.config.comment_types:
            self._collect_comment(ts)
            return None

        handler = self._structural.get(ts_type)
        if handler is not None:
            return handler(ts)

        if ts_type in self.config.property_name_types:
            return self._name(NodeKind.PROPERTY_NAME, ts)

        kind = self.config.node_kinds.get(ts_type, NodeKind.OTHER)
        if kind == NodeKind.IDENTIFIER:
            return self._name(NodeKind.IDENTIFIER, ts)

        node = self._node(kind, ts)
        node.children = self._build_all(ts)
        return node

    def _build_all(self, ts: 'Node') -> List[SyntaxNode]:
        children = []
        for _, child in self._named(ts):
            built = self._build(child)
            if built is not None:
                children.append(built)
        return children

    def _finish(self, node: SyntaxNode, items: List[Tuple[Optional[str], SyntaxNode]]) -> SyntaxNode:
        """Attach (field, child) pairs in source order; list fields accumulate."""
        for field_name, child in items:
            node.children.append(child)
            if field_name is None:
                continue
            if field_name in ("params", "declarations", "specifiers", "elements"):
                node.fields.setdefault(field_name, []).append(child)
            else:
                node.fields[field_name] = child
        return node

    # =========================================================================
    # Binding patterns
    # =========================================================================

    def _pattern(self, ts: 'Node') -> Optional[SyntaxNode]:
        """Convert one node in binding position."""
        ts_type = ts.type

        if ts_type in ("identifier", "shorthand_property_identifier_pattern"):
            return self._name(NodeKind.IDENTIFIER, ts)

        if ts_type == "object_pattern":
            node = self._node(NodeKind.OBJECT_PATTERN, ts)
            node.children = [p for p in (self._pattern(c) for _, c in self._named(ts)) if p]
            return node

        if ts_type == "array_pattern":
            node = self._node(NodeKind.ARRAY_PATTERN, ts)
            items = [("elements", p) for p in (self._pattern(c) for _, c in self._named(ts)) if p]
            return self._finish(node, items)

        if ts_type == "pair_pattern":
            node = self._node(NodeKind.PATTERN_PROPERTY, ts)
            items = []
            for field_name, child in self._named(ts):
                if field_name == "value":
                    built = self._pattern(child)
                else:
                    field_name = "key" if field_name == "key" else None
                    built = self._build(child)
                if built is not None:
                    items.append((field_name, built))
            return self._finish(node, items)

        if ts_type in ("assignment_pattern", "object_assignment_pattern"):
            node = self._node(NodeKind.ASSIGNMENT_PATTERN, ts)
            items = []
            for field_name, child in self._named(ts):
                if field_name == "left":
                    built = self._pattern(child)
                else:
                    field_name = "right" if field_name == "right" else None
                    built = self._build(child)
                if built is not None:
                    items.append((field_name, built))
            return self._finish(node, items)

        if ts_type == "rest_pattern":
            node = self._node(NodeKind.REST_ELEMENT, ts)
            for _, child in self._named(ts):
                built = self._pattern(child)
                if built is not None:
                    field_name = None if "argument" in node.fields else "argument"
                    self._finish(node, [(field_name, built)])
            return node

        # Member expressions in assignment targets, parenthesized patterns...
        return self._build(ts)

    # =========================================================================
    # Structural nodes
    # =========================================================================

    def _declaration(self, ts: 'Node') -> SyntaxNode:
        """var / let / const statement."""
        if ts.type == "variable_declaration":
            keyword = "var"
        else:
            kind_node = ts.child_by_field_name("kind")
            keyword = self._text(kind_node) if kind_node is not None else "let"

        node = self._node(NodeKind.VARIABLE_DECLARATION, ts, value=keyword)
        items = []
        for _, child in self._named(ts):
            built = self._build(child)
            if built is not None:
                field_name = "declarations" if built.kind == NodeKind.VARIABLE_DECLARATOR else None
                items.append((field_name, built))
        return self._finish(node, items)

    def _declarator(self, ts: 'Node') -> SyntaxNode:
        node = self._node(NodeKind.VARIABLE_DECLARATOR, ts)
        items = []
        for field_name, child in self._named(ts):
            if field_name == "name":
                items.append(("id", self._pattern(child)))
            else:
                built = self._build(child)
                if built is not None:
                    items.append(("init" if field_name == "value" else None, built))
        return self._finish(node, items)

    def _function(self, ts: 'Node') -> SyntaxNode:
        """Function declarations, expressions, methods and arrows."""
        if ts.type in FUNCTION_DECLARATION_TYPES:
            kind = NodeKind.FUNCTION_DECLARATION
        elif ts.type == "arrow_function":
            kind = NodeKind.ARROW_FUNCTION
        else:
            kind = NodeKind.FUNCTION_EXPRESSION
        is_method = ts.type == "method_definition"

        node = self._node(kind, ts)
        items = []
        for field_name, child in self._named(ts):
            if field_name == "name" and not is_method:
                items.append(("id", self._name(NodeKind.IDENTIFIER, child)))
            elif field_name == "name":
                # Method keys never bind or reference
                built = self._build(child)
                if built is not None:
                    items.append(("key", built))
            elif field_name == "parameters":
                # formal_parameters is flattened so each parameter is a direct child
                for param in self._parameters(child):
                    items.append(("params", param))
            elif field_name == "parameter":
                items.append(("params", self._pattern(child)))
            elif field_name == "body":
                built = self._build(child)
                if built is not None:
                    items.append(("body", built))
            else:
                built = self._build(child)
                if built is not None:
                    items.append((None, built))
        return self._finish(node, items)

    def _parameters(self, ts: 'Node') -> List[SyntaxNode]:
        params = []
        for _, child in self._named(ts):
            built = self._pattern(child)
            if built is not None:
                params.append(built)
        return params

    def _class(self, ts: 'Node') -> SyntaxNode:
        kind = NodeKind.CLASS_DECLARATION if ts.type == "class_declaration" else NodeKind.CLASS_EXPRESSION
        node = self._node(kind, ts)
        items = []
        for field_name, child in self._named(ts):
            if field_name == "name":
                items.append(("id", self._name(NodeKind.IDENTIFIER, child)))
            else:
                built = self._build(child)
                if built is not None:
                    items.append(("body" if field_name == "body" else None, built))
        return self._finish(node, items)

    def _catch(self, ts: 'Node') -> SyntaxNode:
        node = self._node(NodeKind.CATCH_CLAUSE, ts)
        items = []
        for field_name, child in self._named(ts):
            if field_name == "parameter":
                built = self._pattern(child)
                field_name = "param"
            else:
                built = self._build(child)
            if built is not None:
                items.append((field_name if field_name in ("param", "body") else None, built))
        return self._finish(node, items)

    def _for(self, ts: 'Node') -> SyntaxNode:
        """for (init; test; update) -- only a declaration head is exposed as "init"."""
        node = self._node(NodeKind.FOR_STATEMENT, ts)
        items = []
        for field_name, child in self._named(ts):
            built = self._build(child)
            if built is None:
                continue
            is_head = field_name == "initializer" and built.kind == NodeKind.VARIABLE_DECLARATION
            items.append(("init" if is_head else ("body" if field_name == "body" else None), built))
        return self._finish(node, items)

    def _for_in(self, ts: 'Node') -> SyntaxNode:
        """for (var x in y) / for (const [a, b] of y)."""
        node = self._node(NodeKind.FOR_IN_STATEMENT, ts)
        kind_node = ts.child_by_field_name("kind")
        items = []
        for field_name, child in self._named(ts):
            if field_name == "left" and kind_node is not None:
                declaration = self._node(NodeKind.VARIABLE_DECLARATION, kind_node,
                                         value=self._text(kind_node))
                declarator = self._node(NodeKind.VARIABLE_DECLARATOR, child)
                binding = self._pattern(child)
                if binding is not None:
                    self._finish(declarator, [("id", binding)])
                self._finish(declaration, [("declarations", declarator)])
                items.append(("left", declaration))
                continue
            built = self._build(child)
            if built is not None:
                items.append((field_name if field_name in ("left", "right", "body") else None, built))
        return self._finish(node, items)

    def _import(self, ts: 'Node') -> SyntaxNode:
        node = self._node(NodeKind.IMPORT_DECLARATION, ts)
        items = []
        for _, child in self._named(ts):
            if child.type == "import_clause":
                for _, entry in self._named(child):
                    for specifier in self._import_specifiers(entry):
                        items.append(("specifiers", specifier))
            else:
                built = self._build(child)
                if built is not None:
                    items.append((None, built))
        return self._finish(node, items)

    def _import_specifiers(self, ts: 'Node') -> List[SyntaxNode]:
        """Specifiers of one import_clause entry; "local" is the bound name."""
        if ts.type == "identifier":
            # import foo from "mod"
            specifier = self._node(NodeKind.IMPORT_SPECIFIER, ts)
            return [self._finish(specifier, [("local", self._name(NodeKind.IDENTIFIER, ts))])]

        if ts.type == "namespace_import":
            # import * as foo from "mod"
            specifier = self._node(NodeKind.IMPORT_SPECIFIER, ts)
            for _, child in self._named(ts):
                if child.type == "identifier":
                    self._finish(specifier, [("local", self._name(NodeKind.IDENTIFIER, child))])
            return [specifier]

        specifiers = []
        for _, child in self._named(ts):
            if child.type != "import_specifier":
                continue
            # import { name as alias } from "mod"
            specifier = self._node(NodeKind.IMPORT_SPECIFIER, child)
            name = child.child_by_field_name("name")
            alias = child.child_by_field_name("alias")
            local = alias if alias is not None else name
            items = []
            for _, part in self._named(child):
                if part == local and part.type == "identifier":
                    items.append(("local", self._name(NodeKind.IDENTIFIER, part)))
                elif part.type == "identifier":
                    items.append(("imported", self._name(NodeKind.PROPERTY_NAME, part)))
                else:
                    built = self._build(part)
                    if built is not None:
                        items.append(("imported", built))
            specifiers.append(self._finish(specifier, items))
        return specifiers

    def _export(self, ts: 'Node') -> SyntaxNode:
        node = self._node(NodeKind.EXPORT_DECLARATION, ts)
        # export { a } from "mod" names bindings of another module
        reexport = ts.child_by_field_name("source") is not None
        items = []
        for field_name, child in self._named(ts):
            if child.type == "export_clause":
                clause = self._node(NodeKind.OTHER, child)
                for _, specifier in self._named(child):
                    clause.children.append(self._export_specifier(specifier, reexport))
                items.append((None, clause))
                continue
            if child.type == "namespace_export":
                # export * as ns from "mod"
                items.append((None, self._export_specifier(child, True)))
                continue
            built = self._build(child)
            if built is not None:
                items.append(("declaration" if field_name == "declaration" else None, built))
        return self._finish(node, items)

    def _export_specifier(self, ts: 'Node', reexport: bool) -> SyntaxNode:
        node = self._node(NodeKind.OTHER, ts)
        for field_name, child in self._named(ts):
            if child.type != "identifier":
                built = self._build(child)
            elif field_name == "name" and not reexport:
                built = self._name(NodeKind.IDENTIFIER, child)
            else:
                built = self._name(NodeKind.PROPERTY_NAME, child)
            if built is not None:
                node.children.append(built)
        return node

    def _jsx_element(self, ts: 'Node') -> SyntaxNode:
        """Lowercase JSX tags (<div>) are intrinsic elements, not bindings."""
        node = self._node(NodeKind.OTHER, ts)
        for field_name, child in self._named(ts):
            text = self._text(child)
            if field_name == "name" and child.type == "identifier" and text[:1].islower():
                node.children.append(self._name(NodeKind.PROPERTY_NAME, child))
                continue
            built = self._build(child)
            if built is not None:
                node.children.append(built)
        return node
