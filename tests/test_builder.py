"""
Tests for TreeBuilder -- tree-sitter JavaScript to SyntaxNode conversion.

Tests validate:
- Declarations, functions, catch clauses and loop heads land in fields
- Binding patterns become pattern kinds, assignment targets do not
- Property names, labels and intrinsic JSX tags become PROPERTY_NAME
- Positions are 1-based lines and character columns
- Comments are collected, syntax errors raise ParseError

All tests need tree-sitter-language-pack and are skipped without it.
"""

import pytest

from blockscope.core.nodes import NodeKind, declared_names, bound_names
from blockscope.errors import ParseError
from blockscope.parsing import TreeBuilder
from tests.factories import iter_nodes

# Check if tree-sitter-language-pack is available
try:
    import tree_sitter_language_pack  # noqa: F401
    TREE_SITTER_AVAILABLE = True
except ImportError:
    TREE_SITTER_AVAILABLE = False

# Skip marker for tree-sitter dependent tests
requires_tree_sitter = pytest.mark.skipif(
    not TREE_SITTER_AVAILABLE,
    reason="tree-sitter-language-pack not installed"
)

pytestmark = requires_tree_sitter


def build(source):
    return TreeBuilder().build(source).tree


def first(tree, kind):
    return next(node for node in iter_nodes(tree) if node.kind == kind)


def all_of(tree, kind):
    return [node for node in iter_nodes(tree) if node.kind == kind]


class TestDeclarations:
    """var/let/const and function/class declarations."""

    def test_var_declaration(self):
        """A var statement keeps its kind and declares every declarator."""
        tree = build("var a = 1, b;")
        [statement] = tree.children

        assert statement.kind == NodeKind.VARIABLE_DECLARATION
        assert statement.value == "var"
        assert declared_names(statement) == ["a", "b"]

    def test_lexical_declaration_kind(self):
        """const and let are recorded as the declaration kind."""
        tree = build("const c = 1;")
        assert tree.children[0].value == "const"

    def test_destructuring_declaration(self):
        """Object, array, rest and default patterns all bind names."""
        tree = build("let {x, y: z, ...rest} = obj, [p, , q = 2] = arr;")
        assert sorted(declared_names(tree.children[0])) == ["p", "q", "rest", "x", "z"]

    def test_declarator_init_kept(self):
        """The initializer stays in the init field."""
        tree = build("var a = b;")
        declarator = first(tree, NodeKind.VARIABLE_DECLARATOR)

        assert declarator.get("id").name == "a"
        assert declarator.get("init").name == "b"

    def test_function_declaration(self):
        """Name, flattened parameters and body are exposed as fields."""
        tree = build("function f(a, b = 1, ...rest) { return a; }")
        fn = tree.children[0]

        assert fn.kind == NodeKind.FUNCTION_DECLARATION
        assert fn.get("id").name == "f"
        assert [n for p in fn.get_list("params") for n in bound_names(p)] == ["a", "b", "rest"]
        assert fn.get("body").kind == NodeKind.BLOCK

    def test_parameters_are_direct_children(self):
        """Parameters are children of the function node itself."""
        tree = build("function f(a) {}")
        fn = tree.children[0]
        assert fn.get_list("params")[0] in fn.children

    def test_generator_declaration(self):
        """Generator declarations are function declarations."""
        tree = build("function* gen() {}")
        assert tree.children[0].kind == NodeKind.FUNCTION_DECLARATION

    def test_class_declaration(self):
        """A class declaration declares its name."""
        tree = build("class A extends B { m() {} }")
        cls = tree.children[0]

        assert cls.kind == NodeKind.CLASS_DECLARATION
        assert cls.get("id").name == "A"
        assert declared_names(cls) == ["A"]


class TestFunctions:
    """Function expressions, arrows and methods."""

    def test_arrow_with_single_parameter(self):
        """A bare arrow parameter becomes a one-item params list."""
        arrow = first(build("const h = x => x;"), NodeKind.ARROW_FUNCTION)
        assert [p.name for p in arrow.get_list("params")] == ["x"]

    def test_arrow_with_parameter_list(self):
        """Parenthesized arrow parameters are flattened."""
        arrow = first(build("const g = (x, {y}) => x;"), NodeKind.ARROW_FUNCTION)
        assert [n for p in arrow.get_list("params") for n in bound_names(p)] == ["x", "y"]

    def test_function_expression_name(self):
        """A named function expression keeps its id."""
        fn = first(build("var f = function inner() {};"), NodeKind.FUNCTION_EXPRESSION)
        assert fn.get("id").name == "inner"

    def test_method_is_function_expression_with_key(self):
        """Methods have no id; their name is a property key."""
        method = first(build("class A { run(a) {} }"), NodeKind.FUNCTION_EXPRESSION)

        assert method.get("id") is None
        assert method.get("key").kind == NodeKind.PROPERTY_NAME
        assert method.get("key").name == "run"


class TestStatements:
    """Catch clauses, loops, imports and exports."""

    def test_catch_parameter(self):
        """The catch parameter and body land in fields."""
        clause = first(build("try {} catch (e) {}"), NodeKind.CATCH_CLAUSE)

        assert clause.get("param").name == "e"
        assert clause.get("body").kind == NodeKind.BLOCK

    def test_catch_without_parameter(self):
        """Optional catch binding leaves param empty."""
        clause = first(build("try {} catch {}"), NodeKind.CATCH_CLAUSE)
        assert clause.get("param") is None

    def test_for_statement_head(self):
        """A declaration in the loop head is the init field."""
        loop = build("for (let i = 0; i < 3; i++) {}").children[0]

        assert loop.kind == NodeKind.FOR_STATEMENT
        assert loop.get("init").kind == NodeKind.VARIABLE_DECLARATION
        assert declared_names(loop) == ["i"]

    def test_for_statement_expression_head_not_declared(self):
        """An assignment head declares nothing."""
        loop = build("var i; for (i = 0; i < 3; i++) {}").children[1]
        assert declared_names(loop) == []

    def test_for_in_with_declaration(self):
        """for-in with const synthesizes a declaration on the left."""
        loop = build("for (const k in obj) {}").children[0]

        assert loop.kind == NodeKind.FOR_IN_STATEMENT
        assert loop.get("left").value == "const"
        assert declared_names(loop) == ["k"]

    def test_for_of_destructuring(self):
        """for-of with a var pattern declares each name."""
        loop = build("for (var [a, b] of pairs) {}").children[0]
        assert declared_names(loop) == ["a", "b"]

    def test_for_in_without_declaration(self):
        """for-in over an existing name declares nothing."""
        loop = build("var k; for (k in obj) {}").children[1]
        assert declared_names(loop) == []

    def test_import_specifiers(self):
        """Default, named and namespace imports bind their local names."""
        tree = build('import a, {b as c, d} from "m";\nimport * as ns from "n";')

        assert declared_names(tree.children[0]) == ["a", "c", "d"]
        assert declared_names(tree.children[1]) == ["ns"]

    def test_imported_name_is_property_name(self):
        """The exported name of an aliased import is not a reference."""
        tree = build('import {b as c} from "m";')
        assert [n.name for n in all_of(tree, NodeKind.PROPERTY_NAME)] == ["b"]

    def test_export_declaration(self):
        """Exported declarations declare their names."""
        tree = build("export function f() {}\nexport const g = 1;")

        assert tree.children[0].kind == NodeKind.EXPORT_DECLARATION
        assert declared_names(tree.children[0]) == ["f"]
        assert declared_names(tree.children[1]) == ["g"]

    def test_reexport_names_are_property_names(self):
        """Re-exported names refer to another module."""
        tree = build('export { a as b } from "m";')
        assert all_of(tree, NodeKind.IDENTIFIER) == []


class TestNames:
    """Identifiers versus property names."""

    def test_member_property(self):
        """Member properties are property names."""
        tree = build("obj.prop;")

        assert [n.name for n in all_of(tree, NodeKind.IDENTIFIER)] == ["obj"]
        assert [n.name for n in all_of(tree, NodeKind.PROPERTY_NAME)] == ["prop"]

    def test_object_literal_keys_and_shorthand(self):
        """Keys are skipped, values and shorthand names are references."""
        tree = build("({ key: value, shorthand });")
        assert sorted(n.name for n in all_of(tree, NodeKind.IDENTIFIER)) == ["shorthand", "value"]

    def test_labels(self):
        """Labels are property names."""
        tree = build("outer: for (;;) { break outer; }")

        assert all_of(tree, NodeKind.IDENTIFIER) == []
        assert [n.name for n in all_of(tree, NodeKind.PROPERTY_NAME)] == ["outer", "outer"]

    def test_destructuring_assignment_targets_are_references(self):
        """Assignment patterns are plain references."""
        tree = build("[a, b] = pair;")

        assert all_of(tree, NodeKind.ARRAY_PATTERN) == []
        assert sorted(n.name for n in all_of(tree, NodeKind.IDENTIFIER)) == ["a", "b", "pair"]

    def test_intrinsic_jsx_tag(self):
        """Lowercase JSX tags are not references, components are."""
        tree = build('<div className="x"><Widget /></div>;')
        assert [n.name for n in all_of(tree, NodeKind.IDENTIFIER)] == ["Widget"]


class TestPositionsAndComments:
    """Source positions, comments and errors."""

    def test_positions_are_one_based(self):
        """Lines and columns start at 1."""
        ident = first(build("\n  foo;"), NodeKind.IDENTIFIER)
        assert (ident.line, ident.column) == (2, 3)

    def test_columns_count_characters(self):
        """Columns count characters, not UTF-8 bytes."""
        tree = build('var s = "é"; x;')
        ident = [n for n in all_of(tree, NodeKind.IDENTIFIER) if n.name == "x"][0]
        assert ident.column == 14

    def test_comments_collected(self):
        """Comments are returned in source order with positions."""
        parsed = TreeBuilder().build("/* global foo */\n// note\nfoo;")

        assert [c.text for c in parsed.comments] == ["/* global foo */", "// note"]
        assert parsed.comments[1].line == 2

    def test_comments_not_in_tree(self):
        """Comments do not appear as tree nodes."""
        tree = build("/* a */ x; // b")
        assert all(node.type_name != "comment" for node in iter_nodes(tree))

    def test_syntax_error_raises(self):
        """Syntax errors raise ParseError with a position."""
        with pytest.raises(ParseError) as exc_info:
            build("var = ;")

        assert exc_info.value.line == 1
        assert exc_info.value.message.startswith(("Unexpected token", "Missing"))

    def test_builder_is_reusable(self):
        """A builder does not leak comments between sources."""
        builder = TreeBuilder()
        builder.build("/* one */ a;")
        parsed = builder.build("b;")

        assert parsed.comments == []
        assert first(parsed.tree, NodeKind.IDENTIFIER).name == "b"
