"""
block-scoped-var -- Treat var as if it were block scoped

Flags identifier references that resolve to no declaration in the
enclosing blocks. A name declared anywhere in a block is visible from
the start of that block (hoisting-to-block), and in every block nested
inside it.

    function f(flag) {
        if (flag) { var x = 1; }
        return x;          // "x" used outside of binding context.
    }
"""

from typing import List

from ..core.classifier import is_reference
from ..core.nodes import SyntaxNode, NodeKind, Phase, bound_names, declared_names
from ..core.scope import ScopeStack
from ..core.traversal import RuleContext, HandlerTable
from ..errors import ScopeStackError


RULE_ID = "block-scoped-var"
DESCRIPTION = "Treat var statements as if they were block scoped"

MESSAGE = '"{name}" used outside of binding context.'


def create(context: RuleContext) -> HandlerTable:
    """Build the handler table for one pass over one tree."""
    scopes = ScopeStack()

    def enter_program(node: SyntaxNode) -> None:
        scopes.reset(context.get_ambient_binding_names())

    def exit_program(node: SyntaxNode) -> None:
        if scopes.depth != 1:
            raise ScopeStackError(
                "Unbalanced scope stack at end of program",
                details=f"expected depth 1, found {scopes.depth}",
            )

    def enter_block(node: SyntaxNode) -> None:
        scopes.push()
        for statement in node.children:
            scopes.declare(declared_names(statement))

    def enter_catch(node: SyntaxNode) -> None:
        scopes.push()
        scopes.declare(bound_names(node.get("param")))

    def enter_function(node: SyntaxNode) -> None:
        scopes.push()
        names: List[str] = []
        ident = node.get("id")
        if ident is not None:
            names.append(ident.name)
        for param in node.get_list("params"):
            names.extend(bound_names(param))
        if node.kind != NodeKind.ARROW_FUNCTION:
            names.append("arguments")
        scopes.declare(names)

    def enter_class(node: SyntaxNode) -> None:
        scopes.push()
        ident = node.get("id")
        if ident is not None:
            scopes.declare([ident.name])

    def heads_own_scope(node: SyntaxNode) -> bool:
        # Outside a block (if (a) for ..., label: for ...) no pre-scan declares the head
        parent = context.get_parent(node)
        return parent is not None and parent.kind not in (NodeKind.BLOCK, NodeKind.PROGRAM)

    def enter_loop(node: SyntaxNode) -> None:
        if heads_own_scope(node):
            scopes.push()
            scopes.declare(declared_names(node))

    def exit_loop(node: SyntaxNode) -> None:
        if heads_own_scope(node):
            scopes.pop()

    def close_scope(node: SyntaxNode) -> None:
        scopes.pop()

    def check_identifier(node: SyntaxNode) -> None:
        if is_reference(node, context.get_parent(node)) and not scopes.resolves(node.name):
            context.report(node, MESSAGE.format(name=node.name))

    handlers: HandlerTable = {
        (NodeKind.PROGRAM, Phase.ENTER): enter_program,
        (NodeKind.PROGRAM, Phase.EXIT): exit_program,
        (NodeKind.BLOCK, Phase.ENTER): enter_block,
        (NodeKind.BLOCK, Phase.EXIT): close_scope,
        (NodeKind.CATCH_CLAUSE, Phase.ENTER): enter_catch,
        (NodeKind.CATCH_CLAUSE, Phase.EXIT): close_scope,
        (NodeKind.IDENTIFIER, Phase.ENTER): check_identifier,
    }
    for kind in (NodeKind.FUNCTION_DECLARATION, NodeKind.FUNCTION_EXPRESSION,
                 NodeKind.ARROW_FUNCTION):
        handlers[(kind, Phase.ENTER)] = enter_function
        handlers[(kind, Phase.EXIT)] = close_scope
    for kind in (NodeKind.FOR_STATEMENT, NodeKind.FOR_IN_STATEMENT):
        handlers[(kind, Phase.ENTER)] = enter_loop
        handlers[(kind, Phase.EXIT)] = exit_loop
    for kind in (NodeKind.CLASS_DECLARATION, NodeKind.CLASS_EXPRESSION):
        handlers[(kind, Phase.ENTER)] = enter_class
        handlers[(kind, Phase.EXIT)] = close_scope

    return handlers
