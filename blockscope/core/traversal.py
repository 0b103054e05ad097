"""
Traversal -- Depth-first walk with enter/exit events

The Traverser owns the ancestor chain and dispatches every node to the
handlers registered for (NodeKind, Phase). Each rule gets its own
RuleContext, which exposes the ambient bindings, the ancestors of the
node being visited, and report().

Preconditions the walk guarantees to handlers:
- ENTER for a node fires before ENTER of any descendant
- EXIT fires after EXIT of every descendant, in strict nesting order
"""

from collections import defaultdict
from typing import Callable, Dict, Iterable, List, Optional, Set, Tuple

from .nodes import SyntaxNode, NodeKind, Phase
from .violations import Violation, Severity


Handler = Callable[[SyntaxNode], None]
HandlerTable = Dict[Tuple[NodeKind, Phase], Handler]


class Traverser:
    """
    Walks a SyntaxNode tree and emits enter/exit events.

    Iterative, so deeply nested sources do not hit the recursion limit.
    """

    def __init__(self):
        self._listeners: Dict[Tuple[NodeKind, Phase], List[Handler]] = defaultdict(list)
        self._ancestors: List[SyntaxNode] = []
        self._current: Optional[SyntaxNode] = None

    def on(self, kind: NodeKind, phase: Phase, handler: Handler) -> None:
        """Register a handler for one node kind and phase."""
        self._listeners[(kind, phase)].append(handler)

    def add_handlers(self, table: HandlerTable) -> None:
        """Register a rule's handler table."""
        for (kind, phase), handler in table.items():
            self.on(kind, phase, handler)

    @property
    def current(self) -> Optional[SyntaxNode]:
        return self._current

    def ancestors(self) -> List[SyntaxNode]:
        """Ancestors of the node being visited, root first."""
        return list(self._ancestors)

    def parent_of(self, node: SyntaxNode) -> Optional[SyntaxNode]:
        """Parent of node, if node is the current node or one of its ancestors."""
        if node is self._current:
            return self._ancestors[-1] if self._ancestors else None
        for index, ancestor in enumerate(self._ancestors):
            if ancestor is node:
                return self._ancestors[index - 1] if index > 0 else None
        return None

    def traverse(self, root: SyntaxNode) -> None:
        """Visit every node under root, firing ENTER then EXIT handlers."""
        self._ancestors = []
        stack: List[Tuple[SyntaxNode, bool]] = [(root, False)]

        while stack:
            node, exiting = stack.pop()
            self._current = node

            if exiting:
                self._ancestors.pop()
                self._emit(node, Phase.EXIT)
                continue

            self._emit(node, Phase.ENTER)
            self._ancestors.append(node)
            stack.append((node, True))
            for child in reversed(node.children):
                stack.append((child, False))

        self._current = None

    def _emit(self, node: SyntaxNode, phase: Phase) -> None:
        for handler in self._listeners.get((node.kind, phase), ()):
            handler(node)


class RuleContext:
    """
    The capabilities a rule receives for one pass over one tree.

    Attributes:
        rule_id: Identifier of the rule using this context
        severity: Severity stamped on reported violations
        violations: Findings reported so far, in report order
    """

    def __init__(
        self,
        rule_id: str,
        traverser: Traverser,
        ambient_names: Iterable[str] = (),
        severity: Severity = Severity.ERROR,
        options: Optional[dict] = None,
    ):
        self.rule_id = rule_id
        self.severity = severity
        self.options = options or {}
        self.violations: List[Violation] = []
        self._traverser = traverser
        self._ambient_names: Set[str] = set(ambient_names)

    def get_ambient_binding_names(self) -> Set[str]:
        """Names bound at the outermost scope before traversal starts."""
        return set(self._ambient_names)

    def get_ancestors(self) -> List[SyntaxNode]:
        """Ancestors of the node currently being visited, root first."""
        return self._traverser.ancestors()

    def get_parent(self, node: Optional[SyntaxNode] = None) -> Optional[SyntaxNode]:
        """Immediate parent of node (defaults to the current node)."""
        if node is None:
            node = self._traverser.current
        return self._traverser.parent_of(node)

    def report(self, node: SyntaxNode, message: str) -> None:
        """Record one violation at node."""
        self.violations.append(Violation(
            message=message,
            line=node.line,
            column=node.column,
            rule_id=self.rule_id,
            severity=self.severity,
            name=node.name,
        ))
