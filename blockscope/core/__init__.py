"""
Core -- Syntax tree model, scope tracking and traversal

Parser-independent pieces shared by every rule:
- nodes: NodeKind, Phase, SyntaxNode, bound-name helpers
- scope: ScopeStack
- classifier: declaration vs. reference position
- traversal: Traverser and RuleContext
- violations: Violation and Severity
- globals: predefined names per environment
"""

from .nodes import SyntaxNode, NodeKind, Phase, bound_names, declared_names
from .scope import ScopeStack
from .classifier import is_declaration, is_reference
from .traversal import Traverser, RuleContext, HandlerTable
from .violations import Violation, Severity, severity_from_value
from .globals import environment_globals, known_environments, parse_global_comment

__all__ = [
    'SyntaxNode', 'NodeKind', 'Phase', 'bound_names', 'declared_names',
    'ScopeStack',
    'is_declaration', 'is_reference',
    'Traverser', 'RuleContext', 'HandlerTable',
    'Violation', 'Severity', 'severity_from_value',
    'environment_globals', 'known_environments', 'parse_global_comment',
]
