"""
Parsing configuration data structures.

Defines LanguageConfig -- which files a grammar handles and how its
concrete node types map onto the analysis node kinds.
"""

from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Set

from ..core.nodes import NodeKind


@dataclass
class LanguageConfig:
    """
    Configuration for parsing a specific language.

    Attributes:
        name: Human-readable name (e.g., "JavaScript")
        tree_sitter_name: Grammar name for tree-sitter (e.g., "javascript")
        extensions: File extensions this config handles (e.g., {'.js'})
        max_file_size: Skip files larger than this (bytes, default 1MB)
        node_kinds: Direct tree-sitter type -> NodeKind mappings for
            node types that need no structural handling
        property_name_types: Node types that carry names but never
            reference a binding (member properties, labels, keys)
        comment_types: Node types holding comments
    """
    # Identity
    name: str
    tree_sitter_name: str
    extensions: Set[str]

    max_file_size: int = 1_000_000

    # Tree mapping
    node_kinds: Dict[str, NodeKind] = field(default_factory=dict)
    property_name_types: FrozenSet[str] = frozenset()
    comment_types: FrozenSet[str] = frozenset({"comment"})
