"""
JavaScript language configuration.

Defines JAVASCRIPT_CONFIG: the tree-sitter grammar, the file extensions
routed to it, and the direct node-type mappings the tree builder uses.
Structural node types (functions, declarations, patterns, imports) are
handled by the builder itself.
"""

from ...core.nodes import NodeKind
from ..config import LanguageConfig


# =============================================================================
# Node Mappings
# =============================================================================

JAVASCRIPT_NODE_KINDS = {
    "program": NodeKind.PROGRAM,
    "statement_block": NodeKind.BLOCK,
    "identifier": NodeKind.IDENTIFIER,
    # {a} in an object literal reads the binding "a"
    "shorthand_property_identifier": NodeKind.IDENTIFIER,
    # ({a} = obj) assigns to the existing binding "a"
    "shorthand_property_identifier_pattern": NodeKind.IDENTIFIER,
}

JAVASCRIPT_PROPERTY_NAME_TYPES = frozenset({
    "property_identifier",          # obj.prop, { prop: 1 }, method names
    "private_property_identifier",  # this.#secret
    "statement_identifier",         # label: / break label
})


# =============================================================================
# Config
# =============================================================================

JAVASCRIPT_CONFIG = LanguageConfig(
    name="JavaScript",
    tree_sitter_name="javascript",
    extensions={'.js', '.mjs', '.cjs'},
    node_kinds=JAVASCRIPT_NODE_KINDS,
    property_name_types=JAVASCRIPT_PROPERTY_NAME_TYPES,
    comment_types=frozenset({"comment", "html_comment"}),
)
