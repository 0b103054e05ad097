"""
Parsing module -- Source text to SyntaxNode trees via tree-sitter.

- LanguageConfig: Per-language grammar and node mappings
- ParserRegistry: Extension-based routing
- TreeBuilder: tree-sitter tree -> SyntaxNode tree
- ExclusionConfig: Directory walk exclusions

Usage:
    from blockscope.parsing import ParserRegistry, TreeBuilder

    registry = ParserRegistry.default()
    config = registry.get_config(Path("app.js"))
    parsed = TreeBuilder(config).build(source)
"""

from .config import LanguageConfig
from .registry import ParserRegistry
from .builder import TreeBuilder, ParsedSource, Comment
from .exclusions import ExclusionConfig

__all__ = [
    'LanguageConfig',
    'ParserRegistry',
    'TreeBuilder',
    'ParsedSource',
    'Comment',
    'ExclusionConfig',
]
