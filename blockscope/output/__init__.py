"""
Output Module -- Report rendering for the blockscope CLI

The linter returns LintResults; renderers turn them into text.

Usage:
    from blockscope.output import render

    report = render(results, format="stylish")
    if report:
        safe_print(report)
"""

from typing import Sequence, TYPE_CHECKING

if TYPE_CHECKING:
    from ..linter import LintResult
    from ..presentation.symbols import SymbolSet

# Re-export for convenience
from .base import BaseRenderer
from .stylish import StylishRenderer
from .compact import CompactRenderer
from .json import JsonRenderer


# =============================================================================
# Format Registry
# =============================================================================

# Maps format name to renderer class
RENDERERS = {
    "stylish": StylishRenderer,
    "compact": CompactRenderer,
    "json": JsonRenderer,
}

DEFAULT_FORMAT = "stylish"


def get_renderer(format: str, symbols: "SymbolSet" = None) -> BaseRenderer:
    """
    Get appropriate renderer instance.

    Args:
        format: Format name from RENDERERS
        symbols: SymbolSet for visual elements (auto-detect if None)

    Raises:
        ValueError: If format is invalid
    """
    if format not in RENDERERS:
        valid = ", ".join(RENDERERS.keys())
        raise ValueError(f"Unknown format '{format}'. Valid: {valid}")

    renderer_class = RENDERERS[format]
    return renderer_class(symbols=symbols)


def render(
    results: Sequence["LintResult"],
    format: str = DEFAULT_FORMAT,
    symbols: "SymbolSet" = None,
) -> str:
    """
    Render lint results to a report string.

    This is the main entry point for the output system.
    """
    return get_renderer(format, symbols=symbols).render(results)


__all__ = [
    'BaseRenderer',
    'StylishRenderer',
    'CompactRenderer',
    'JsonRenderer',
    'RENDERERS',
    'DEFAULT_FORMAT',
    'get_renderer',
    'render',
]
