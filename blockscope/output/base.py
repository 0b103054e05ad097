"""
BaseRenderer -- Abstract base class for report renderers

All renderers inherit from this class and implement render().
Provides the symbol set and shared counting helpers.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Sequence, Tuple

if TYPE_CHECKING:
    from ..linter import LintResult
    from ..presentation.symbols import SymbolSet


def pluralize(word: str, count: int) -> str:
    """problem -> problems unless count is 1."""
    return word if count == 1 else f"{word}s"


class BaseRenderer(ABC):
    """
    Abstract base class for all report renderers.

    Subclasses must implement render() method.
    """

    def __init__(self, symbols: "SymbolSet" = None):
        """
        Initialize renderer.

        Args:
            symbols: SymbolSet for visual elements (auto-detect if None)
        """
        from ..presentation.symbols import get_symbols

        self.symbols = symbols or get_symbols()

    @abstractmethod
    def render(self, results: Sequence["LintResult"]) -> str:
        """
        Render lint results to a report.

        Args:
            results: One LintResult per linted file, in report order

        Returns:
            Formatted report ("" when a format prints nothing)
        """
        pass

    # =========================================================================
    # Utility Methods
    # =========================================================================

    @staticmethod
    def totals(results: Sequence["LintResult"]) -> Tuple[int, int]:
        """(errors, warnings) summed over all results."""
        errors = sum(r.error_count for r in results)
        warnings = sum(r.warning_count for r in results)
        return errors, warnings

    @staticmethod
    def severity_label(violation) -> str:
        return "error" if violation.is_error else "warning"
