"""
CompactRenderer -- One line per problem, for editors and grep

    src/app.js: line 3, col 12, Error - "x" used outside of binding context. (block-scoped-var)

    1 problem
"""

from typing import List, Sequence, TYPE_CHECKING

from .base import BaseRenderer, pluralize

if TYPE_CHECKING:
    from ..linter import LintResult


class CompactRenderer(BaseRenderer):
    """Render one line per violation."""

    def render(self, results: Sequence["LintResult"]) -> str:
        lines: List[str] = []

        for result in results:
            for v in result.violations:
                line = (f"{result.file_path}: line {v.line}, col {v.column}, "
                        f"{self.severity_label(v).capitalize()} - {v.message}")
                if v.rule_id:
                    line += f" ({v.rule_id})"
                lines.append(line)

        total = len(lines)
        if total == 0:
            return ""

        lines.append("")
        lines.append(f"{total} {pluralize('problem', total)}")
        return "\n".join(lines)
