"""
StylishRenderer -- Default human-readable report

One section per file with problems, aligned columns, and a summary:

    src/app.js
      3:12  error  "x" used outside of binding context.  block-scoped-var

    ✖ 1 problem (1 error, 0 warnings)

Files without problems are not listed; a clean run renders nothing.
"""

from typing import List, Sequence, TYPE_CHECKING

from .base import BaseRenderer, pluralize

if TYPE_CHECKING:
    from ..linter import LintResult


class StylishRenderer(BaseRenderer):
    """Render results grouped by file."""

    def render(self, results: Sequence["LintResult"]) -> str:
        lines: List[str] = []
        total = 0

        for result in results:
            if not result.violations:
                continue
            total += len(result.violations)

            rows = [
                (f"{v.line}:{v.column}", self.severity_label(v), v.message, v.rule_id or "")
                for v in result.violations
            ]
            widths = [max(len(row[i]) for row in rows) for i in range(3)]

            lines.append("")
            lines.append(result.file_path)
            for location, severity, message, rule_id in rows:
                row = (f"  {location.rjust(widths[0])}  {severity.ljust(widths[1])}  "
                       f"{message.ljust(widths[2])}  {rule_id}")
                lines.append(row.rstrip())

        if total == 0:
            return ""

        errors, warnings = self.totals(results)
        lines.append("")
        lines.append(
            f"{self.symbols.problems} {total} {pluralize('problem', total)} "
            f"({errors} {pluralize('error', errors)}, {warnings} {pluralize('warning', warnings)})"
        )
        lines.append("")
        return "\n".join(lines)
