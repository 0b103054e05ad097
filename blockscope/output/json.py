"""
JsonRenderer -- Machine-readable report

A list with one entry per linted file (clean files included):

    [{"filePath": "src/app.js",
      "messages": [{"ruleId": "block-scoped-var", "severity": 2,
                    "message": "...", "line": 3, "column": 12}],
      "errorCount": 1, "warningCount": 0}]
"""

import json
from typing import Sequence, TYPE_CHECKING

from .base import BaseRenderer

if TYPE_CHECKING:
    from ..linter import LintResult


class JsonRenderer(BaseRenderer):
    """
    Render results as JSON.

    Useful for piping to jq or feeding other tools.
    """

    def __init__(self, *args, compact: bool = False, **kwargs):
        """
        Initialize JSON renderer.

        Args:
            compact: If True, output single line (no indentation)
            *args, **kwargs: Passed to BaseRenderer
        """
        super().__init__(*args, **kwargs)
        self.compact = compact

    def render(self, results: Sequence["LintResult"]) -> str:
        output = [result.to_dict() for result in results]
        if self.compact:
            return json.dumps(output, ensure_ascii=False)
        return json.dumps(output, indent=2, ensure_ascii=False)
