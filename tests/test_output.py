"""
Tests for report renderers

Tests verify:
- stylish groups problems by file with aligned columns and a summary
- compact prints one line per problem
- json lists every file, clean ones included
- Clean runs render nothing in the text formats
"""

import json

import pytest

from blockscope.core.violations import Severity, Violation
from blockscope.linter import LintResult
from blockscope.output import (
    RENDERERS, get_renderer, render,
    StylishRenderer, CompactRenderer, JsonRenderer,
)
from blockscope.output.base import pluralize
from blockscope.presentation.symbols import ASCII, UNICODE


MESSAGE = '"x" used outside of binding context.'


def violation(line, column, severity=Severity.ERROR, message=MESSAGE, rule_id="block-scoped-var"):
    return Violation(message=message, line=line, column=column, rule_id=rule_id, severity=severity)


@pytest.fixture
def results():
    """One clean file and one file with an error and a warning."""
    return [
        LintResult("src/clean.js"),
        LintResult("src/app.js", [
            violation(3, 12),
            violation(10, 1, Severity.WARN, '"longer" used outside of binding context.'),
        ]),
    ]


class TestRegistry:
    """Test format lookup."""

    def test_all_formats_registered(self):
        """Every config format has a renderer."""
        assert set(RENDERERS) == {"stylish", "compact", "json"}

    def test_get_renderer(self):
        """get_renderer returns an instance of the registered class."""
        assert isinstance(get_renderer("compact", symbols=ASCII), CompactRenderer)

    def test_unknown_format(self):
        """Unknown formats raise ValueError."""
        with pytest.raises(ValueError, match="Unknown format"):
            get_renderer("xml")

    def test_pluralize(self):
        """Words are pluralized unless the count is one."""
        assert pluralize("problem", 1) == "problem"
        assert pluralize("problem", 0) == "problems"
        assert pluralize("error", 2) == "errors"


class TestStylish:
    """Test the default format."""

    def test_layout(self, results):
        """Rows are aligned per file and followed by a summary."""
        report = StylishRenderer(symbols=ASCII).render(results)

        assert report.split("\n") == [
            "",
            "src/app.js",
            '  3:12  error    "x" used outside of binding context.       block-scoped-var',
            '  10:1  warning  "longer" used outside of binding context.  block-scoped-var',
            "",
            "X 2 problems (1 error, 1 warning)",
            "",
        ]

    def test_clean_files_omitted(self, results):
        """Files without problems are not listed."""
        assert "src/clean.js" not in StylishRenderer(symbols=ASCII).render(results)

    def test_clean_run_is_empty(self):
        """No problems renders nothing."""
        assert StylishRenderer(symbols=ASCII).render([LintResult("a.js")]) == ""

    def test_unicode_marker(self):
        """The summary marker comes from the symbol set."""
        report = StylishRenderer(symbols=UNICODE).render([LintResult("a.js", [violation(1, 1)])])
        assert "✖ 1 problem (1 error, 0 warnings)" in report

    def test_parse_error_has_no_rule(self):
        """Fatal parser findings render without a rule id."""
        fatal = Violation(message="Parsing error: Unexpected token", line=1, column=5, fatal=True)
        report = StylishRenderer(symbols=ASCII).render([LintResult("a.js", [fatal])])

        assert "  1:5  error  Parsing error: Unexpected token\n" in report


class TestCompact:
    """Test the one-line-per-problem format."""

    def test_lines(self, results):
        """Each problem is one line, followed by a total."""
        report = CompactRenderer(symbols=ASCII).render(results)

        assert report.split("\n") == [
            'src/app.js: line 3, col 12, Error - "x" used outside of binding context. (block-scoped-var)',
            'src/app.js: line 10, col 1, Warning - "longer" used outside of binding context. (block-scoped-var)',
            "",
            "2 problems",
        ]

    def test_clean_run_is_empty(self):
        """No problems renders nothing."""
        assert CompactRenderer(symbols=ASCII).render([LintResult("a.js")]) == ""


class TestJson:
    """Test the machine-readable format."""

    def test_structure(self, results):
        """Every file is listed with its messages and counts."""
        data = json.loads(JsonRenderer(symbols=ASCII).render(results))

        assert [entry["filePath"] for entry in data] == ["src/clean.js", "src/app.js"]
        assert data[0] == {"filePath": "src/clean.js", "messages": [], "errorCount": 0, "warningCount": 0}
        assert data[1]["errorCount"] == 1
        assert data[1]["warningCount"] == 1
        assert data[1]["messages"][0] == {
            "ruleId": "block-scoped-var",
            "severity": 2,
            "message": MESSAGE,
            "line": 3,
            "column": 12,
        }

    def test_fatal_flag(self):
        """Parser findings carry fatal: true and a null rule id."""
        fatal = Violation(message="Parsing error: Missing ;", line=2, column=1, fatal=True)
        data = json.loads(JsonRenderer(symbols=ASCII).render([LintResult("a.js", [fatal])]))

        assert data[0]["messages"][0]["fatal"] is True
        assert data[0]["messages"][0]["ruleId"] is None

    def test_compact_is_single_line(self, results):
        """compact=True renders without newlines."""
        assert "\n" not in JsonRenderer(symbols=ASCII, compact=True).render(results)

    def test_empty_run(self):
        """No files renders an empty list."""
        assert render([], format="json", symbols=ASCII) == "[]"
