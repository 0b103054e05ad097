"""
blockscope -- Block-scoped variable checking for JavaScript

Reports identifiers used outside the block that declares them, treating
"var" as if it were block scoped.

Usage:
    blockscope src/
    blockscope -f compact --env browser app.js
    blockscope --rulesdir my_rules/ -c lint.yaml lib/

Library:
    from blockscope import Linter

    result = Linter().lint_source("if (a) { var b; } b;", "example.js")
"""

from loguru import logger

__version__ = "0.1.0"

# Silent as a library; the CLI enables logging via setup_logger()
logger.disable("blockscope")

from .errors import BlockscopeError, ScopeStackError, ParseError, ConfigError, RuleLoadError  # noqa: E402
from .config import Config, ConfigManager  # noqa: E402
from .linter import Linter, LintResult  # noqa: E402
from .rules import RuleRegistry  # noqa: E402

__all__ = [
    '__version__',
    'BlockscopeError', 'ScopeStackError', 'ParseError', 'ConfigError', 'RuleLoadError',
    'Config', 'ConfigManager',
    'Linter', 'LintResult',
    'RuleRegistry',
]
