"""
Errors -- Exception hierarchy for blockscope

ScopeStackError marks a broken traversal contract (exit without enter,
unbalanced program) and is never converted into a lint finding.
ParseError is converted into a single fatal finding by the linter.
"""

from typing import Optional


class BlockscopeError(Exception):
    """
    Base exception for all blockscope errors.

    Attributes:
        message: Main error message for the user
        details: Additional technical details for logging
    """

    def __init__(self, message: str, details: Optional[str] = None):
        self.message = message
        self.details = details
        super().__init__(message)


class ScopeStackError(BlockscopeError):
    """Scope push/pop sequence does not match the tree structure."""


class ParseError(BlockscopeError):
    """Source text could not be parsed into a syntax tree."""

    def __init__(self, message: str, line: int = 1, column: int = 1, details: Optional[str] = None):
        super().__init__(message, details)
        self.line = line
        self.column = column


class ConfigError(BlockscopeError):
    """Configuration file or option is invalid."""


class RuleLoadError(BlockscopeError):
    """A rule module could not be imported or is missing its interface."""
