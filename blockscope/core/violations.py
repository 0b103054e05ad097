"""
Violations -- Findings produced by rules and by the parser

A Violation carries positions, not node references, so results can be
returned from worker processes and rendered after the tree is gone.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Dict, Optional


class Severity(IntEnum):
    """Rule severity levels (0 disables a rule)."""
    OFF = 0
    WARN = 1
    ERROR = 2


SEVERITY_NAMES = {
    "off": Severity.OFF,
    "warn": Severity.WARN,
    "warning": Severity.WARN,
    "error": Severity.ERROR,
}


def severity_from_value(value: Any) -> Optional[Severity]:
    """
    Parse a severity from config ("error", 2, "2", ...).

    Returns:
        Severity, or None if the value is not recognised
    """
    if isinstance(value, bool):
        return Severity.ERROR if value else Severity.OFF
    if isinstance(value, int):
        try:
            return Severity(value)
        except ValueError:
            return None
    if isinstance(value, str):
        text = value.strip().lower()
        if text.isdigit():
            return severity_from_value(int(text))
        return SEVERITY_NAMES.get(text)
    return None


@dataclass
class Violation:
    """A single finding at a source position."""
    message: str
    line: int
    column: int
    rule_id: Optional[str] = None  # None for parser errors
    severity: Severity = Severity.ERROR
    name: Optional[str] = None      # Offending identifier, when known
    fatal: bool = False

    @property
    def is_error(self) -> bool:
        return self.severity == Severity.ERROR

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "ruleId": self.rule_id,
            "severity": int(self.severity),
            "message": self.message,
            "line": self.line,
            "column": self.column,
        }
        if self.fatal:
            data["fatal"] = True
        return data
