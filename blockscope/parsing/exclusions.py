"""
Exclusion patterns for file discovery.

Directories given on the command line are expanded to source files;
these patterns decide which of those files are skipped. Files named
explicitly are never excluded.

Usage:
    from blockscope.parsing.exclusions import ExclusionConfig

    exclusions = ExclusionConfig(language='javascript')
    exclusions.add('**/generated/*')
    exclusions.is_excluded('src/vendor/jquery.js')  # True
"""

import fnmatch
import re
from typing import Dict, Iterable, List, Optional


# Patterns applied to ALL languages
DEFAULT_COMMON: List[str] = [
    # Version control
    '**/.git/*',
    '**/.svn/*',
    '**/.hg/*',

    # IDE/Editor
    '**/.idea/*',
    '**/.vscode/*',

    # Build artifacts
    '**/build/*',
    '**/dist/*',
    '**/out/*',

    # Coverage/reports
    '**/coverage/*',
    '**/htmlcov/*',

    # Temporary files
    '**/tmp/*',
    '**/temp/*',
]

# Language-specific default patterns
DEFAULT_LANGUAGE: Dict[str, List[str]] = {
    'javascript': [
        '**/node_modules/*',
        '**/bower_components/*',
        '**/.npm/*',
        '**/*.min.js',
        '**/*.bundle.js',
        '**/vendor/*',
    ],
}

_LEADING_GLOBSTAR = re.compile(r"^(\*\*/)+")


def _matches(rel_path: str, pattern: str) -> bool:
    """
    Match a relative POSIX path against a '**/'-style glob.

    fnmatch's '*' also matches '/', so a leading '**/' reduces to
    "anything, then a separator".
    """
    candidate = "/" + rel_path.lstrip("/")
    stripped = _LEADING_GLOBSTAR.sub("", pattern)
    if stripped != pattern:
        return fnmatch.fnmatch(candidate, "*/" + stripped)
    return fnmatch.fnmatch(candidate, "/" + pattern)


class ExclusionConfig:
    """
    Exclude patterns for one discovery run.

    Holds the common defaults, the language defaults and any patterns
    added from configuration. Instances are independent; nothing is
    shared between runs.
    """

    def __init__(self, language: str = 'javascript', extra: Optional[Iterable[str]] = None):
        self.language = language
        self._patterns: List[str] = list(DEFAULT_COMMON)
        self._patterns.extend(DEFAULT_LANGUAGE.get(language, []))
        for pattern in extra or ():
            self.add(pattern)

    def patterns(self) -> List[str]:
        """Current patterns, in insertion order."""
        return list(self._patterns)

    def add(self, pattern: str) -> None:
        """Add a pattern (duplicates are ignored)."""
        if pattern not in self._patterns:
            self._patterns.append(pattern)

    def remove(self, pattern: str) -> bool:
        """Remove a pattern. Returns True if removed."""
        if pattern in self._patterns:
            self._patterns.remove(pattern)
            return True
        return False

    def is_excluded(self, rel_path: str) -> bool:
        """Check whether a path relative to the search root is excluded."""
        rel_path = rel_path.replace("\\", "/")
        return any(_matches(rel_path, pattern) for pattern in self._patterns)
