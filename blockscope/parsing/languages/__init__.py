"""
Language configurations for tree building.

Supported languages:
- javascript.py: JavaScript (.js, .mjs, .cjs)
"""

from .javascript import JAVASCRIPT_CONFIG

__all__ = [
    'JAVASCRIPT_CONFIG',
]
