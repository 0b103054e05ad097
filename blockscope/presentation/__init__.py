"""
Presentation -- Symbols and encoding-safe terminal output
"""

from .symbols import SymbolSet, UNICODE, ASCII, get_symbols, safe_print, supports_unicode

__all__ = [
    'SymbolSet',
    'UNICODE',
    'ASCII',
    'get_symbols',
    'safe_print',
    'supports_unicode',
]
