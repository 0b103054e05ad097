"""
Symbols -- Visual vocabulary for lint reports

Progressive enhancement: Unicode when supported, ASCII fallback.
Configurable via the "symbols" config setting.

Also provides safe_print(): reports quote identifiers and file names
straight from the linted sources, so printing must survive any
terminal encoding.
"""

import codecs
import os
import sys
from dataclasses import dataclass
from typing import Optional


# =============================================================================
# Symbol Sets
# =============================================================================

@dataclass(frozen=True)
class SymbolSet:
    """Symbols used by renderers."""
    problems: str      # ✖ 3 problems


UNICODE = SymbolSet(problems='✖')
ASCII = SymbolSet(problems='X')

# Applied before the '?' fallback when a stream cannot encode a report
UNICODE_TO_ASCII = {
    UNICODE.problems: ASCII.problems,
}


def _env_flag(key: str) -> bool:
    return os.environ.get(key, '').lower() in ('1', 'true', 'yes')


def _can_encode(encoding: str) -> bool:
    """True when encoding exists and can represent every Unicode marker."""
    try:
        codecs.lookup(encoding)
        for symbol in UNICODE_TO_ASCII:
            symbol.encode(encoding)
    except (LookupError, UnicodeEncodeError):
        return False
    return True


def supports_unicode() -> bool:
    """
    Check if the terminal likely supports the Unicode markers.

    Order: BLOCKSCOPE_ASCII_ONLY, BLOCKSCOPE_UNICODE, stdout encoding,
    then locale variables. Defaults to ASCII when nothing is known.
    """
    if _env_flag('BLOCKSCOPE_ASCII_ONLY'):
        return False
    if _env_flag('BLOCKSCOPE_UNICODE'):
        return True

    encoding = getattr(sys.stdout, 'encoding', None)
    if encoding:
        return _can_encode(encoding)

    locale = ' '.join(os.environ.get(key, '') for key in ('LC_ALL', 'LANG')).lower()
    return 'utf-8' in locale or 'utf8' in locale


def get_symbols(preference: Optional[str] = None) -> SymbolSet:
    """
    Pick a symbol set.

    Args:
        preference: "unicode", "ascii", or "auto" (None = auto)
    """
    if preference == 'unicode':
        return UNICODE
    if preference == 'ascii':
        return ASCII
    return UNICODE if supports_unicode() else ASCII


# =============================================================================
# Safe Output
# =============================================================================

def safe_print(text: str, end: str = '\n', file=None) -> None:
    """
    Print with graceful encoding fallback.

    Known markers are swapped for their ASCII forms first; anything
    else the stream cannot encode becomes '?'.

    Args:
        text: Text to print (may contain any Unicode)
        end: String appended after text (default: newline)
        file: Output stream (default: sys.stdout)
    """
    stream = file if file is not None else sys.stdout
    try:
        print(text, end=end, file=stream)
        return
    except UnicodeEncodeError:
        pass

    for symbol, replacement in UNICODE_TO_ASCII.items():
        text = text.replace(symbol, replacement)
    encoding = getattr(stream, 'encoding', None) or 'ascii'
    text = text.encode(encoding, errors='replace').decode(encoding)
    print(text, end=end, file=stream)
