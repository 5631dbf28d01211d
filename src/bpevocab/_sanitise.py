"""
Utilities for rendering vocabulary characters in error messages.
"""

import unicodedata


def _escape_ctrl_chars(s: str) -> str:
    """Replace all Unicode control characters with their escape sequences."""
    cleaned = []
    for c in s:
        # control category codes vary: Cc, Cf, Cn etc.
        # so check via first character
        if unicodedata.category(c)[0] != "C":
            cleaned.append(c)
        else:
            cleaned.append(f"\\u{ord(c):04x}")
    return "".join(cleaned)


def render_char(c: str) -> str:
    """Return a single character quoted, with control characters escaped."""
    return f"'{_escape_ctrl_chars(c)}'"

