"""
Module `spdx_utils`: SPDX identifier helpers.

Main functions:
- normalize_symbol(sym: str) -> str
    Applies common textual fixes to a license identifier ('+' -> '-or-later',
    'with' -> 'WITH') and maps frequent aliases to their canonical form.

- is_known_spdx(key: str) -> bool
    Tells whether an identifier or expression only uses SPDX license keys.

- canonical_expression(expr: str) -> Optional[str]
    Uses the `license_expression` library to validate an SPDX expression and
    return its canonical rendering, or None when the text is not a valid
    SPDX expression (free-text license names are common in override files).
"""

from typing import Optional

from license_expression import get_spdx_licensing

licensing = get_spdx_licensing()

_SYNONYMS = {
    "GPL-3.0+": "GPL-3.0-or-later",
    "GPL-2.0+": "GPL-2.0-or-later",
    "LGPL-3.0+": "LGPL-3.0-or-later",
    "LGPL-2.1+": "LGPL-2.1-or-later",
    "Apache 2.0": "Apache-2.0",
    "Apache2": "Apache-2.0",
}


def normalize_symbol(sym: str) -> str:
    if not sym:
        return sym
    s = " ".join(sym.split())
    s = s.replace(" with ", " WITH ").replace(" With ", " WITH ")
    if s in _SYNONYMS:
        return _SYNONYMS[s]
    if "+" in s and "-or-later" not in s:
        s = s.replace("+", "-or-later")
    return s


def canonical_expression(expr: Optional[str]) -> Optional[str]:
    if not expr or not expr.strip():
        return None
    try:
        parsed = licensing.parse(normalize_symbol(expr), validate=True, strict=True)
    except Exception:
        return None
    if parsed is None:
        return None
    return str(parsed)


def is_known_spdx(key: str) -> bool:
    return canonical_expression(key) is not None

