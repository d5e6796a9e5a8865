"""
Module `normalizer`: canonical form of license text.

License files differ from the reference templates mostly by case and by their
copyright block, which is specific to each project. Normalization lower-cases
the text and deletes copyright notices (plus the blank line following each of
them); every other line is preserved verbatim so the output is deterministic
and idempotent.
"""

import re
from collections import Counter
from typing import Union

# "copyright" followed by a year, a (c) mark or a year placeholder, or a bare
# "(c) 2013", after indentation and comment markers. "(c)" alone is also a
# list item marker in many licenses.
_COPYRIGHT_RE = re.compile(
    r"^[\s#*/;!%-]*"
    r"(?:copyright\b.*(?:\d{4}|\(c\)|©|<year>|\[year\]|\[yyyy\]|\{yyyy\}|<yyyy>)"
    r"|(?:\(c\)|©)\s*\d{4})"
)
_WORD_RE = re.compile(r"[a-z0-9]+")


def is_copyright_line(line: str) -> bool:
    """Tells whether an already lower-cased line is a copyright notice."""
    return bool(_COPYRIGHT_RE.match(line))


def normalize_license_text(data: Union[bytes, str]) -> str:
    """
    Normalizes raw license data for comparison.

    Args:
        data (bytes | str): Raw content of a license file.

    Returns:
        str: Lower-cased text without copyright notices.
    """
    if isinstance(data, bytes):
        text = data.decode("utf-8-sig", errors="replace")
    else:
        text = data

    kept = []
    after_copyright = False
    for line in text.lower().split("\n"):
        if is_copyright_line(line):
            after_copyright = True
            continue
        if after_copyright and not line.strip():
            after_copyright = False
            continue
        after_copyright = False
        kept.append(line)
    return "\n".join(kept)


def tokenize(text: str) -> Counter:
    """Splits normalized text into a multiset of words."""
    return Counter(_WORD_RE.findall(text))
