"""
Unit tests for `license_bom.services.spdx_utils`.

The suite covers:
1. Symbol normalization: whitespace, 'WITH' keyword and '+' suffixes.
2. Canonical expressions: valid SPDX expressions are rendered canonically,
   free-text names used in override files are rejected.
"""

import pytest

from license_bom.services import spdx_utils as su

# ==================================================================================
#                           TEST: SYMBOL NORMALIZATION
# ==================================================================================

def test_normalize_none_and_empty():
    assert su.normalize_symbol(None) is None
    assert su.normalize_symbol("") == ""


def test_normalize_whitespace_and_with():
    assert su.normalize_symbol("  GPL-2.0-or-later   with  Classpath-exception-2.0 ") == (
        "GPL-2.0-or-later WITH Classpath-exception-2.0"
    )
    assert su.normalize_symbol("MIT With Exception") == "MIT WITH Exception"


def test_normalize_plus_and_synonyms():
    assert su.normalize_symbol("GPL-3.0+") == "GPL-3.0-or-later"
    assert su.normalize_symbol("MPL-2.0+") == "MPL-2.0-or-later"
    assert su.normalize_symbol("GPL-3.0-or-later") == "GPL-3.0-or-later"
    assert su.normalize_symbol("Apache 2.0") == "Apache-2.0"

# ==================================================================================
#                          TEST: CANONICAL EXPRESSIONS
# ==================================================================================

@pytest.mark.parametrize("expr, expected", [
    ("MIT", "MIT"),
    ("mit", "MIT"),
    ("Apache-2.0 OR MIT", "Apache-2.0 OR MIT"),
    ("GPL-3.0+", "GPL-3.0-or-later"),
])
def test_canonical_expression(expr, expected):
    assert su.canonical_expression(expr) == expected


@pytest.mark.parametrize("expr", [
    None,
    "",
    "   ",
    "override existing",
    "GNU General Public License v3.0",
    "MIT AND (",
])
def test_canonical_expression_rejects_free_text(expr):
    assert su.canonical_expression(expr) is None


def test_is_known_spdx():
    assert su.is_known_spdx("GPL-3.0-only")
    assert su.is_known_spdx("0BSD")
    assert not su.is_known_spdx("Yellow-Paint-1.0")
