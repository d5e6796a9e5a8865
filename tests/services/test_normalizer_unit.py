"""
Unit tests for `license_bom.services.matching.normalizer`.

The suite covers:
1. Copyright removal: notice lines and the blank line following them.
2. Preservation: every other line is kept verbatim, apart from case folding.
3. Idempotence and decoding of raw bytes.
4. Tokenization into word multisets.
"""

from license_bom.services.matching.normalizer import (
    is_copyright_line,
    normalize_license_text,
    tokenize,
)

# ==================================================================================
#                           TEST: COPYRIGHT REMOVAL
# ==================================================================================

def test_clean_license_data():
    """
    The copyright line and the blank line after it disappear; indentation,
    other blank lines and the trailing tab are preserved.
    """
    data = (
        "The MIT License (MIT)\n"
        "\n"
        "\tCopyright (c) 2013 Ben Johnson\n"
        "\n"
        "\tSome other lines.\n"
        "\tAnd more.\n"
        "\t"
    )
    wanted = "the mit license (mit)\n\n\tsome other lines.\n\tand more.\n\t"
    assert normalize_license_text(data.encode("utf-8")) == wanted


def test_consecutive_copyright_lines_are_all_removed():
    data = "Copyright 2001 Alice\nCopyright (C) 2002-2004 Bob\n\nPermission granted.\n"
    assert normalize_license_text(data) == "permission granted.\n"


def test_non_blank_line_after_copyright_is_kept():
    data = "Copyright (c) 2007 Free Software Foundation, Inc.\nEveryone is permitted\n"
    assert normalize_license_text(data) == "everyone is permitted\n"


def test_copyright_placeholders_and_symbols():
    """
    Template placeholders and the © sign are recognised as notices.
    """
    assert is_copyright_line("   copyright [yyyy] [name of copyright owner]")
    assert is_copyright_line("copyright (c) <year> <copyright holders>")
    assert is_copyright_line("© 2020 acme corp")
    assert is_copyright_line("# copyright 2019 the authors")


def test_sentences_about_copyright_are_kept():
    """
    Lines that merely talk about copyright, or list items labelled (c), are
    part of the license body.
    """
    assert not is_copyright_line("copyright notice that is included in or attached to the work")
    assert not is_copyright_line("      (c) you must retain, in the source form of any derivative works")
    assert not is_copyright_line("the above copyright notice and this permission notice (c) 2013")

# ==================================================================================
#                           TEST: IDEMPOTENCE AND DECODING
# ==================================================================================

def test_normalization_is_idempotent(licenses_dir):
    with open(f"{licenses_dir}/apache-2.0.txt", "rb") as f:
        once = normalize_license_text(f.read())
    assert normalize_license_text(once) == once


def test_bytes_with_bom_and_invalid_sequences():
    data = b"\xef\xbb\xbfMIT License\n\xff\n"
    text = normalize_license_text(data)
    assert text.startswith("mit license\n")
    assert "�" in text


def test_windows_line_endings():
    data = "Copyright 2013 Ben\r\n\r\nBody\r\n"
    assert normalize_license_text(data) == "body\r\n"

# ==================================================================================
#                                TEST: TOKENIZE
# ==================================================================================

def test_tokenize_counts_words():
    tokens = tokenize("the software, the (software) 2.0")
    assert tokens["the"] == 2
    assert tokens["software"] == 2
    assert tokens["2"] == 1 and tokens["0"] == 1
    assert sum(tokens.values()) == 6


def test_tokenize_empty_text():
    assert not tokenize("\n\t  \n")
