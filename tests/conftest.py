"""
Shared fixtures.

`tests/testdata/src` is a source root holding small Python packages with
real license files:

- colors.red: MIT
- colors.blue: MIT and Apache 2.0 concatenated in a single LICENSE file
- colors.dual: MIT and Apache 2.0 in LICENSE-MIT / LICENSE-APACHE
- colors.green: no license anywhere
- colors.yellow: a license that matches no template well
- colors.broken: GPL v3, imports the nonexistent colors.missing
- colors.purple: no license, imports colors.broken
- colors.cmd: no Python source, MPL 2.0 LICENSE governing paint and mix
- couleurs.red: LGPL 2.1
"""

import os

import pytest

TESTDATA_SRC = os.path.join(os.path.dirname(os.path.abspath(__file__)), "testdata", "src")


@pytest.fixture
def source_root():
    """Absolute path of the fixture source root."""
    return TESTDATA_SRC


@pytest.fixture
def licenses_dir():
    """Directory of the shipped license templates."""
    return os.path.join(
        os.path.dirname(os.path.dirname(os.path.abspath(__file__))),
        "license_bom", "services", "matching", "templates",
    )
