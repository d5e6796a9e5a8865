"""
Unit tests for `license_bom.services.package_resolver`.

The suite covers:
1. Wildcard expansion.
2. Graph traversal: transitive dependencies, standard library exclusion.
3. Failure handling: explicit specifiers abort the run, transitive failures
   are recorded and the traversal continues.
4. Determinism: the result does not depend on specifier order.
"""

import pytest

from license_bom.core.exceptions import MissingPackageError
from license_bom.models.schemas import PackageStatus
from license_bom.services.package_resolver import PackageGraphResolver, split_wildcard
from license_bom.services.package_source import PythonPackageSource


@pytest.fixture
def resolver(source_root):
    return PackageGraphResolver(PythonPackageSource([source_root]))


def _names(packages):
    return [p.name for p in packages]

# ==================================================================================
#                                TEST: WILDCARDS
# ==================================================================================

@pytest.mark.parametrize("specifier, prefix", [
    ("colors.red", None),
    ("colors/red", None),
    ("colors.cmd.*", "colors.cmd"),
    ("colors/cmd/...", "colors.cmd"),
    ("*", ""),
    ("...", ""),
])
def test_split_wildcard(specifier, prefix):
    assert split_wildcard(specifier) == prefix


def test_wildcard_equals_explicit_list(resolver):
    explicit = resolver.resolve(["colors.cmd.mix", "colors.cmd.paint"])

    assert resolver.resolve(["colors.cmd.*"]) == explicit
    assert resolver.resolve(["colors/cmd/..."]) == explicit
    assert _names(explicit) == ["colors.cmd.mix", "colors.cmd.paint", "colors.red", "couleurs.red"]


def test_wildcard_matching_nothing(resolver):
    with pytest.raises(MissingPackageError) as excinfo:
        resolver.resolve(["colors.nothing.*"])
    assert excinfo.value.specifier == "colors.nothing.*"


def test_duplicate_specifiers(resolver):
    assert _names(resolver.resolve(["colors.red", "colors/red", "colors.red"])) == ["colors.red"]

# ==================================================================================
#                                TEST: TRAVERSAL
# ==================================================================================

def test_single_package(resolver):
    packages = resolver.resolve(["colors.red"])

    assert _names(packages) == ["colors.red"]
    assert packages[0].status == PackageStatus.RESOLVED
    # json and os are standard library
    assert packages[0].imports == ["json", "os"]


def test_transitive_dependencies(resolver):
    assert _names(resolver.resolve(["colors.cmd.mix"])) == ["colors.cmd.mix", "colors.red", "couleurs.red"]


def test_standard_library_only(resolver):
    assert resolver.resolve(["json", "os.path"]) == []


@pytest.mark.parametrize("specifier", ["json.*", "os.path.*", "xml/..."])
def test_standard_library_wildcard(resolver, specifier):
    assert resolver.resolve([specifier]) == []


def test_standard_library_wildcard_with_other_packages(resolver):
    assert _names(resolver.resolve(["json.*", "colors.red"])) == ["colors.red"]


def test_standard_library_is_not_traversed(resolver):
    assert "sys" not in _names(resolver.resolve(["colors.purple"]))

# ==================================================================================
#                                TEST: FAILURES
# ==================================================================================

def test_missing_explicit_package(resolver):
    with pytest.raises(MissingPackageError) as excinfo:
        resolver.resolve(["colors.red", "colors.missing"])
    assert excinfo.value.specifier == "colors.missing"
    assert "colors.missing" in str(excinfo.value)


def test_explicit_directory_without_source(resolver):
    with pytest.raises(MissingPackageError):
        resolver.resolve(["colors.cmd"])


def test_missing_transitive_package(resolver):
    """
    colors.purple -> colors.broken -> colors.missing: the missing package is
    reported, its importer is degraded and the traversal reaches colors.red.
    """
    packages = {p.name: p for p in resolver.resolve(["colors.purple"])}

    assert sorted(packages) == ["colors.broken", "colors.missing", "colors.purple", "colors.red"]

    missing = packages["colors.missing"]
    assert missing.status == PackageStatus.MISSING
    assert missing.directory is None
    assert "colors.missing" in missing.error

    broken = packages["colors.broken"]
    assert broken.status == PackageStatus.DEGRADED
    assert broken.missing_imports == ["colors.missing"]
    assert broken.error is None

    assert packages["colors.purple"].status == PackageStatus.RESOLVED
    assert packages["colors.red"].status == PackageStatus.RESOLVED

# ==================================================================================
#                               TEST: DETERMINISM
# ==================================================================================

def test_specifier_order_does_not_matter(resolver):
    first = resolver.resolve(["couleurs.red", "colors.broken", "colors.cmd.paint"])
    second = resolver.resolve(["colors.cmd.paint", "couleurs.red", "colors.broken"])

    assert first == second
    assert _names(first) == sorted(_names(first))
