"""
This module orchestrates a license scan: it resolves the package graph,
locates and matches the license text of every package, and applies the
configured overrides.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, List, Optional

from license_bom.core.config import LICENSE_BOM_WORKERS, get_source_roots
from license_bom.models.schemas import LicenseMatch, Package, PackageStatus, ProjectLicenses, ScanResult
from license_bom.services.license_locator import LicenseLocator, longest_common_path
from license_bom.services.matching import match_licenses, normalize_license_text
from license_bom.services.override_service import OverrideSource, apply_overrides, load_overrides
from license_bom.services.package_resolver import PackageGraphResolver
from license_bom.services.package_source import PythonPackageSource

logger = logging.getLogger(__name__)


def search_boundary(packages: Iterable[Package]):
    """
    Computes the directory above which no license file is searched: the
    longest common ancestor of the resolved packages' directories. Missing
    packages have no directory and do not take part.
    """
    return longest_common_path(p.directory for p in packages if p.directory)


def detect_licenses(package: Package, locator: LicenseLocator) -> ScanResult:
    """
    Finds and matches the license text of a single package.

    Args:
        package (Package): A resolved or missing package.
        locator (LicenseLocator): Shared, boundary-aware locator.

    Returns:
        ScanResult: Matches for the package; a missing package keeps its
        resolution error and gets the "no license" placeholder.
    """
    if package.status == PackageStatus.MISSING:
        return ScanResult(package=package.name, licenses=[LicenseMatch.not_found()], error=package.error)

    artifact = locator.find(package.directory)
    if artifact is None:
        logger.debug("No license file found for %s", package.name)
        return ScanResult(package=package.name, licenses=[LicenseMatch.not_found()])

    matches = match_licenses(normalize_license_text(artifact.data))
    if not matches:
        matches = [LicenseMatch.not_found()]
    return ScanResult(
        package=package.name,
        licenses=matches,
        license_path=", ".join(str(p) for p in artifact.paths),
    )


def scan_packages(specifiers: Iterable[str], roots: Optional[Iterable[str]] = None,
                  workers: Optional[int] = None) -> List[ScanResult]:
    """
    Scans the packages named by the specifiers and all their dependencies.

    Args:
        specifiers (Iterable[str]): Package names or wildcard patterns.
        roots (Iterable[str], optional): Source roots, LICENSE_BOM_PATH by default.
        workers (int, optional): Size of the lookup thread pool.

    Returns:
        List[ScanResult]: One result per package, sorted by package name.

    Raises:
        MissingPackageError: If a requested specifier cannot be resolved.
    """
    source = PythonPackageSource(roots if roots is not None else get_source_roots())
    packages = PackageGraphResolver(source).resolve(specifiers)
    if not packages:
        return []

    # The boundary needs the whole batch, so it is computed before any lookup.
    locator = LicenseLocator(search_boundary(packages))

    with ThreadPoolExecutor(max_workers=workers or LICENSE_BOM_WORKERS) as pool:
        results = list(pool.map(lambda p: detect_licenses(p, locator), packages))

    return sorted(results, key=lambda r: r.package)


def list_licenses(specifiers: Iterable[str], overrides: OverrideSource = None,
                  roots: Optional[Iterable[str]] = None,
                  workers: Optional[int] = None) -> List[ProjectLicenses]:
    """
    Scans the packages and returns their final license declarations.

    The override document is loaded first, so a ConfigError is raised before
    any scanning happens.
    """
    override_map = load_overrides(overrides)
    results = scan_packages(specifiers, roots=roots, workers=workers)
    return apply_overrides(results, override_map)
