"""
This module expands package specifiers into the full set of packages they
depend on.

Failures are handled asymmetrically:
- a specifier requested explicitly that cannot be resolved aborts the whole
  resolution with MissingPackageError;
- a package reached only through another package's imports that cannot be
  resolved is recorded as a `missing` Package and the traversal continues.
  The importing package is marked `degraded`.

Standard library packages are dropped from the result and not traversed.
"""

import logging
from collections import deque
from typing import Dict, Iterable, List, Optional

from license_bom.core.exceptions import MissingPackageError
from license_bom.models.schemas import Package, PackageStatus
from license_bom.services.package_source import (
    PackageInfo,
    PackageLookupError,
    PythonPackageSource,
    normalize_name,
)

logger = logging.getLogger(__name__)

WILDCARD_SUFFIXES = (".*", "/...", "...")


def split_wildcard(specifier: str) -> Optional[str]:
    """
    Returns the prefix of a wildcard specifier ('colors.cmd.*' or
    'colors/cmd/...'), or None for an exact identifier.
    """
    text = specifier.strip()
    if text in ("*", "..."):
        return ""
    for suffix in WILDCARD_SUFFIXES:
        if text.endswith(suffix):
            return normalize_name(text[: -len(suffix)])
    return None


class PackageGraphResolver:
    """
    Resolves specifiers against a package source.

    Args:
        source (PythonPackageSource): Locates packages and reads their imports.
    """

    def __init__(self, source: PythonPackageSource):
        self.source = source

    def expand_specifiers(self, specifiers: Iterable[str]) -> List[str]:
        """
        Turns specifiers into package names, expanding wildcards. A wildcard
        below a standard library package is kept as its prefix, which
        resolve() then drops.

        Raises:
            MissingPackageError: If a wildcard matches no buildable package.
        """
        names = []
        for specifier in specifiers:
            prefix = split_wildcard(specifier)
            if prefix is None:
                names.append(normalize_name(specifier))
                continue
            if prefix and self.source.is_standard(prefix):
                names.append(prefix)
                continue
            matched = self.source.iter_packages(prefix)
            if not matched:
                raise MissingPackageError(specifier, "pattern matched no packages")
            names.extend(matched)
        return list(dict.fromkeys(names))

    def resolve(self, specifiers: Iterable[str]) -> List[Package]:
        """
        Returns every package reachable from the specifiers, sorted by name.

        Raises:
            MissingPackageError: If an explicitly requested package cannot be
                resolved. No partial result is returned.
        """
        roots = self.expand_specifiers(specifiers)

        infos: Dict[str, PackageInfo] = {}
        missing: Dict[str, str] = {}

        for name in roots:
            try:
                infos[name] = self.source.locate(name)
            except PackageLookupError as e:
                raise MissingPackageError(name, str(e)) from e

        queue = deque(roots)
        visited = set(roots)
        while queue:
            info = infos[queue.popleft()]
            if info.standard:
                continue
            for imported in info.imports:
                if imported in visited:
                    continue
                visited.add(imported)
                try:
                    infos[imported] = self.source.locate(imported)
                except PackageLookupError as e:
                    logger.warning("Imported package %s cannot be resolved: %s", imported, e)
                    missing[imported] = str(e)
                    continue
                queue.append(imported)

        packages = [
            _to_package(info, missing)
            for info in infos.values()
            if not info.standard
        ]
        packages.extend(
            Package(name=name, status=PackageStatus.MISSING, error=error)
            for name, error in missing.items()
        )
        packages.sort(key=lambda p: p.name)
        logger.info("Resolved %d packages (%d missing)", len(packages), len(missing))
        return packages


def _to_package(info: PackageInfo, missing: Dict[str, str]) -> Package:
    missing_imports = [name for name in info.imports if name in missing]
    return Package(
        name=info.name,
        directory=str(info.directory),
        root=str(info.root),
        imports=info.imports,
        status=PackageStatus.DEGRADED if missing_imports else PackageStatus.RESOLVED,
        missing_imports=missing_imports,
    )
