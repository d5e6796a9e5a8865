"""
This module finds the license file(s) governing a package directory.

A package is governed by the license files in its own directory or, when it
has none, by those of its closest ancestor directory that has some. The
upward walk never goes above a boundary directory: the longest common
ancestor of every directory taking part in the run. That boundary is computed
once per run with `longest_common_path` and handed to the locator.
"""

import logging
import os
import re
import threading
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

logger = logging.getLogger(__name__)

LICENSE_FILE_RE = re.compile(r"^(?:licen[cs]e|copying|unlicense)(?:[.\-_].*)?$", re.IGNORECASE)
# modules such as license_utils.py are not license files
_CODE_SUFFIXES = (".py", ".pyc", ".pyi", ".pyo", ".pyd", ".so")


class LicenseArtifact:
    """Raw content of the license file(s) found for a directory."""

    def __init__(self, paths: List[Path], data: bytes):
        self.paths = paths
        self.data = data

    @property
    def directory(self) -> Path:
        return self.paths[0].parent

    def __repr__(self):
        return f"LicenseArtifact({[p.name for p in self.paths]}, {len(self.data)} bytes)"


def longest_common_path(directories: Iterable[str]) -> Optional[Path]:
    """
    Returns the longest common ancestor of the given directories.

    Comparison is made on whole path segments, so '/a/b/c' and '/a/b/cd'
    share '/a/b', not '/a/b/c'. Returns None for an empty input.
    """
    parts_list = [Path(os.path.abspath(d)).parts for d in directories]
    if not parts_list:
        return None

    common: Tuple[str, ...] = parts_list[0]
    for parts in parts_list[1:]:
        size = 0
        for a, b in zip(common, parts):
            if a != b:
                break
            size += 1
        common = common[:size]
    if not common:
        # different drives on Windows
        return None
    return Path(*common)


def is_license_file(name: str) -> bool:
    return bool(LICENSE_FILE_RE.match(name)) and not name.lower().endswith(_CODE_SUFFIXES)


class LicenseLocator:
    """
    Looks up license files for package directories.

    Args:
        boundary (Path | str | None): Highest directory the upward search may
            reach. Directories outside of it are only searched on their own
            level. When None, the search may reach the filesystem root.

    Results are cached per directory; the locator can be shared between
    threads.
    """

    def __init__(self, boundary=None):
        self.boundary = Path(os.path.abspath(boundary)) if boundary is not None else None
        self._cache: Dict[Path, Optional[LicenseArtifact]] = {}
        self._lock = threading.Lock()

    def find(self, directory) -> Optional[LicenseArtifact]:
        """
        Returns the license artifact governing `directory`, or None.
        """
        start = Path(os.path.abspath(directory))
        for current in self._search_path(start):
            artifact = self._lookup(current)
            if artifact is not None:
                return artifact
        return None

    def _search_path(self, start: Path) -> List[Path]:
        if self.boundary is not None and not _is_within(start, self.boundary):
            return [start]
        path = [start]
        current = start
        while current != self.boundary and current.parent != current:
            current = current.parent
            path.append(current)
        return path

    def _lookup(self, directory: Path) -> Optional[LicenseArtifact]:
        with self._lock:
            if directory in self._cache:
                logger.debug("License cache hit for %s", directory)
                return self._cache[directory]

        artifact = read_license_files(directory)

        with self._lock:
            self._cache.setdefault(directory, artifact)
            return self._cache[directory]


def read_license_files(directory: Path) -> Optional[LicenseArtifact]:
    """
    Reads the license files located directly in `directory`.

    Several license files (e.g. LICENSE-APACHE and LICENSE-MIT) are read in
    name order and concatenated. Listing or read errors are logged and
    treated as if there was no license file.
    """
    try:
        names = sorted(
            entry.name for entry in os.scandir(directory)
            if entry.is_file() and is_license_file(entry.name)
        )
    except OSError as e:
        logger.warning("Cannot list %s: %s", directory, e)
        return None

    paths = []
    chunks = []
    for name in names:
        path = directory / name
        try:
            chunks.append(path.read_bytes())
        except OSError as e:
            logger.warning("Cannot read license file %s: %s", path, e)
            continue
        paths.append(path)

    if not paths:
        return None
    return LicenseArtifact(paths, b"\n".join(chunks))


def _is_within(path: Path, ancestor: Path) -> bool:
    try:
        path.relative_to(ancestor)
    except ValueError:
        return False
    return True
