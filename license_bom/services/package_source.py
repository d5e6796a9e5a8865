"""
This module locates Python packages in a set of source roots and reads their
imports.

Source roots play the role of `sys.path` entries: the package `colors.red`
lives in `<root>/colors/red/` and is buildable when that directory holds at
least one `.py` file. The imports of a package are read with `ast` from the
`.py` files located directly in its directory; imports guarded by
`try: ... except ImportError` are optional and ignored. Names that belong to
the standard library are recognised without touching the filesystem.
"""

import ast
import logging
import os
import sys
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

logger = logging.getLogger(__name__)

STANDARD_MODULES = frozenset(sys.stdlib_module_names) | frozenset(sys.builtin_module_names)

_SKIPPED_DIRS = {"__pycache__", "node_modules"}


class PackageLookupError(Exception):
    """A package cannot be resolved."""


class PackageNotFoundError(PackageLookupError):
    pass


class NoSourceError(PackageLookupError):
    pass


class PackageInfo:
    """What the source knows about a single package."""

    def __init__(self, name: str, directory: Optional[Path] = None, root: Optional[Path] = None,
                 imports: Iterable[str] = (), standard: bool = False):
        self.name = name
        self.directory = directory
        self.root = root
        self.imports = list(imports)
        self.standard = standard

    def __repr__(self):
        return f"PackageInfo({self.name}, {self.directory})"


def normalize_name(specifier: str) -> str:
    """Accepts both 'colors.red' and 'colors/red'."""
    return specifier.strip().replace("/", ".").strip(".")


class PythonPackageSource:
    """
    Resolves packages from a list of source roots, first root first.
    """

    def __init__(self, roots: Iterable[str]):
        self.roots = [Path(os.path.abspath(r)) for r in roots]

    def is_standard(self, name: str) -> bool:
        return name.split(".", 1)[0] in STANDARD_MODULES

    def find_directory(self, name: str) -> Optional[Tuple[Path, Path]]:
        """Returns (root, directory) of the first root holding `name`."""
        parts = name.split(".")
        if not name or not all(p.isidentifier() for p in parts):
            return None
        for root in self.roots:
            directory = root.joinpath(*parts)
            if directory.is_dir():
                return root, directory
        return None

    def locate(self, name: str) -> PackageInfo:
        """
        Resolves one package.

        Raises:
            PackageNotFoundError: No root holds a directory for the package.
            NoSourceError: The directory holds no Python source file.
        """
        if self.is_standard(name):
            return PackageInfo(name, standard=True)

        found = self.find_directory(name)
        if found is None:
            roots = ", ".join(str(r) for r in self.roots)
            raise PackageNotFoundError(f"cannot find package {name!r} in any of: {roots}")

        root, directory = found
        sources = _source_files(directory)
        if not sources:
            raise NoSourceError(f"no Python source files in {directory}")

        return PackageInfo(name, directory, root, self._read_imports(name, sources))

    def iter_packages(self, prefix: str) -> List[str]:
        """
        Lists the buildable packages at or below `prefix`, across all roots.
        An empty prefix lists everything below the roots.
        """
        parts = [p for p in prefix.split(".") if p]
        names = set()
        for root in self.roots:
            base = root.joinpath(*parts)
            if not base.is_dir():
                continue
            for dirpath, dirnames, _ in os.walk(base):
                dirnames[:] = sorted(d for d in dirnames if _is_package_dir_name(d))
                current = Path(dirpath)
                if current == root or not _source_files(current):
                    continue
                names.add(".".join(current.relative_to(root).parts))
        return sorted(names)

    def package_of(self, module: str) -> str:
        """
        Maps a module name to the package that holds it: `colors.red.util`
        is `colors.red` when util is a `.py` file. Unknown names are
        returned unchanged.
        """
        if self.is_standard(module) or self.find_directory(module):
            return module
        parent, _, leaf = module.rpartition(".")
        found = self.find_directory(parent) if parent else None
        if found and (found[1] / f"{leaf}.py").is_file():
            return parent
        return module

    def _read_imports(self, name: str, sources: List[Path]) -> List[str]:
        imports = []
        for path in sources:
            try:
                tree = ast.parse(path.read_bytes(), filename=str(path))
            except (SyntaxError, ValueError, OSError) as e:
                logger.warning("Skipping unparsable source file %s: %s", path, e)
                continue

            collector = _ImportCollector()
            collector.visit(tree)
            for module, names, level in collector.found:
                imports.extend(self._resolve_import(name, module, names, level, path))

        # order preserving dedup, without self-imports
        seen = {name}
        result = []
        for imported in imports:
            if imported and imported not in seen:
                seen.add(imported)
                result.append(imported)
        return result

    def _resolve_import(self, package: str, module: Optional[str], names: Optional[List[str]],
                        level: int, path: Path) -> List[str]:
        if names is None:
            return [self.package_of(module)]

        if level:
            parts = package.split(".")
            if level - 1 >= len(parts):
                logger.warning("Relative import beyond top-level package in %s", path)
                return []
            base_parts = parts[:len(parts) - (level - 1)]
            if module:
                base_parts.append(module)
            base = ".".join(base_parts)
        else:
            base = module or ""

        resolved = []
        for alias in names:
            sub = f"{base}.{alias}" if alias != "*" else None
            if sub and not self.is_standard(base) and self.find_directory(sub):
                resolved.append(sub)
            else:
                resolved.append(self.package_of(base))
        return resolved


class _ImportCollector(ast.NodeVisitor):
    """Collects (module, imported names, level) of non-optional imports."""

    def __init__(self):
        self.found: List[Tuple[Optional[str], Optional[List[str]], int]] = []
        self._optional = 0

    def visit_Try(self, node):
        optional = any(_catches_import_error(h) for h in node.handlers)
        if optional:
            self._optional += 1
        for stmt in node.body:
            self.visit(stmt)
        if optional:
            self._optional -= 1
        for part in node.handlers + node.orelse + node.finalbody:
            self.visit(part)

    visit_TryStar = visit_Try

    def visit_Import(self, node):
        if self._optional:
            return
        for alias in node.names:
            self.found.append((alias.name, None, 0))

    def visit_ImportFrom(self, node):
        if self._optional:
            return
        self.found.append((node.module, [a.name for a in node.names], node.level or 0))


def _catches_import_error(handler: ast.ExceptHandler) -> bool:
    if handler.type is None:
        return True
    types = handler.type.elts if isinstance(handler.type, ast.Tuple) else [handler.type]
    for t in types:
        name = t.id if isinstance(t, ast.Name) else getattr(t, "attr", None)
        if name in ("ImportError", "ModuleNotFoundError"):
            return True
    return False


def _is_package_dir_name(name: str) -> bool:
    return name.isidentifier() and name not in _SKIPPED_DIRS and not name.startswith(".")


def _source_files(directory: Path) -> List[Path]:
    try:
        return sorted(p for p in directory.iterdir() if p.suffix == ".py" and p.is_file())
    except OSError as e:
        logger.warning("Cannot list %s: %s", directory, e)
        return []
