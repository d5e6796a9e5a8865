"""
This module loads license overrides and merges them into scan results.

An override document is a JSON list of objects:

    [
        {"project": "colors.red", "licenses": [{"type": "MIT", "confidence": 1}]}
    ]

`confidence` defaults to 1 and must not be negative. Detected matches use a
0-1 scale; an override may use its own, e.g. 95 for a percentage. When a package has an override entry, its
declared licenses replace whatever was detected for that package, and any
resolution error recorded for it is dropped.
"""

import json
import logging
import os
from typing import Dict, Iterable, List, Optional, Union

from pydantic import ValidationError

from license_bom.core.exceptions import ConfigError
from license_bom.models.schemas import (
    LicenseDeclaration,
    OverrideEntry,
    ProjectLicenses,
    ScanResult,
)
from license_bom.services.package_source import normalize_name
from license_bom.services.spdx_utils import canonical_expression

logger = logging.getLogger(__name__)

OverrideSource = Union[str, os.PathLike, list, None]


def load_overrides(source: OverrideSource) -> Dict[str, OverrideEntry]:
    """
    Parses an override document.

    Args:
        source: Path to a JSON file, a JSON string, an already decoded list,
            or None for no overrides.

    Returns:
        Dict[str, OverrideEntry]: Entries keyed by package name. A later
        entry for the same package replaces an earlier one.

    Raises:
        ConfigError: If the document cannot be read or is malformed.
    """
    if source is None:
        return {}

    data = source
    if isinstance(source, os.PathLike) or (isinstance(source, str) and not source.lstrip().startswith(("[", "{"))):
        try:
            with open(source, "r", encoding="utf-8") as f:
                data = json.load(f)
        except OSError as e:
            raise ConfigError(f"Cannot read override file {source}: {e}") from e
        except ValueError as e:
            raise ConfigError(f"Invalid JSON in override file {source}: {e}") from e
    elif isinstance(source, str):
        try:
            data = json.loads(source)
        except ValueError as e:
            raise ConfigError(f"Invalid override JSON: {e}") from e

    if not isinstance(data, list):
        raise ConfigError("Override document must be a JSON list of {project, licenses} objects")

    overrides: Dict[str, OverrideEntry] = {}
    for i, raw in enumerate(data):
        try:
            entry = OverrideEntry.model_validate(raw)
        except ValidationError as e:
            raise ConfigError(f"Invalid override entry #{i}: {e}") from e
        project = normalize_name(entry.project)
        if not project:
            raise ConfigError(f"Invalid override entry #{i}: empty project")
        overrides[project] = entry.model_copy(update={"project": project})
    return overrides


def _declared(entry: OverrideEntry) -> List[LicenseDeclaration]:
    return [
        LicenseDeclaration(
            type=lic.type,
            confidence=lic.confidence,
            spdx_id=lic.spdx_id or canonical_expression(lic.type),
        )
        for lic in entry.licenses
    ]


def _detected(result: ScanResult) -> List[LicenseDeclaration]:
    return [
        LicenseDeclaration(type=m.title, confidence=round(m.score / 100.0, 4), spdx_id=m.spdx_id)
        for m in result.licenses
        if m.found
    ]


def apply_overrides(results: Iterable[ScanResult],
                    overrides: Optional[Dict[str, OverrideEntry]] = None) -> List[ProjectLicenses]:
    """
    Produces the final license declarations of every scanned package.

    Args:
        results (Iterable[ScanResult]): Detected matches per package.
        overrides (Dict[str, OverrideEntry], optional): Forced licenses keyed
            by package name.

    Returns:
        List[ProjectLicenses]: One entry per scan result, in the same order.
    """
    overrides = overrides or {}
    final = []
    used = set()

    for result in results:
        entry = overrides.get(result.package)
        if entry is not None:
            used.add(result.package)
            final.append(ProjectLicenses(project=result.package, licenses=_declared(entry), overridden=True))
        else:
            final.append(ProjectLicenses(project=result.package, licenses=_detected(result), error=result.error))

    for project in sorted(set(overrides) - used):
        logger.debug("Override for %s ignored: package not part of the scan", project)
    return final
