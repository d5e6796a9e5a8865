"""
This module renders scan results as human-readable text or JSON.
"""

import json
from typing import List, Sequence

from pydantic import BaseModel

from license_bom.models.schemas import LicenseMatch, ProjectLicenses, ScanResult


def _format_match(match: LicenseMatch) -> str:
    title = match.title or ""
    text = f'"{title}" {match.score:.0f}%'
    if match.extra > 0:
        text += f" +{match.extra}"
    if match.missing > 0:
        text += f" -{match.missing}"
    return text


def render_matches(results: Sequence[ScanResult]) -> str:
    """
    One line per package with every detected license, its score and the
    number of extra (+) and missing (-) words:

        colors.red: "MIT License" 98% -2
        colors.missing: "" 0% (error: cannot find package ...)
    """
    lines = []
    for result in results:
        line = f"{result.package}: " + "; ".join(_format_match(m) for m in result.licenses)
        if result.error:
            line += f" (error: {result.error})"
        lines.append(line)
    return "\n".join(lines)


def render_licenses(licenses: Sequence[ProjectLicenses]) -> str:
    """
    One line per project with its final license declarations:

        colors.red: MIT License (1.00)
        colors.missing: override missing (1.00) [override]
    """
    lines = []
    for project in licenses:
        declared = ", ".join(f"{lic.type} ({lic.confidence:.2f})" for lic in project.licenses)
        line = f"{project.project}: {declared or 'UNKNOWN'}"
        if project.overridden:
            line += " [override]"
        if project.error:
            line += f" (error: {project.error})"
        lines.append(line)
    return "\n".join(lines)


def render_json(items: Sequence[BaseModel]) -> str:
    data: List[dict] = [item.model_dump(mode="json") for item in items]
    return json.dumps(data, indent=2, ensure_ascii=False)
