"""
Pydantic models shared by the scanning services, the CLI and the HTTP API.

The scan produces one `ScanResult` per package (raw template matches with
their scores); the override layer turns those into `ProjectLicenses`, the
final per-project license declarations.
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class PackageStatus(str, Enum):
    """Outcome of resolving a single package of the dependency graph."""

    RESOLVED = "resolved"
    MISSING = "missing"
    # resolved, but at least one of its imports could not be resolved
    DEGRADED = "degraded"


class Package(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    directory: Optional[str] = None
    root: Optional[str] = None
    imports: List[str] = Field(default_factory=list)
    status: PackageStatus = PackageStatus.RESOLVED
    missing_imports: List[str] = Field(default_factory=list)
    error: Optional[str] = None


class LicenseMatch(BaseModel):
    """
    Result of scoring one segment of license text against one template.

    A match without a title means that no license artifact was found at all;
    such a match always carries a zero score and zero extra/missing counts.
    """

    title: Optional[str] = None
    spdx_id: Optional[str] = None
    score: float = Field(default=0.0, ge=0.0, le=100.0)
    extra: int = 0
    missing: int = 0

    @classmethod
    def not_found(cls) -> "LicenseMatch":
        return cls()

    @property
    def found(self) -> bool:
        return self.title is not None


class ScanResult(BaseModel):
    package: str
    licenses: List[LicenseMatch] = Field(default_factory=list)
    error: Optional[str] = None
    license_path: Optional[str] = None


class LicenseDeclaration(BaseModel):
    type: str
    confidence: float = Field(default=1.0, ge=0.0)
    spdx_id: Optional[str] = None


class OverrideEntry(BaseModel):
    project: str
    licenses: List[LicenseDeclaration] = Field(default_factory=list)


class ProjectLicenses(BaseModel):
    project: str
    licenses: List[LicenseDeclaration] = Field(default_factory=list)
    error: Optional[str] = None
    overridden: bool = False


class ScanRequest(BaseModel):
    specifiers: List[str] = Field(min_length=1)
    overrides: Optional[List[OverrideEntry]] = None
    roots: Optional[List[str]] = None


class ScanResponse(BaseModel):
    results: List[ScanResult]
    licenses: List[ProjectLicenses]
