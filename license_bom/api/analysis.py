from fastapi import APIRouter, HTTPException

from license_bom.core.exceptions import ConfigError, MissingPackageError
from license_bom.models.schemas import ScanRequest, ScanResponse
from license_bom.services.analysis_workflow import scan_packages
from license_bom.services.override_service import apply_overrides, load_overrides


router = APIRouter()


@router.post("/scan", response_model=ScanResponse)
def scan_dependencies(payload: ScanRequest):
    # 1) Overrides first: a malformed document must fail before scanning
    try:
        overrides = load_overrides(
            [o.model_dump() for o in payload.overrides] if payload.overrides else None
        )
    except ConfigError as e:
        raise HTTPException(status_code=400, detail=str(e))

    # 2) Dependency graph + license detection
    try:
        results = scan_packages(payload.specifiers, roots=payload.roots)
    except MissingPackageError as e:
        raise HTTPException(status_code=404, detail=str(e))

    # 3) Final declarations
    return ScanResponse(results=results, licenses=apply_overrides(results, overrides))
