"""
Package `license_bom.services.matching`

Tools to recognise license texts against a corpus of reference templates.

Public API:
- normalize_license_text(data: bytes | str) -> str
- match_licenses(text: str, corpus: LicenseCorpus | None = None) -> List[LicenseMatch]
- get_corpus() -> LicenseCorpus

The logic is split into separate modules:
- normalizer: case folding, copyright removal and tokenization
- corpus: loading of the reference templates (`templates.json` + `templates/`)
- matcher: Dice scoring and iterative extraction of co-located licenses
"""

from .corpus import LicenseCorpus, LicenseTemplate, get_corpus
from .matcher import match_licenses
from .normalizer import normalize_license_text

__all__ = [
    "LicenseCorpus",
    "LicenseTemplate",
    "get_corpus",
    "match_licenses",
    "normalize_license_text",
]
