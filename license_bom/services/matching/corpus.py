"""
Module `corpus`: reference license templates.

The templates live next to this module: `templates.json` lists the title, the
SPDX identifier and the file name of every template, and the texts are in
the `templates/` directory. Every template is normalized and tokenized once,
when the corpus is first used; the corpus is never mutated afterwards.

The main public function is `get_corpus()`, which returns the shared corpus
(loaded lazily, once per process).
"""

import json
import logging
import os
import threading
from collections import Counter
from typing import Iterator, List, Optional

from license_bom.services.spdx_utils import is_known_spdx
from .normalizer import normalize_license_text, tokenize

_MANIFEST_PATH = os.path.join(os.path.dirname(__file__), "templates.json")
_TEMPLATES_DIR = os.path.join(os.path.dirname(__file__), "templates")

logger = logging.getLogger(__name__)


class LicenseTemplate:
    """
    A reference license text, pre-normalized, with its human-readable title.
    """
    def __init__(self, title: str, spdx_id: str, text: str, filename: str = ""):
        self.title = title
        self.spdx_id = spdx_id
        self.filename = filename
        self.text = normalize_license_text(text)
        self.tokens: Counter = tokenize(self.text)
        self.size = sum(self.tokens.values())

    def __repr__(self):
        return f"LicenseTemplate({self.spdx_id})"


class LicenseCorpus:
    """Ordered, read-only collection of license templates."""

    def __init__(self, templates: List[LicenseTemplate]):
        self._templates = tuple(templates)

    def __iter__(self) -> Iterator[LicenseTemplate]:
        return iter(self._templates)

    def __len__(self) -> int:
        return len(self._templates)

    def find(self, title: str) -> Optional[LicenseTemplate]:
        """Linear lookup by title or SPDX identifier."""
        for template in self._templates:
            if template.title == title or template.spdx_id == title:
                return template
        return None


def load_corpus(manifest_path: str = _MANIFEST_PATH, templates_dir: str = _TEMPLATES_DIR) -> LicenseCorpus:
    """
    Reads the template manifest and every template text it lists.

    Raises:
        RuntimeError: If the manifest or a template cannot be read, or if a
            manifest entry carries an SPDX identifier that is not known.
    """
    try:
        with open(manifest_path, "r", encoding="utf-8") as f:
            entries = json.load(f)
    except (OSError, ValueError) as e:
        raise RuntimeError(f"Cannot read license template manifest {manifest_path}: {e}") from e

    templates = []
    for entry in entries:
        spdx_id = entry["spdx_id"]
        if not is_known_spdx(spdx_id):
            raise RuntimeError(f"Unknown SPDX identifier in template manifest: {spdx_id}")
        path = os.path.join(templates_dir, entry["filename"])
        try:
            with open(path, "r", encoding="utf-8") as f:
                text = f.read()
        except OSError as e:
            raise RuntimeError(f"Cannot read license template {path}: {e}") from e
        templates.append(LicenseTemplate(entry["title"], spdx_id, text, entry["filename"]))

    logger.debug("Loaded %d license templates from %s", len(templates), templates_dir)
    return LicenseCorpus(templates)


_corpus: Optional[LicenseCorpus] = None
_corpus_lock = threading.Lock()


def get_corpus() -> LicenseCorpus:
    """Returns the shared corpus, loading it on first use."""
    global _corpus
    with _corpus_lock:
        if _corpus is None:
            _corpus = load_corpus()
        return _corpus
