import os
from typing import List, Optional

from dotenv import load_dotenv

load_dotenv()

# source roots, os.pathsep separated (like PYTHONPATH)
LICENSE_BOM_PATH = os.getenv("LICENSE_BOM_PATH")

# default override document used by the CLI
LICENSE_BOM_OVERRIDES = os.getenv("LICENSE_BOM_OVERRIDES")

# concurrency and logging
LICENSE_BOM_WORKERS = int(os.getenv("LICENSE_BOM_WORKERS", "8"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING").upper()


def get_source_roots(value: Optional[str] = None) -> List[str]:
    """
    Returns the configured source roots.

    The environment is read on every call so that a changed LICENSE_BOM_PATH
    is picked up without reloading the module. Falls back to the current
    working directory when nothing is configured.
    """
    if value is None:
        value = os.getenv("LICENSE_BOM_PATH")
    roots = [os.path.abspath(p) for p in (value or "").split(os.pathsep) if p.strip()]
    return roots or [os.getcwd()]
