"""Locate ``mdnest.toml``.

``MDNEST_CONFIG`` names a file explicitly; otherwise the search walks from
the start directory up to the filesystem root, the way git finds ``.git``.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "mdnest.toml"
CONFIG_ENV_VAR = "MDNEST_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Return the config file governing *start* (default: cwd), or None.

    A set ``MDNEST_CONFIG`` that points at a missing file disables
    discovery entirely.
    """
    from_env = os.environ.get(CONFIG_ENV_VAR)
    if from_env:
        candidate = Path(from_env)
        return candidate if candidate.is_file() else None

    here = (start or Path.cwd()).resolve()
    for directory in (here, *here.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None
