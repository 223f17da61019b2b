# src/mods/discovery.py
"""
Find installed mods under the mods directory.

A mod is any immediate subdirectory that contains a data.lua script and a
readable info.json. Directories without data.lua are ignored silently;
directories with an unreadable manifest are reported and skipped.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

from runtime.report import RunReport, SkipReason

from .manifest import ManifestError, read_manifest
from .schema import ModInfo

logger = logging.getLogger(__name__)


DATA_SCRIPT = "data.lua"


def discover_mods(mods_dir: Path, report: Optional[RunReport] = None) -> List[ModInfo]:
    """
    Return a ModInfo for every loadable mod directory, sorted by directory name.
    """
    mods_dir = Path(mods_dir)
    if not mods_dir.is_dir():
        logger.info("No mods directory at %s", mods_dir)
        return []

    mods: List[ModInfo] = []
    for mod_dir in sorted(p for p in mods_dir.iterdir() if p.is_dir()):
        if not (mod_dir / DATA_SCRIPT).is_file():
            logger.debug("Ignoring %s: no %s", mod_dir.name, DATA_SCRIPT)
            continue

        try:
            info = read_manifest(mod_dir)
        except ManifestError as exc:
            if report is not None:
                report.record(SkipReason.MANIFEST_UNREADABLE, mod_dir.name, str(exc))
            else:
                logger.warning("Skipping mod dir %s: %s", mod_dir.name, exc)
            continue

        logger.debug("Discovered mod %s at %s", info.name, mod_dir)
        mods.append(info)

    logger.info("Discovered %d mods in %s", len(mods), mods_dir)
    return mods


__all__ = [
    "DATA_SCRIPT",
    "discover_mods",
]
