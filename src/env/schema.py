# ExtractorConfig dataclass
# src/env/schema.py

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional


@dataclass
class ExtractorConfig:
    """Resolved configuration for one extraction run. All paths are absolute."""
    game_data_dir: Path            # contains core/ and base/
    mods_dir: Path                 # one subdirectory per mod
    language: str = "en"           # locale/<language>/*.cfg
    lualib_dirs: List[Path] = field(default_factory=list)
    dataloader: Optional[Path] = None    # None -> built-in data loader
    patch_script: Optional[Path] = None  # run after base, before mods
