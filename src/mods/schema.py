# ModInfo and base package definitions
# src/mods/schema.py

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List


# The two packages every run starts from. They ship with the game data,
# declare no dependencies and are always loaded first.
BASE_PACKAGE_NAMES = ("core", "base")


@dataclass
class ModInfo:
    """
    One content package (mod).

    - name: unique package name from info.json ("bobplates")
    - path: package directory containing data.lua / settings.lua / locale/
    - dependencies: dependency name -> True if required, False if optional
    """
    name: str
    path: Path
    dependencies: Dict[str, bool] = field(default_factory=dict)

    @property
    def required_dependencies(self) -> List[str]:
        return sorted(d for d, req in self.dependencies.items() if req)

    @property
    def optional_dependencies(self) -> List[str]:
        return sorted(d for d, req in self.dependencies.items() if not req)

    def resource(self, filename: str) -> Path:
        """Path of a script/resource inside this package."""
        return self.path / filename


def base_packages(game_data_dir: Path) -> List[ModInfo]:
    """Return the core and base packages living under the game data directory."""
    return [
        ModInfo(name=name, path=Path(game_data_dir) / name, dependencies={})
        for name in BASE_PACKAGE_NAMES
    ]
