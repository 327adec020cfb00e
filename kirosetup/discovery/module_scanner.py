"""
Module discovery for an installed BMAD tree.

A module is an immediate subdirectory of the BMAD root that contains an
`agents/` subdirectory. The core module always comes first; internal
directories (leading underscore, e.g. `_config`) are never modules.
"""

from pathlib import Path
from typing import List, Optional
import logging

from kirosetup.config import InstallerSettings

logger = logging.getLogger(__name__)


class ModuleScanner:
    """Find module directories one level below the BMAD root."""

    def __init__(self, bmad_dir: Path, settings: Optional[InstallerSettings] = None):
        self.bmad_dir = Path(bmad_dir)
        self.settings = settings or InstallerSettings()

    def is_module(self, directory: Path) -> bool:
        return (directory / self.settings.marker_dir).is_dir()

    def scan(self) -> List[str]:
        """
        Return module names: core first, then the rest in sorted order.

        A failure to list the root is logged and whatever was found so far
        is returned.
        """
        core = self.settings.core_module
        modules = []

        if self.is_module(self.bmad_dir / core):
            modules.append(core)

        try:
            entries = sorted(self.bmad_dir.iterdir(), key=lambda p: p.name)
        except OSError as e:
            logger.warning(f"Failed to discover modules in {self.bmad_dir}: {e}")
            return modules

        for entry in entries:
            if entry.name == core or entry.name.startswith(self.settings.internal_prefix):
                continue
            if entry.is_dir() and self.is_module(entry):
                modules.append(entry.name)

        logger.debug(f"Discovered modules: {', '.join(modules) or 'none'}")
        return modules


def discover_modules(bmad_dir: Path, settings: Optional[InstallerSettings] = None) -> List[str]:
    """
    Convenience function to discover modules.

    Example:
        >>> discover_modules(Path("_bmad"))
        ['core', 'bmm']
    """
    return ModuleScanner(bmad_dir, settings).scan()
