"""
Selective cleanup of previously generated files.

Only entries whose names start with the reserved prefix are removed, so
user-authored agents, commands and steering files survive a reinstall.
Prefixed directories are removed as a whole.
"""

import shutil
from pathlib import Path
from typing import Optional
import logging

from kirosetup.config import InstallerSettings

logger = logging.getLogger(__name__)


def cleanup_generated(project_dir: Path, settings: Optional[InstallerSettings] = None) -> int:
    """
    Remove generated entries from every output subdirectory.

    A failure on one entry is logged and the rest are still processed.

    Args:
        project_dir: Project directory holding the .kiro target tree

    Returns:
        Number of entries removed
    """
    settings = settings or InstallerSettings()
    kiro_dir = Path(project_dir) / settings.config_dir
    removed = 0

    for subdir in settings.output_subdirs:
        target = kiro_dir / subdir
        if not target.is_dir():
            continue

        try:
            entries = sorted(target.iterdir())
        except OSError as e:
            logger.warning(f"Could not list {target}: {e}")
            continue

        count = 0
        for entry in entries:
            if not entry.name.startswith(settings.prefix):
                continue
            try:
                if entry.is_dir() and not entry.is_symlink():
                    shutil.rmtree(entry)
                else:
                    entry.unlink()
                count += 1
            except OSError as e:
                logger.warning(f"Failed to remove {entry}: {e}")

        if count:
            logger.info(f"Cleaned {count} old BMAD entries from {settings.config_dir}/{subdir}")
        removed += count

    return removed
