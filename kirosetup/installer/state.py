"""Installation state detection."""

from pathlib import Path
from typing import Optional
import logging

from kirosetup.config import InstallerSettings
from kirosetup.schemas import InstallationDetection, InstallState

logger = logging.getLogger(__name__)


def detect_installation(
    project_dir: Path,
    bmad_dir: Path,
    settings: Optional[InstallerSettings] = None
) -> InstallationDetection:
    """
    Determine the project's condition before a run.

    - absent:   the BMAD source tree is missing (setup must not proceed)
    - existing: the .kiro directory already exists (cleanup runs first)
    - fresh:    anything else

    Args:
        project_dir: Project directory holding the .kiro target tree
        bmad_dir: Compiled BMAD source tree

    Returns:
        InstallationDetection with the state and which output dirs exist
    """
    settings = settings or InstallerSettings()
    kiro_dir = Path(project_dir) / settings.config_dir

    if not Path(bmad_dir).is_dir():
        logger.warning(f"No {settings.bmad_folder_name}/ folder found at {bmad_dir}. BMAD may not be installed.")
        return InstallationDetection(state=InstallState.ABSENT)

    logger.info(f"Found BMAD folder: {bmad_dir}")

    if not kiro_dir.is_dir():
        logger.info("New Kiro installation")
        return InstallationDetection(state=InstallState.FRESH)

    detection = InstallationDetection(
        state=InstallState.EXISTING,
        target_exists=True,
        agents_exists=(kiro_dir / settings.agents_dir).is_dir(),
        commands_exists=(kiro_dir / settings.commands_dir).is_dir(),
        steering_exists=(kiro_dir / settings.steering_dir).is_dir(),
    )
    logger.info(f"Found existing {settings.config_dir}/ installation, will clean and reinstall")
    return detection
