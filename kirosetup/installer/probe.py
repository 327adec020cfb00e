"""Best-effort check for the Kiro CLI binary."""

import subprocess
import logging

logger = logging.getLogger(__name__)

INSTALL_INSTRUCTIONS = """Install Kiro CLI:
  curl -fsSL https://github.com/aws/kiro-cli/releases/latest/download/install.sh | bash

  Or visit: https://github.com/aws/kiro-cli"""


def is_available(command: str = "kiro-cli", timeout: float = 10.0) -> bool:
    """
    Return True if `<command> --version` runs and exits 0.

    Any failure (missing binary, non-zero exit, timeout) means unavailable.
    """
    try:
        subprocess.run(
            [command, "--version"],
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            timeout=timeout,
            check=True,
        )
    except (OSError, subprocess.SubprocessError) as e:
        logger.debug(f"{command} not available: {e}")
        return False
    return True


def get_install_instructions() -> str:
    return INSTALL_INSTRUCTIONS
