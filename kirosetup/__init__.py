"""
kirosetup - Kiro CLI integration for the BMad Method.

Turns an installed BMAD tree (compiled agents with <agent> tags, workflows,
tasks and tools) into Kiro CLI agent configs, prompts, command stubs and
steering files under <project>/.kiro/.
"""

from kirosetup.config import InstallerSettings
from kirosetup.exceptions import AgentConfigValidationError, BmadNotFoundError, KiroSetupError
from kirosetup.installer import KiroCliSetup
from kirosetup.schemas import AgentRecord, KiroAgentConfig, MenuItem, SetupOptions, SetupResult

__version__ = "0.1.0"

__all__ = [
    "InstallerSettings",
    "KiroCliSetup",
    "KiroSetupError",
    "BmadNotFoundError",
    "AgentConfigValidationError",
    "AgentRecord",
    "KiroAgentConfig",
    "MenuItem",
    "SetupOptions",
    "SetupResult",
]
