"""Discovery of BMAD modules and the artifacts they provide."""

from .module_scanner import ModuleScanner, discover_modules
from .artifacts import ArtifactCollector, collect_agent_artifacts, collect_command_artifacts

__all__ = [
    "ModuleScanner",
    "discover_modules",
    "ArtifactCollector",
    "collect_agent_artifacts",
    "collect_command_artifacts",
]
