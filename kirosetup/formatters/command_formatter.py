"""
Kiro command stub formatter.

Each workflow, task and tool gets a small markdown command that tells Kiro
to load the real definition from the BMAD tree:

---
description: '<description>'
---

# <display name>

<description>

LOAD @<path relative to the project> and follow its instructions exactly.
"""

from pathlib import Path
import logging

from kirosetup.schemas import CommandArtifact
from kirosetup.utils import prefixed_name

logger = logging.getLogger(__name__)

KIND_SEGMENTS = {
    "workflow": (),
    "task": ("task",),
    "tool": ("tool",),
}


def command_stem(prefix: str, artifact: CommandArtifact) -> str:
    """
    File stem for a command stub.

    Example:
        workflow core/brainstorming -> bmad-core-brainstorming
        task core/index-docs        -> bmad-task-core-index-docs
    """
    return prefixed_name(prefix, *KIND_SEGMENTS[artifact.kind], artifact.module, artifact.name)


class CommandFormatter:
    """Render command stubs pointing at BMAD source files."""

    def __init__(self, project_dir: Path):
        self.project_dir = Path(project_dir)

    def format(self, artifact: CommandArtifact) -> str:
        description = artifact.description or f"Run the {artifact.display_name} {artifact.kind}"
        source = self._relative_source(artifact.source_path)
        # Front matter holds a single-line quoted scalar
        quoted = ' '.join(description.split()).replace("'", "''")

        return (
            "---\n"
            f"description: '{quoted}'\n"
            "---\n\n"
            f"# {artifact.display_name}\n\n"
            f"{description}\n\n"
            f"LOAD @{source} and follow its instructions exactly.\n"
        )

    def _relative_source(self, source_path: Path) -> str:
        """Source path relative to the project dir when possible, posix style."""
        source_path = Path(source_path)
        try:
            return source_path.resolve().relative_to(self.project_dir.resolve()).as_posix()
        except ValueError:
            return source_path.as_posix()
