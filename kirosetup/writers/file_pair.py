"""
Agent file pair writer.

An agent is persisted as two files sharing one stem:

    <name>.json        agent config (validated)
    <name>-prompt.md   prompt document

Both files are written or neither is: if building, validating or writing
fails, whatever was created is removed and the original error propagates.
"""

import contextlib
import json
from pathlib import Path
from typing import Optional
import logging

from kirosetup.formatters import AgentConfigBuilder, AgentPromptFormatter
from kirosetup.schemas import AgentRecord, GeneratedFilePair

logger = logging.getLogger(__name__)


class AgentFileWriter:
    """Write agent config + prompt pairs into an agents directory."""

    def __init__(
        self,
        agents_dir: Path,
        config_builder: Optional[AgentConfigBuilder] = None,
        prompt_formatter: Optional[AgentPromptFormatter] = None
    ):
        self.agents_dir = Path(agents_dir)
        self.config_builder = config_builder or AgentConfigBuilder()
        self.prompt_formatter = prompt_formatter or AgentPromptFormatter()

    def paths_for(self, agent_name: str) -> tuple[Path, Path]:
        """Return (config_path, prompt_path) for a sanitized agent name."""
        return (
            self.agents_dir / f"{agent_name}.json",
            self.agents_dir / f"{agent_name}-prompt.md",
        )

    def write(self, agent_name: str, record: AgentRecord) -> GeneratedFilePair:
        """
        Build and write both files for one agent.

        Args:
            agent_name: Sanitized agent name used as the file stem
            record: Parsed agent metadata

        Returns:
            GeneratedFilePair with both paths

        Raises:
            AgentConfigValidationError: config failed the schema (no files left behind)
            OSError: a write failed (no files left behind)
        """
        config_path, prompt_path = self.paths_for(agent_name)

        try:
            agent_config = self.config_builder.build(agent_name, record)
            prompt_content = self.prompt_formatter.format(record)

            prompt_path.write_text(prompt_content, encoding='utf-8')
            config_path.write_text(
                json.dumps(agent_config, indent=2, ensure_ascii=False) + "\n",
                encoding='utf-8'
            )
        except Exception:
            self._remove(prompt_path)
            self._remove(config_path)
            raise

        logger.debug(f"Wrote {config_path.name} and {prompt_path.name}")
        return GeneratedFilePair(name=agent_name, config_path=config_path, prompt_path=prompt_path)

    @staticmethod
    def _remove(path: Path) -> None:
        with contextlib.suppress(OSError):
            path.unlink(missing_ok=True)


def write_agent_files(agents_dir: Path, agent_name: str, record: AgentRecord) -> GeneratedFilePair:
    """Convenience function to write one agent pair with default builders."""
    return AgentFileWriter(agents_dir).write(agent_name, record)
