"""
Kiro CLI setup - main orchestration logic.

Flow:
1. Detect installation state (a missing BMAD tree aborts the run)
2. Clean previously generated files when .kiro already exists
3. Discover modules and collect agent artifacts
4. Parse each compiled agent and write its JSON + prompt pair
5. Collect workflows, tasks and tools and write command stubs
6. Optionally generate steering files

Units are processed one at a time. A unit that cannot be parsed, validated
or written is logged and skipped; only a missing BMAD tree stops the run.
"""

from pathlib import Path
from typing import Dict, List, Optional, Tuple
import logging

from kirosetup.config import InstallerSettings
from kirosetup.discovery import ArtifactCollector, ModuleScanner
from kirosetup.exceptions import BmadNotFoundError
from kirosetup.extractors import AgentParser
from kirosetup.formatters import (
    AgentConfigBuilder,
    AgentPromptFormatter,
    AgentSchemaValidator,
    CommandFormatter,
    command_stem,
)
from kirosetup.installer.cleanup import cleanup_generated
from kirosetup.installer.probe import get_install_instructions, is_available
from kirosetup.installer.state import detect_installation
from kirosetup.schemas import (
    AgentArtifact,
    CommandArtifact,
    InstallationDetection,
    InstallState,
    SetupOptions,
    SetupResult,
    SteeringResult,
)
from kirosetup.steering import SteeringGenerator
from kirosetup.utils import prefixed_name
from kirosetup.writers import AgentFileWriter

logger = logging.getLogger(__name__)


class KiroCliSetup:
    """
    Kiro CLI setup handler for the BMad Method.

    Reads compiled agents (markdown with <agent> tags) from the installed
    BMAD tree and writes Kiro agent configs, prompts, command stubs and
    steering files under <project>/.kiro/.
    """

    name = "Kiro CLI"

    def __init__(
        self,
        settings: Optional[InstallerSettings] = None,
        validator: Optional[AgentSchemaValidator] = None
    ):
        """
        Args:
            settings: Installer settings (default: built-in defaults)
            validator: Agent schema validator shared by every config build
        """
        self.settings = settings or InstallerSettings()
        self.validator = validator or AgentSchemaValidator()
        self.parser = AgentParser(default_icon=self.settings.default_icon)
        self.config_builder = AgentConfigBuilder(self.validator)
        self.prompt_formatter = AgentPromptFormatter()

    # ------------------------------------------------------------------
    # Paths
    # ------------------------------------------------------------------

    def kiro_dir(self, project_dir: Path) -> Path:
        return Path(project_dir) / self.settings.config_dir

    def agents_dir(self, project_dir: Path) -> Path:
        return self.kiro_dir(project_dir) / self.settings.agents_dir

    def commands_dir(self, project_dir: Path) -> Path:
        return self.kiro_dir(project_dir) / self.settings.commands_dir

    # ------------------------------------------------------------------
    # Public operations
    # ------------------------------------------------------------------

    def detect_installation(self, project_dir: Path, bmad_dir: Optional[Path] = None) -> InstallationDetection:
        """Detect the installation state; bmad_dir defaults to <project>/_bmad."""
        bmad_dir = bmad_dir or Path(project_dir) / self.settings.bmad_folder_name
        return detect_installation(project_dir, bmad_dir, self.settings)

    def cleanup(self, project_dir: Path) -> int:
        """Remove previously generated (prefixed) files, keeping user files."""
        return cleanup_generated(project_dir, self.settings)

    def discover_all_modules(self, bmad_dir: Path) -> List[str]:
        return ModuleScanner(bmad_dir, self.settings).scan()

    def is_available(self) -> bool:
        return is_available(self.settings.cli_command)

    def get_install_instructions(self) -> str:
        return get_install_instructions()

    def setup(
        self,
        project_dir: Path,
        bmad_dir: Optional[Path] = None,
        options: Optional[SetupOptions] = None
    ) -> SetupResult:
        """
        Set up the .kiro tree from an installed BMAD tree.

        Args:
            project_dir: Project directory (receives .kiro/)
            bmad_dir: Compiled BMAD tree (default: <project>/_bmad)
            options: Caller options

        Returns:
            SetupResult summary

        Raises:
            BmadNotFoundError: if the BMAD tree does not exist
        """
        project_dir = Path(project_dir)
        bmad_dir = Path(bmad_dir) if bmad_dir else project_dir / self.settings.bmad_folder_name
        options = options or SetupOptions()

        logger.info(f"Setting up {self.name}...")

        detection = self.detect_installation(project_dir, bmad_dir)
        if not detection.can_proceed:
            raise BmadNotFoundError(bmad_dir)

        result = SetupResult(state=detection.state)

        # Cleanup finishes before any writer starts
        if detection.state == InstallState.EXISTING:
            result.cleaned = self.cleanup(project_dir)

        agents_dir = self.agents_dir(project_dir)
        commands_dir = self.commands_dir(project_dir)
        agents_dir.mkdir(parents=True, exist_ok=True)
        commands_dir.mkdir(parents=True, exist_ok=True)

        result.modules = self.discover_all_modules(bmad_dir)
        logger.info(f"Discovered modules: {', '.join(result.modules) or 'none'}")

        collector = ArtifactCollector(bmad_dir, self.settings)

        writer = AgentFileWriter(agents_dir, self.config_builder, self.prompt_formatter)
        for artifact in collector.collect_agents(result.modules):
            self._process_agent(artifact, writer, result)

        formatter = CommandFormatter(project_dir)
        for artifact in collector.collect_commands(result.modules):
            self._process_command(artifact, formatter, commands_dir, result)

        if options.steering:
            result.steering = SteeringGenerator(
                project_dir,
                self.settings,
                agents=result.agents,
                commands=result.commands,
            ).generate_all()

        logger.info(
            f"{self.name} configured with {len(result.agents)} BMad agents and "
            f"{result.commands_generated} commands from {len(result.modules)} modules"
        )
        return result

    def generate_steering(self, project_dir: Path) -> SteeringResult:
        """
        Regenerate steering files for an already configured project.

        The index files list the agents and commands currently present
        under .kiro/ rather than those of a fresh setup run.
        """
        project_dir = Path(project_dir)
        agents, commands = self._existing_outputs(project_dir)
        return SteeringGenerator(project_dir, self.settings, agents=agents, commands=commands).generate_all()

    def _existing_outputs(self, project_dir: Path) -> Tuple[List[str], Dict[str, List[str]]]:
        prefix = self.settings.prefix
        agents_dir = self.agents_dir(project_dir)
        commands_dir = self.commands_dir(project_dir)

        agents = sorted(
            p.stem for p in agents_dir.glob(f"{prefix}*.json")
        ) if agents_dir.is_dir() else []

        commands: Dict[str, List[str]] = {"workflow": [], "task": [], "tool": []}
        if commands_dir.is_dir():
            for path in sorted(commands_dir.glob(f"{prefix}*.md")):
                stem = path.stem
                if stem.startswith(f"{prefix}-task-"):
                    commands["task"].append(stem)
                elif stem.startswith(f"{prefix}-tool-"):
                    commands["tool"].append(stem)
                else:
                    commands["workflow"].append(stem)

        return agents, commands

    # ------------------------------------------------------------------
    # Per-unit processing
    # ------------------------------------------------------------------

    def agent_name(self, artifact: AgentArtifact) -> str:
        """Sanitized file stem: <prefix>-<module>-<name>."""
        return prefixed_name(self.settings.prefix, artifact.module, artifact.name)

    def _process_agent(self, artifact: AgentArtifact, writer: AgentFileWriter, result: SetupResult) -> None:
        try:
            content = artifact.source_path.read_text(encoding='utf-8')
        except (OSError, UnicodeDecodeError) as e:
            self._skip_agent(artifact, result, f"could not read {artifact.source_path}: {e}")
            return

        record = self.parser.parse(content, default_name=artifact.name, default_title=artifact.description)
        if record is None:
            logger.info(f"No <agent> tag in {artifact.source_path.name}, skipping")
            result.agents_skipped += 1
            return

        agent_name = self.agent_name(artifact)
        try:
            writer.write(agent_name, record)
        except Exception as e:
            self._skip_agent(artifact, result, str(e))
            return

        result.agents.append(agent_name)

    def _skip_agent(self, artifact: AgentArtifact, result: SetupResult, reason: str) -> None:
        message = f"Failed to process agent {artifact.name}: {reason}"
        logger.warning(message)
        result.warnings.append(message)
        result.agents_skipped += 1

    def _process_command(
        self,
        artifact: CommandArtifact,
        formatter: CommandFormatter,
        commands_dir: Path,
        result: SetupResult
    ) -> None:
        stem = command_stem(self.settings.prefix, artifact)
        try:
            (commands_dir / f"{stem}.md").write_text(formatter.format(artifact), encoding='utf-8')
        except OSError as e:
            message = f"Failed to write {artifact.kind} command {artifact.name}: {e}"
            logger.warning(message)
            result.warnings.append(message)
            result.commands_skipped += 1
            return

        result.commands[artifact.kind].append(stem)
