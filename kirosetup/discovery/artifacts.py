"""
Artifact collection from an installed BMAD tree.

For every module this finds:
- agents:    <module>/agents/*.md
- workflows: <module>/workflows/*.md and <module>/workflows/<name>/workflow.{md,yaml,xml}
- tasks:     <module>/tasks/*.{md,xml}
- tools:     <module>/tools/*.{md,xml}

An optional <module>/manifest.json ({"tasks": [...], "tools": [...]}) supplies
display names and descriptions for tasks and tools.
"""

import json
import re
from pathlib import Path
from typing import Dict, List, Optional
import logging

from kirosetup.config import InstallerSettings
from kirosetup.schemas import AgentArtifact, CommandArtifact
from kirosetup.utils import first_present

logger = logging.getLogger(__name__)


class ArtifactCollector:
    """Enumerate agents, workflows, tasks and tools per module."""

    HEADING_PATTERN = re.compile(r'^#\s+(.+?)\s*$', re.MULTILINE)

    DESCRIPTION_PATTERN = re.compile(r'^description:\s*["\']?(.+?)["\']?\s*$', re.MULTILINE)

    WORKFLOW_ENTRY_FILES = ('workflow.md', 'workflow.yaml', 'workflow.xml')

    TASK_TOOL_EXTENSIONS = {'.md', '.xml'}

    def __init__(self, bmad_dir: Path, settings: Optional[InstallerSettings] = None):
        self.bmad_dir = Path(bmad_dir)
        self.settings = settings or InstallerSettings()

    # ------------------------------------------------------------------
    # Agents
    # ------------------------------------------------------------------

    def collect_agents(self, modules: List[str]) -> List[AgentArtifact]:
        """Collect compiled agent files for the given modules."""
        artifacts = []

        for module in modules:
            agents_dir = self.bmad_dir / module / self.settings.marker_dir
            for path in self._list_files(agents_dir, {'.md'}):
                name = self._unit_name(path)
                artifacts.append(AgentArtifact(
                    module=module,
                    name=name,
                    source_path=path,
                    description=self._describe(path, name),
                ))

        logger.info(f"Collected {len(artifacts)} agents from {len(modules)} modules")
        return artifacts

    # ------------------------------------------------------------------
    # Workflows, tasks, tools
    # ------------------------------------------------------------------

    def collect_commands(self, modules: List[str]) -> List[CommandArtifact]:
        """Collect workflows, then tasks, then tools for the given modules."""
        artifacts: List[CommandArtifact] = []

        for module in modules:
            artifacts.extend(self._collect_workflows(module))

        for kind, dirname, manifest_key in (("task", "tasks", "tasks"), ("tool", "tools", "tools")):
            for module in modules:
                artifacts.extend(self._collect_manifest_units(module, kind, dirname, manifest_key))

        logger.info(f"Collected {len(artifacts)} workflows, tasks and tools")
        return artifacts

    def _collect_workflows(self, module: str) -> List[CommandArtifact]:
        workflows_dir = self.bmad_dir / module / "workflows"
        artifacts = []

        for path in self._list_files(workflows_dir, {'.md'}):
            artifacts.append(self._command("workflow", module, path.stem, path))

        for directory in self._list_dirs(workflows_dir):
            entry = next(
                (directory / f for f in self.WORKFLOW_ENTRY_FILES if (directory / f).is_file()),
                None
            )
            if entry is not None:
                artifacts.append(self._command("workflow", module, directory.name, entry))

        return artifacts

    def _collect_manifest_units(
        self,
        module: str,
        kind: str,
        dirname: str,
        manifest_key: str
    ) -> List[CommandArtifact]:
        manifest = self._load_manifest(module).get(manifest_key, [])
        if not isinstance(manifest, list):
            logger.warning(f"Ignoring non-list \"{manifest_key}\" in {module}/manifest.json")
            manifest = []

        by_name: Dict[str, dict] = {
            entry["name"]: entry for entry in manifest
            if isinstance(entry, dict) and isinstance(entry.get("name"), str)
        }

        artifacts = []
        for path in self._list_files(self.bmad_dir / module / dirname, self.TASK_TOOL_EXTENSIONS):
            name = path.stem
            entry = by_name.get(name, {})
            artifacts.append(self._command(
                kind,
                module,
                name,
                path,
                display_name=self._manifest_text(entry, "displayName"),
                description=self._manifest_text(entry, "description"),
            ))

        return artifacts

    def _command(
        self,
        kind: str,
        module: str,
        name: str,
        path: Path,
        display_name: Optional[str] = None,
        description: Optional[str] = None
    ) -> CommandArtifact:
        return CommandArtifact(
            kind=kind,
            module=module,
            name=name,
            display_name=display_name or self._title_case(name),
            source_path=path,
            description=description or self._describe(path, ""),
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _load_manifest(self, module: str) -> dict:
        manifest_path = self.bmad_dir / module / "manifest.json"
        if not manifest_path.is_file():
            return {}

        try:
            data = json.loads(manifest_path.read_text(encoding='utf-8'))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Ignoring unreadable manifest {manifest_path}: {e}")
            return {}

        return data if isinstance(data, dict) else {}

    def _list_files(self, directory: Path, extensions: set) -> List[Path]:
        if not directory.is_dir():
            return []
        try:
            return sorted(
                p for p in directory.iterdir()
                if p.is_file() and p.suffix in extensions
            )
        except OSError as e:
            logger.warning(f"Could not list {directory}: {e}")
            return []

    def _list_dirs(self, directory: Path) -> List[Path]:
        if not directory.is_dir():
            return []
        try:
            return sorted(p for p in directory.iterdir() if p.is_dir())
        except OSError as e:
            logger.warning(f"Could not list {directory}: {e}")
            return []

    def _describe(self, path: Path, default: str) -> str:
        """Description from a description: line or the first heading."""
        try:
            content = path.read_text(encoding='utf-8', errors='ignore')
        except OSError as e:
            logger.warning(f"Could not read {path}: {e}")
            return default

        return first_present(
            [
                lambda: self._first_group(self.DESCRIPTION_PATTERN, content),
                lambda: self._first_group(self.HEADING_PATTERN, content),
            ],
            default,
        )

    @staticmethod
    def _manifest_text(entry: dict, key: str) -> Optional[str]:
        value = entry.get(key)
        return value if isinstance(value, str) else None

    @staticmethod
    def _first_group(pattern: re.Pattern, content: str) -> Optional[str]:
        match = pattern.search(content)
        return match.group(1).strip() if match else None

    @staticmethod
    def _unit_name(path: Path) -> str:
        """pm.agent.md -> pm, analyst.md -> analyst"""
        stem = path.stem
        return stem[:-len(".agent")] if stem.endswith(".agent") else stem

    @staticmethod
    def _title_case(name: str) -> str:
        return ' '.join(part.capitalize() for part in re.split(r'[-_\s]+', name) if part)


def collect_agent_artifacts(
    bmad_dir: Path,
    modules: List[str],
    settings: Optional[InstallerSettings] = None
) -> List[AgentArtifact]:
    """Convenience function to collect agent artifacts."""
    return ArtifactCollector(bmad_dir, settings).collect_agents(modules)


def collect_command_artifacts(
    bmad_dir: Path,
    modules: List[str],
    settings: Optional[InstallerSettings] = None
) -> List[CommandArtifact]:
    """Convenience function to collect workflow, task and tool artifacts."""
    return ArtifactCollector(bmad_dir, settings).collect_commands(modules)
