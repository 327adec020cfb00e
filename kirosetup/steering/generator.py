"""
Kiro steering generator.

Turns BMAD planning artifacts into steering files that Kiro loads as
context:

    product.md        <- product-brief.md / prd.md / PRD.md
    tech.md           <- architecture.md
    structure.md      <- project-context.md
    bmad-index.md     <- discovered planning artifacts + generated agents
    bmad-workflows.md <- generated command stubs

Every descriptive field is resolved through an ordered list of extraction
strategies and ends in a generic fallback, so a sparse document still gives
a complete steering file. A missing source document skips that file.
"""

import posixpath
import re
from pathlib import Path
from typing import Callable, Dict, List, Optional
import logging

from kirosetup.config import InstallerSettings
from kirosetup.schemas import SteeringResult
from kirosetup.steering.extractors import (
    bullets,
    extract_code_block,
    extract_heading_block,
    extract_keyword_lines,
    extract_list,
    extract_section,
    extract_table_rows,
    extract_tree_directories,
    title_from_filename,
)
from kirosetup.utils import first_present

logger = logging.getLogger(__name__)

STORY_FILE_PATTERN = re.compile(r'^(\d+)-(\d+)-.*\.md$')

ADR_DIRS = ('adrs', 'adr', 'decisions')

PRODUCT_SOURCES = ['product-brief.md', 'prd.md', 'PRD.md']
ARCHITECTURE_SOURCES = ['architecture.md']
PROJECT_CONTEXT_SOURCES = ['../project-context.md', 'project-context.md']

KIND_HEADINGS = {
    "workflow": "Workflows",
    "task": "Tasks",
    "tool": "Tools",
}


class SteeringGenerator:
    """Generate Kiro steering files from BMAD planning artifacts."""

    def __init__(
        self,
        project_dir: Path,
        settings: Optional[InstallerSettings] = None,
        agents: Optional[List[str]] = None,
        commands: Optional[Dict[str, List[str]]] = None
    ):
        """
        Args:
            project_dir: Project directory
            settings: Installer settings
            agents: Agent names generated in this run (for the index)
            commands: Command stems by kind generated in this run
        """
        self.project_dir = Path(project_dir)
        self.settings = settings or InstallerSettings()
        self.agents = agents or []
        self.commands = commands or {}

        self.source_dir = self.settings.planning_artifacts_dir
        self.target_dir = self.project_dir / self.settings.config_dir / self.settings.steering_dir

    def generate_all(self) -> SteeringResult:
        """Run every steering generator; one failure does not stop the rest."""
        result = SteeringResult()

        generators: List[tuple[str, Callable[[], Optional[str]]]] = [
            ("product.md", self.generate_product_steering),
            ("tech.md", self.generate_tech_steering),
            ("structure.md", self.generate_structure_steering),
            (f"{self.settings.prefix}-index.md", self.generate_index),
            (f"{self.settings.prefix}-workflows.md", self.generate_workflow_index),
        ]

        for filename, generator in generators:
            try:
                written = generator()
            except Exception as e:
                logger.warning(f"Failed to generate steering file {filename}: {e}")
                result.errors.append(f"{filename}: {e}")
                continue

            if written:
                result.generated.append(written)
            else:
                result.skipped.append(filename)

        return result

    # ------------------------------------------------------------------
    # Product
    # ------------------------------------------------------------------

    def generate_product_steering(self) -> Optional[str]:
        source = self._find_source_file(PRODUCT_SOURCES)
        if not source:
            logger.warning("No product files found. Skipping product steering.")
            return None

        lines = self._read_source_file(source).split('\n')

        vision = first_present(
            [lambda: extract_section(lines, ['Executive Summary', 'Vision', 'Problem Statement'])],
            "Product vision and goals from source documentation."
        )
        goals = first_present(
            [lambda: extract_list(lines, ['goal', 'objective'], limit=5, numbered=True)],
            ["Goals will be listed here once the product brief defines them"]
        )
        metrics = first_present(
            [lambda: extract_section(lines, ['Success Criteria', 'Success Metrics', 'KPIs', 'Metrics'])],
            "Key performance indicators and success metrics from product documentation."
        )
        user_stories = first_present(
            [lambda: extract_section(lines, ['User Stories', 'User Journey', 'Use Cases'])],
            "High-level user story summary from product requirements."
        )

        refs = [f"- Product Brief: #[[file:{source}]]"]
        refs.extend(self._additional_refs(['prd.md', 'user-research.md', 'requirements.md'], exclude=source))

        quick_ref = self._quick_reference(
            "Essential product decisions and constraints:",
            [
                ("Key Constraints", extract_keyword_lines(lines, ['constraint', 'limitation'])),
                ("Key Decisions", extract_keyword_lines(lines, ['decision', 'requirement'])),
            ],
            "- Keep product documents in the planning artifacts folder up to date"
        )
        refs_text = "\n".join(refs)

        content = f"""---
inclusion: conditional
fileMatch: ["**/prd.md", "**/product-*.md", "**/user-*.md", "**/epic-*.md"]
---

# Product Context

## Vision
{vision}

## Key Goals
{bullets(goals)}

## Success Metrics
{metrics}

## User Stories Overview
{user_stories}

## Detailed Documentation
{refs_text}

## Quick Reference
{quick_ref}
"""
        return self._write_steering_file("product.md", content)

    # ------------------------------------------------------------------
    # Tech
    # ------------------------------------------------------------------

    def generate_tech_steering(self) -> Optional[str]:
        source = self._find_source_file(ARCHITECTURE_SOURCES)
        if not source:
            logger.warning("No architecture file found. Skipping tech steering.")
            return None

        lines = self._read_source_file(source).split('\n')

        overview = first_present(
            [
                lambda: extract_heading_block(lines, ['Project Context Analysis', 'Requirements Overview', 'System Overview']),
                lambda: extract_section(lines, ['Overview', 'Summary']),
            ],
            "See the architecture document for the system overview."
        )
        patterns = first_present(
            [
                lambda: extract_list(lines, ['Implementation Patterns', 'Pattern Categories'], limit=6),
                lambda: extract_list(lines, ['pattern'], limit=6),
            ],
            ["Follow the patterns documented in the architecture document"]
        )
        tech_stack = first_present(
            [lambda: extract_list(lines, ['technology', 'tech stack', 'dependencies', 'language'], limit=10)],
            ["Technology choices are documented in the architecture document"]
        )
        standards = first_present(
            [lambda: extract_list(lines, ['naming', 'convention', 'standard', 'consistency'], limit=8)],
            ["Coding standards are documented in the architecture document"]
        )

        refs = [f"- Architecture: #[[file:{source}]]"]
        refs.extend(self._additional_refs(['technical-specs.md', 'implementation-readiness-report.md', 'design-decisions.md']))

        quick_ref = self._quick_reference(
            "Essential development guidelines:",
            [
                ("Critical Constraints", extract_keyword_lines(lines, ['must', 'required', 'constraint'], max_length=100)),
                ("Common Gotchas", extract_keyword_lines(lines, ['gotcha', 'warning', 'anti-pattern'], max_length=100)),
            ],
            "- Validate generated configuration before writing it\n"
            "- Keep generated files prefixed so cleanup never touches user files"
        )
        refs_text = "\n".join(refs)

        content = f"""---
inclusion: conditional
fileMatch: ["src/**/*.{{js,ts,jsx,tsx,py,java,go,rb,php}}", "**/test/**/*", "**/spec/**/*"]
---

# Technical Architecture

## System Overview
{overview}

## Key Design Patterns
{bullets(patterns)}

## Technology Stack
{bullets(tech_stack)}

## Coding Standards
{bullets(standards)}

## Recent Architectural Decisions
{self._architectural_decisions(lines)}

## Detailed Documentation
{refs_text}

## Quick Reference
{quick_ref}
"""
        return self._write_steering_file("tech.md", content)

    def _architectural_decisions(self, lines: List[str]) -> str:
        decisions = first_present(
            [
                lambda: extract_table_rows(lines, ['Core Architectural Decisions', 'Decision Priority']),
                lambda: extract_list(lines, ['decision', 'architectural', 'choice'], limit=5),
            ],
            []
        )
        adrs = self._discover_adr_files()

        parts = []
        if decisions:
            parts.append(bullets(decisions))
        if adrs:
            parts.append(
                "**Architecture Decision Records:**\n"
                + bullets([f"{adr['title']}: #[[file:{adr['path']}]]" for adr in adrs[:5]])
            )

        return '\n\n'.join(parts) or "No specific architectural decisions documented yet."

    # ------------------------------------------------------------------
    # Structure
    # ------------------------------------------------------------------

    def generate_structure_steering(self) -> Optional[str]:
        source = self._find_source_file(PROJECT_CONTEXT_SOURCES)
        if not source:
            logger.warning("No project context file found. Skipping structure steering.")
            return None

        content_text = self._read_source_file(source)
        lines = content_text.split('\n')

        structure = first_present(
            [lambda: extract_code_block(lines, 'File Structure Reference')],
            self._fallback_tree()
        )
        directories = first_present(
            [lambda: extract_tree_directories(lines, 'File Structure Reference')],
            ["- See the project context document for directory purposes"]
        )
        conventions = first_present(
            [
                lambda: extract_list(lines, ['naming', 'convention'], limit=8),
                lambda: extract_keyword_lines(
                    lines, ['PascalCase', 'camelCase', 'snake_case', 'kebab-case', 'UPPER_SNAKE_CASE'], limit=8
                ),
            ],
            ["Follow the naming used by neighbouring files"]
        )

        refs = [f"- Project Context: #[[file:{source}]]"]
        for filename in ('README.md', 'CONTRIBUTING.md'):
            if (self.project_dir / filename).is_file():
                refs.append(f"- {title_from_filename(filename)}: #[[file:{filename}]]")

        refs_text = "\n".join(refs)
        directories_text = "\n".join(directories)

        content = f"""---
inclusion: conditional
fileMatch: ["**/README.md", "**/config/**/*", "**/.env*", "**/docker*"]
---

# Project Structure

## Directory Overview
```
{structure}
```

## Key Directories
{directories_text}

## File Naming Conventions
{bullets(conventions)}

## Detailed Documentation
{refs_text}
"""
        return self._write_steering_file("structure.md", content)

    def _fallback_tree(self) -> str:
        s = self.settings
        return "\n".join([
            "project/",
            f"├── {s.bmad_folder_name}/          # BMAD Method artifacts",
            f"├── {s.planning_artifacts_dir.split('/')[0]}/   # Generated planning documents",
            f"└── {s.config_dir}/              # Kiro configuration",
        ])

    # ------------------------------------------------------------------
    # Index files
    # ------------------------------------------------------------------

    def generate_index(self) -> str:
        quick_reference = []
        for label, candidates in (
            ('Product Brief', ['product-brief.md']),
            ('PRD', ['prd.md', 'PRD.md']),
            ('Architecture', ['architecture.md']),
        ):
            found = self._find_source_file(candidates)
            if found:
                quick_reference.append(f"- {label}: #[[file:{found}]]")

        quick_reference_text = "\n".join(quick_reference) or "- Planning documents will appear here as they are created"

        if self.agents:
            agents = '\n'.join(f"- `{name}`" for name in self.agents)
        else:
            agents = "- Run `kirosetup setup` to generate BMAD agents"

        content = f"""---
inclusion: always
---

# BMAD Method Index

## Quick Reference
{quick_reference_text}

## Planning Artifacts
{self._planning_artifacts()}

## Agents Quick Access
{agents}

## Help & Reference
{self._help_references()}
"""
        return self._write_steering_file(f"{self.settings.prefix}-index.md", content)

    def _planning_artifacts(self) -> str:
        artifacts = []

        epics = self._find_source_file(['epics.md'])
        if epics:
            artifacts.append(f"- Epics: #[[file:{epics}]]")

        stories = self._discover_story_files()
        if stories:
            artifacts.append("- Stories:")
            for story in stories[:10]:
                name = re.sub(r'^\d+-\d+-', '', story)[:-len('.md')].replace('-', ' ')
                path = f"{self.settings.implementation_artifacts_dir}/{story}"
                artifacts.append(f"  - {name}: #[[file:{path}]]")

        adrs = self._discover_adr_files()
        if adrs:
            artifacts.append("- Architecture Decisions:")
            for adr in adrs[:5]:
                artifacts.append(f"  - {adr['title']}: #[[file:{adr['path']}]]")

        return '\n'.join(artifacts) or '- Planning artifacts will appear here as they are created'

    def _help_references(self) -> str:
        references = []
        for label, candidates in (
            ("Workflow Map", ['../docs/reference/workflow-map.md', 'workflow-map.md']),
            ("Getting Started", ['../docs/tutorials/getting-started.md', 'getting-started.md']),
        ):
            found = self._find_source_file(candidates)
            if found:
                references.append(f"- {label}: #[[file:{found}]]")

        return '\n'.join(references) or '- Documentation will appear here as it becomes available'

    def generate_workflow_index(self) -> str:
        commands_path = f"{self.settings.config_dir}/{self.settings.commands_dir}"
        sections = []

        for kind, heading in KIND_HEADINGS.items():
            stems = self.commands.get(kind, [])
            if not stems:
                continue
            entries = '\n'.join(f"- **{stem}**: #[[file:{commands_path}/{stem}.md]]" for stem in stems)
            sections.append(f"### {heading}\n{entries}")

        body = '\n\n'.join(sections) or "- No BMAD commands have been generated yet"

        content = f"""---
inclusion: conditional
fileMatch: ["**/epic-*.md", "**/story-*.md", "**/prd.md", "src/**/*"]
---

# BMAD Workflows

## Available Commands
{body}

## Quick Workflow Access
- Type `/{self.settings.prefix}-` in Kiro to see all available workflows
- Use workflow commands directly from any context
"""
        return self._write_steering_file(f"{self.settings.prefix}-workflows.md", content)

    # ------------------------------------------------------------------
    # Discovery helpers
    # ------------------------------------------------------------------

    def _discover_story_files(self) -> List[str]:
        """Story files (N-N-name.md) sorted by epic, then story number."""
        directory = self.project_dir / self.settings.implementation_artifacts_dir
        if not directory.is_dir():
            return []

        try:
            names = [p.name for p in directory.iterdir() if STORY_FILE_PATTERN.match(p.name)]
        except OSError as e:
            logger.warning(f"Could not read implementation artifacts directory: {e}")
            return []

        def story_key(name: str) -> tuple:
            match = STORY_FILE_PATTERN.match(name)
            return (int(match.group(1)), int(match.group(2)), name)

        return sorted(names, key=story_key)

    def _discover_adr_files(self) -> List[Dict[str, str]]:
        adrs = []
        for dirname in ADR_DIRS:
            directory = self.project_dir / self.source_dir / dirname
            if not directory.is_dir():
                continue
            try:
                files = sorted(p.name for p in directory.iterdir() if p.suffix == '.md')
            except OSError as e:
                logger.warning(f"Could not read {directory}: {e}")
                continue
            for filename in files:
                adrs.append({
                    "title": title_from_filename(filename),
                    "path": f"{self.source_dir}/{dirname}/{filename}",
                })
        return adrs

    def _additional_refs(self, filenames: List[str], exclude: Optional[str] = None) -> List[str]:
        refs = []
        for filename in filenames:
            found = self._find_source_file([filename])
            if found and found != exclude:
                refs.append(f"- {title_from_filename(filename)}: #[[file:{found}]]")
        return refs

    @staticmethod
    def _quick_reference(intro: str, groups: List[tuple[str, List[str]]], fallback: str) -> str:
        parts = [intro, ""]
        for title, items in groups:
            if items:
                parts.append(f"**{title}:**")
                parts.append(bullets(items))
                parts.append("")

        if not any(items for _, items in groups):
            parts.append(fallback)

        return '\n'.join(parts).rstrip()

    # ------------------------------------------------------------------
    # File access
    # ------------------------------------------------------------------

    def _find_source_file(self, candidates: List[str]) -> Optional[str]:
        """First existing candidate as a project-relative posix path."""
        for candidate in candidates:
            relative = posixpath.normpath(f"{self.source_dir}/{candidate}")
            if (self.project_dir / relative).is_file():
                return relative
        return None

    def _read_source_file(self, relative: str) -> str:
        return (self.project_dir / relative).read_text(encoding='utf-8', errors='ignore')

    def _write_steering_file(self, filename: str, content: str) -> str:
        self.target_dir.mkdir(parents=True, exist_ok=True)
        (self.target_dir / filename).write_text(content, encoding='utf-8')
        logger.info(f"Generated {self.settings.config_dir}/{self.settings.steering_dir}/{filename}")
        return filename


def generate_steering(
    project_dir: Path,
    settings: Optional[InstallerSettings] = None,
    agents: Optional[List[str]] = None,
    commands: Optional[Dict[str, List[str]]] = None
) -> SteeringResult:
    """
    Convenience function to generate every steering file.

    Example:
        >>> result = generate_steering(Path("."))
        >>> result.generated
        ['product.md', 'tech.md', 'bmad-index.md', 'bmad-workflows.md']
    """
    return SteeringGenerator(project_dir, settings, agents, commands).generate_all()
