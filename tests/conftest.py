"""Shared fixtures: a small installed BMAD tree inside a temporary project."""

from pathlib import Path

import pytest

from kirosetup.config import InstallerSettings


PM_AGENT = """# Product Manager

<agent name="pm" title="Product Manager" icon="🧭">
  <persona>
    <role>Leads planning</role>
    <identity>Seasoned product lead</identity>
    <communication_style>Direct</communication_style>
    <principles>Ship value early</principles>
  </persona>
  <menu>
    <item cmd="plan">Create plan</item>
    <item cmd="review" exec="x">Review backlog</item>
  </menu>
</agent>
"""

CORE_AGENT = """---
description: Core test agent
---

<agent name="Test Agent" title="Tester">
  <persona>
    <role>Test role</role>
  </persona>
</agent>
"""

PLAIN_NOTES = "# Notes\n\nNo agent unit in this file.\n"


def write(path: Path, content: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


@pytest.fixture
def settings() -> InstallerSettings:
    return InstallerSettings()


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    project = tmp_path / "project"
    project.mkdir()
    return project


@pytest.fixture
def bmad_dir(project_dir: Path) -> Path:
    """
    _bmad/
      core/agents/test.agent.md
      core/tasks/index-docs.xml
      core/workflows/brainstorming/workflow.md
      bmm/agents/pm.md
      bmm/agents/notes.md          (no <agent> tag)
      bmm/workflows/create-prd.md
      bmm/tools/shard-doc.md
      _config/agents/ignored.md    (internal, never a module)
      docs/readme.md               (no agents/, never a module)
    """
    root = project_dir / "_bmad"
    write(root / "core" / "agents" / "test.agent.md", CORE_AGENT)
    write(root / "core" / "tasks" / "index-docs.xml", "<task name='index-docs'/>\n")
    write(root / "core" / "workflows" / "brainstorming" / "workflow.md", "# Brainstorming Session\n")
    write(
        root / "core" / "manifest.json",
        '{"tasks": [{"name": "index-docs", "displayName": "Index Docs", "description": "Build a docs index"}]}',
    )
    write(root / "bmm" / "agents" / "pm.md", PM_AGENT)
    write(root / "bmm" / "agents" / "notes.md", PLAIN_NOTES)
    write(root / "bmm" / "workflows" / "create-prd.md", "---\ndescription: Create a PRD\n---\n# Create PRD\n")
    write(root / "bmm" / "tools" / "shard-doc.md", "# Shard Document\n")
    write(root / "_config" / "agents" / "ignored.md", PM_AGENT)
    write(root / "docs" / "readme.md", "# Docs\n")
    return root
