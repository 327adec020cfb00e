"""Tests for steering file generation."""

import pytest

from kirosetup.steering import SteeringGenerator, generate_steering
from kirosetup.steering.extractors import (
    extract_list,
    extract_section,
    extract_table_rows,
    title_from_filename,
)

from conftest import write

PRODUCT_BRIEF = """# Product Brief

## Executive Summary
Kiro agents for every BMAD module.

## Goals
- Fast setup
- Safe regeneration

## Success Metrics
Setup finishes in under a minute.
"""

ARCHITECTURE = """# Architecture

## System Overview
A small generator pipeline.

## Core Architectural Decisions
| Decision | Rationale |
| **Pydantic schemas** | Strict validation |

## Implementation Patterns
- Extractors return None when nothing matches
"""

PROJECT_CONTEXT = """# Project Context

## File Structure Reference
```text
src/
├── api/  # HTTP handlers
```

## Naming Conventions
- Files use kebab-case
"""


@pytest.fixture
def planning_dir(project_dir):
    root = project_dir / "_bmad-output" / "planning-artifacts"
    write(root / "product-brief.md", PRODUCT_BRIEF)
    write(root / "architecture.md", ARCHITECTURE)
    write(root / "adrs" / "01-use-pydantic.md", "# ADR\n")
    write(project_dir / "_bmad-output" / "project-context.md", PROJECT_CONTEXT)
    stories = project_dir / "_bmad-output" / "implementation-artifacts"
    for name in ("1-10-late.md", "1-2-early.md", "2-1-next.md", "notes.md"):
        write(stories / name, "")
    return root


def read_steering(project_dir, name):
    return (project_dir / ".kiro" / "steering" / name).read_text(encoding="utf-8")


def test_all_files_generated(project_dir, planning_dir):
    result = generate_steering(project_dir, agents=["bmad-bmm-pm"])

    assert result.generated == ["product.md", "tech.md", "structure.md", "bmad-index.md", "bmad-workflows.md"]
    assert result.skipped == []
    assert result.errors == []


def test_product_steering(project_dir, planning_dir):
    SteeringGenerator(project_dir).generate_product_steering()
    text = read_steering(project_dir, "product.md")

    assert text.startswith("---\ninclusion: conditional\n")
    assert "## Vision\nKiro agents for every BMAD module.\n" in text
    assert "## Key Goals\n- Fast setup\n- Safe regeneration\n" in text
    assert "## Success Metrics\nSetup finishes in under a minute.\n" in text
    assert "#[[file:_bmad-output/planning-artifacts/product-brief.md]]" in text


def test_tech_steering_lists_decisions_and_adrs(project_dir, planning_dir):
    SteeringGenerator(project_dir).generate_tech_steering()
    text = read_steering(project_dir, "tech.md")

    assert "## System Overview\nA small generator pipeline." in text
    assert "- **Pydantic schemas**: Strict validation" in text
    assert "Use Pydantic: #[[file:_bmad-output/planning-artifacts/adrs/01-use-pydantic.md]]" in text
    assert "- Extractors return None when nothing matches" in text


def test_structure_steering_reads_project_context(project_dir, planning_dir):
    SteeringGenerator(project_dir).generate_structure_steering()
    text = read_steering(project_dir, "structure.md")

    assert "```\nsrc/\n├── api/  # HTTP handlers\n```" in text
    assert "- **api/**: HTTP handlers" in text
    assert "- Files use kebab-case" in text
    assert "#[[file:_bmad-output/project-context.md]]" in text


def test_index_sorts_stories_numerically(project_dir, planning_dir):
    SteeringGenerator(project_dir, agents=["bmad-bmm-pm"]).generate_index()
    text = read_steering(project_dir, "bmad-index.md")

    assert text.startswith("---\ninclusion: always\n---")
    assert text.index("early") < text.index("late") < text.index("next")
    assert "notes" not in text
    assert "- `bmad-bmm-pm`" in text
    assert "- Product Brief: #[[file:_bmad-output/planning-artifacts/product-brief.md]]" in text


def test_missing_sources_skip_files(project_dir):
    result = SteeringGenerator(project_dir).generate_all()

    assert result.generated == ["bmad-index.md", "bmad-workflows.md"]
    assert result.skipped == ["product.md", "tech.md", "structure.md"]
    workflows = read_steering(project_dir, "bmad-workflows.md")
    assert "No BMAD commands have been generated yet" in workflows


def test_sparse_product_brief_uses_fallbacks(project_dir):
    write(project_dir / "_bmad-output" / "planning-artifacts" / "prd.md", "# PRD\n")
    SteeringGenerator(project_dir).generate_product_steering()
    text = read_steering(project_dir, "product.md")

    assert "Product vision and goals from source documentation." in text
    assert "#[[file:_bmad-output/planning-artifacts/prd.md]]" in text


def test_one_failure_does_not_stop_the_rest(project_dir, planning_dir, monkeypatch):
    def boom(self):
        raise RuntimeError("boom")

    monkeypatch.setattr(SteeringGenerator, "generate_tech_steering", boom)
    result = SteeringGenerator(project_dir).generate_all()

    assert result.errors == ["tech.md: boom"]
    assert "structure.md" in result.generated


def test_workflow_index_groups_by_kind(project_dir):
    commands = {"workflow": ["bmad-bmm-create-prd"], "task": [], "tool": ["bmad-tool-core-x"]}
    SteeringGenerator(project_dir, commands=commands).generate_workflow_index()
    text = read_steering(project_dir, "bmad-workflows.md")

    assert "### Workflows\n- **bmad-bmm-create-prd**: #[[file:.kiro/commands/bmad-bmm-create-prd.md]]" in text
    assert "### Tasks" not in text
    assert "### Tools" in text


def test_extract_section_stops_at_next_heading():
    lines = ["## Vision", "line one", "", "line two", "## Next", "other"]
    assert extract_section(lines, ["Vision"]) == "line one line two"
    assert extract_section(lines, ["Missing"]) is None


def test_extract_list_respects_limit():
    lines = ["## Goals", "- a", "- b", "- c", "## End"]
    assert extract_list(lines, ["goal"], limit=2) == ["a", "b"]


def test_extract_table_rows():
    lines = ["## Decisions", "| **A** | because |", "| plain | row |"]
    assert extract_table_rows(lines, ["Decisions"]) == ["**A**: because"]


def test_title_from_filename():
    assert title_from_filename("01-use-pydantic.md") == "Use Pydantic"
