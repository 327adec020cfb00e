"""Tests for module discovery and artifact collection."""

from kirosetup.discovery import (
    ArtifactCollector,
    ModuleScanner,
    collect_agent_artifacts,
    collect_command_artifacts,
    discover_modules,
)

from conftest import write


def test_core_first_then_sorted_modules(bmad_dir):
    write(bmad_dir / "aaa" / "agents" / "x.md", "")
    assert discover_modules(bmad_dir) == ["core", "aaa", "bmm"]


def test_internal_and_markerless_dirs_are_not_modules(bmad_dir):
    modules = discover_modules(bmad_dir)

    assert "_config" not in modules
    assert "docs" not in modules


def test_missing_core_is_fine(tmp_path):
    write(tmp_path / "bmm" / "agents" / "pm.md", "")
    assert ModuleScanner(tmp_path).scan() == ["bmm"]


def test_empty_or_missing_tree(tmp_path):
    assert discover_modules(tmp_path) == []
    assert discover_modules(tmp_path / "missing") == []


def test_files_at_root_are_ignored(tmp_path):
    write(tmp_path / "agents", "not a directory")
    assert discover_modules(tmp_path) == []


def test_collect_agents(bmad_dir):
    artifacts = collect_agent_artifacts(bmad_dir, ["core", "bmm"])

    assert [(a.module, a.name) for a in artifacts] == [
        ("core", "test"),
        ("bmm", "notes"),
        ("bmm", "pm"),
    ]
    core = artifacts[0]
    assert core.source_path == bmad_dir / "core" / "agents" / "test.agent.md"
    assert core.description == "Core test agent"
    assert artifacts[2].description == "Product Manager"


def test_collect_commands(bmad_dir):
    artifacts = collect_command_artifacts(bmad_dir, ["core", "bmm"])

    assert [(a.kind, a.module, a.name) for a in artifacts] == [
        ("workflow", "core", "brainstorming"),
        ("workflow", "bmm", "create-prd"),
        ("task", "core", "index-docs"),
        ("tool", "bmm", "shard-doc"),
    ]


def test_manifest_supplies_display_name_and_description(bmad_dir):
    task = next(a for a in collect_command_artifacts(bmad_dir, ["core"]) if a.kind == "task")

    assert task.display_name == "Index Docs"
    assert task.description == "Build a docs index"


def test_descriptions_from_front_matter_or_heading(bmad_dir):
    by_name = {a.name: a for a in collect_command_artifacts(bmad_dir, ["core", "bmm"])}

    assert by_name["create-prd"].description == "Create a PRD"
    assert by_name["brainstorming"].description == "Brainstorming Session"
    assert by_name["shard-doc"].display_name == "Shard Doc"


def test_workflow_dir_without_entry_file_is_skipped(bmad_dir):
    write(bmad_dir / "core" / "workflows" / "draft" / "notes.txt", "")
    names = [a.name for a in ArtifactCollector(bmad_dir).collect_commands(["core"])]
    assert "draft" not in names


def test_unreadable_manifest_is_ignored(bmad_dir):
    write(bmad_dir / "bmm" / "manifest.json", "{not json")
    tool = next(a for a in collect_command_artifacts(bmad_dir, ["bmm"]) if a.kind == "tool")
    assert tool.display_name == "Shard Doc"


def test_non_list_manifest_section_is_ignored(bmad_dir):
    write(bmad_dir / "core" / "manifest.json", '{"tasks": 3}')
    task = next(a for a in collect_command_artifacts(bmad_dir, ["core"]) if a.kind == "task")

    assert task.display_name == "Index Docs"
    assert task.description == ""


def test_non_string_manifest_fields_are_ignored(bmad_dir):
    write(
        bmad_dir / "core" / "manifest.json",
        '{"tasks": [{"name": "index-docs", "displayName": ["x"], "description": 5}, {"name": 7}]}',
    )
    task = next(a for a in collect_command_artifacts(bmad_dir, ["core"]) if a.kind == "task")

    assert task.display_name == "Index Docs"
    assert task.description == ""
