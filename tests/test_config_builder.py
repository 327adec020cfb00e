"""Tests for agent config building and schema validation."""

import pytest

from kirosetup.exceptions import AgentConfigValidationError
from kirosetup.formatters import AgentConfigBuilder, AgentSchemaValidator
from kirosetup.schemas import AgentRecord


def valid_config(**overrides):
    config = {
        "name": "bmad-bmm-pm",
        "description": "pm - Leads planning",
        "prompt": "file://./bmad-bmm-pm-prompt.md",
        "tools": ["*"],
        "mcpServers": {},
        "useLegacyMcpJson": True,
        "resources": [],
    }
    config.update(overrides)
    return config


def test_build_round_trip_for_pm():
    record = AgentRecord(name="pm", title="Product Manager", icon="🧭", role="Leads planning")
    config = AgentConfigBuilder().build("bmad-bmm-pm", record)

    assert config == valid_config()


def test_description_falls_back_to_title():
    record = AgentRecord(name="pm", title="Product Manager")
    config = AgentConfigBuilder().build("bmad-bmm-pm", record)

    assert config["description"] == "pm - Product Manager"


def test_validator_accepts_minimal_and_extra_keys():
    validator = AgentSchemaValidator()

    assert validator.validate({"name": "x"}) == (True, None)
    assert validator.validate(valid_config(model="claude", hooks={}))[0] is True


def test_validator_collects_every_error():
    passed, errors = AgentSchemaValidator().validate(
        {"name": 5, "tools": "*", "useLegacyMcpJson": "yes"}
    )

    assert passed is False
    fields = {error.split(":")[0] for error in errors}
    assert {"name", "tools", "useLegacyMcpJson"} <= fields


def test_validator_rejects_missing_or_empty_name():
    validator = AgentSchemaValidator()

    assert validator.validate({})[0] is False
    assert validator.validate({"name": ""})[0] is False


def test_validator_rejects_non_string_tool_entries():
    passed, errors = AgentSchemaValidator().validate(valid_config(tools=["*", 3]))

    assert passed is False
    assert any(error.startswith("tools.1") for error in errors)


def test_ensure_valid_raises_with_errors():
    with pytest.raises(AgentConfigValidationError) as exc_info:
        AgentSchemaValidator().ensure_valid({"name": 1, "resources": "none"})

    assert len(exc_info.value.errors) == 2
    assert str(exc_info.value).startswith("Invalid agent schema: ")


def test_builder_uses_injected_validator():
    class RejectAll(AgentSchemaValidator):
        def validate(self, config):
            return False, ["name: rejected"]

    with pytest.raises(AgentConfigValidationError, match="rejected"):
        AgentConfigBuilder(RejectAll()).build("bmad-x", AgentRecord(name="x"))
