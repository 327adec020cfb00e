"""
Kiro agent JSON configuration.

Builds the fixed-shape agent config and validates it against the Kiro agent
schema before handing it back. A config that fails validation is never
returned, so it can never be written.
"""

from typing import Any, Dict, List, Optional, Type
import logging

from pydantic import BaseModel

from kirosetup.exceptions import AgentConfigValidationError
from kirosetup.schemas import AgentRecord, KiroAgentConfig
from kirosetup.utils import validate_with_pydantic

logger = logging.getLogger(__name__)


class AgentSchemaValidator:
    """
    Validation service for agent configs.

    Constructed explicitly and passed to whatever needs it.
    """

    def __init__(self, model: Type[BaseModel] = KiroAgentConfig):
        self.model = model

    def validate(self, config: Dict[str, Any]) -> tuple[bool, Optional[List[str]]]:
        """Return (passed, errors) with every field-level error collected."""
        return validate_with_pydantic(config, self.model)

    def ensure_valid(self, config: Dict[str, Any]) -> None:
        """
        Raise if the config does not satisfy the schema.

        Raises:
            AgentConfigValidationError: with all collected errors
        """
        passed, errors = self.validate(config)
        if not passed:
            raise AgentConfigValidationError(errors)


class AgentConfigBuilder:
    """Create validated Kiro agent configs from parsed agent records."""

    def __init__(self, validator: Optional[AgentSchemaValidator] = None):
        self.validator = validator or AgentSchemaValidator()

    def build(self, agent_name: str, record: AgentRecord) -> Dict[str, Any]:
        """
        Create the agent config.

        Args:
            agent_name: Sanitized agent name (e.g. bmad-bmm-pm)
            record: Parsed agent metadata

        Returns:
            Config dictionary, already validated

        Raises:
            AgentConfigValidationError: if the config fails the schema
        """
        config = {
            "name": agent_name,
            "description": f"{record.name} - {record.role or record.title}",
            "prompt": prompt_reference(agent_name),
            "tools": ["*"],
            "mcpServers": {},
            "useLegacyMcpJson": True,
            "resources": [],
        }

        self.validator.ensure_valid(config)
        logger.debug(f"Built agent config: {agent_name}")

        return config


def prompt_reference(agent_name: str) -> str:
    """Prompt file reference, relative to the agent JSON file."""
    return f"file://./{agent_name}-prompt.md"
