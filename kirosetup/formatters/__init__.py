"""Output formatters for Kiro agents and commands."""

from .prompt_formatter import AgentPromptFormatter, generate_agent_prompt
from .config_builder import AgentSchemaValidator, AgentConfigBuilder
from .command_formatter import CommandFormatter, command_stem

__all__ = [
    "AgentPromptFormatter",
    "generate_agent_prompt",
    "AgentSchemaValidator",
    "AgentConfigBuilder",
    "CommandFormatter",
    "command_stem",
]
