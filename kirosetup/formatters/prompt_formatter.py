"""
Kiro agent prompt formatter.

Renders an AgentRecord as the markdown prompt Kiro loads through the
agent's `prompt: file://./<name>-prompt.md` reference.

Structure:
# <name> <icon>
## Role                  (only when set)
## Identity              (only when set)
## Communication Style   (only when set)
## Principles            (only when set)
## Available Workflows   (only when the menu has items)
## Instructions          (always)
"""

from typing import List, Optional, Tuple
import logging

from kirosetup.schemas import AgentRecord

logger = logging.getLogger(__name__)


class AgentPromptFormatter:
    """Generate the prompt document for one agent."""

    DEFAULT_INSTRUCTIONS = (
        "You are {name}, part of the BMad Method. Follow your role and principles "
        "while assisting users with their development needs."
    )

    def __init__(self, instructions: Optional[str] = None):
        """
        Args:
            instructions: Closing paragraph template; {name} is substituted
        """
        self.instructions = instructions or self.DEFAULT_INSTRUCTIONS

    def format(self, record: AgentRecord) -> str:
        """
        Generate prompt markdown.

        Args:
            record: Parsed agent metadata

        Returns:
            Markdown prompt content
        """
        sections: List[Tuple[str, str]] = [
            ("Role", record.role),
            ("Identity", record.identity),
            ("Communication Style", record.communication_style),
            ("Principles", record.principles),
        ]

        prompt = f"# {record.name} {record.icon}\n\n"

        for heading, text in sections:
            if text:
                prompt += f"## {heading}\n{text}\n\n"

        if record.menu_items:
            prompt += "## Available Workflows\n"
            for i, item in enumerate(record.menu_items, 1):
                prompt += f"{i}. **{item.trigger}**: {item.description}\n"
            prompt += "\n"

        prompt += f"## Instructions\n{self.instructions.format(name=record.name)}\n"

        return prompt


def generate_agent_prompt(record: AgentRecord) -> str:
    """Convenience function to render a prompt with the default instructions."""
    return AgentPromptFormatter().format(record)
