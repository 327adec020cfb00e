"""Extraction components for compiled BMAD documents."""

from .agent_parser import AgentParser, parse_compiled_agent, extract_menu_items

__all__ = [
    "AgentParser",
    "parse_compiled_agent",
    "extract_menu_items",
]
