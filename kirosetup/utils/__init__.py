"""Utility functions for the Kiro installer."""

from .naming import sanitize_agent_name, prefixed_name
from .schema_utils import validate_with_pydantic
from .text import first_present

__all__ = [
    "sanitize_agent_name",
    "prefixed_name",
    "validate_with_pydantic",
    "first_present",
]
