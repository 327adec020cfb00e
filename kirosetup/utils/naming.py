"""
Identifier sanitization for generated file names.

Every identifier that becomes a filename fragment goes through
sanitize_agent_name, so agent JSON/prompt pairs and command stubs always
agree on their stems. Two different inputs can sanitize to the same stem;
in that case the later write replaces the earlier one.
"""

import re

WHITESPACE_PATTERN = re.compile(r'\s+')
DISALLOWED_PATTERN = re.compile(r'[^a-z0-9-]')


def sanitize_agent_name(name: str) -> str:
    """
    Make a name safe for file names and the Kiro agent schema.

    Lower-cases, turns whitespace runs into a single hyphen, then drops any
    character outside [a-z0-9-].

    Example:
        >>> sanitize_agent_name("BMad-BMM Product Manager")
        'bmad-bmm-product-manager'
        >>> sanitize_agent_name("Test Agent Name!@#")
        'test-agent-name'
    """
    lowered = name.lower()
    hyphenated = WHITESPACE_PATTERN.sub('-', lowered)
    return DISALLOWED_PATTERN.sub('', hyphenated)


def prefixed_name(prefix: str, *parts: str) -> str:
    """Join prefix and parts with hyphens and sanitize the result."""
    return sanitize_agent_name('-'.join([prefix, *parts]))
