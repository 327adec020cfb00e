"""
Compiled agent parsing.

Compiled BMAD agents are markdown files with a single embedded XML-like
unit:

<agent name="pm" title="Product Manager" icon="🧭">
  <persona>
    <role>...</role>
    <identity>...</identity>
    <communication_style>...</communication_style>
    <principles>...</principles>
  </persona>
  <menu>
    <item cmd="plan">Create plan</item>
  </menu>
</agent>

Documents are assumed to hold one top-level unit, so every search is
first-match only. Parsing never raises on malformed text: a document
without an <agent> tag yields None and callers skip it.
"""

import re
from typing import List, Optional
import logging

from kirosetup.schemas import AgentRecord, MenuItem

logger = logging.getLogger(__name__)

DEFAULT_ICON = "🤖"


class AgentParser:
    """
    Extract persona and menu metadata from compiled agent markdown.

    Handles:
    - <agent ...> attributes: name, title, icon
    - <persona> sub-fields: role, identity, communication_style, principles
    - <menu> items: <item cmd="trigger">description</item>
    """

    AGENT_TAG_PATTERN = re.compile(r'<agent\s+([^>]+)>')

    ATTRIBUTE_PATTERNS = {
        'name': re.compile(r'name="([^"]+)"'),
        'title': re.compile(r'title="([^"]+)"'),
        'icon': re.compile(r'icon="([^"]+)"'),
    }

    PERSONA_PATTERN = re.compile(r'<persona>(.*?)</persona>', re.DOTALL)

    PERSONA_FIELDS = ('role', 'identity', 'communication_style', 'principles')

    MENU_PATTERN = re.compile(r'<menu>(.*?)</menu>', re.DOTALL)

    ITEM_PATTERN = re.compile(r'<item\s+cmd="([^"]+)"[^>]*>([^<]+)</item>')

    def __init__(self, default_icon: str = DEFAULT_ICON):
        self.default_icon = default_icon

    def parse(
        self,
        content: str,
        default_name: str,
        default_title: str = "",
        default_icon: Optional[str] = None
    ) -> Optional[AgentRecord]:
        """
        Parse a compiled agent document.

        Args:
            content: Raw document text
            default_name: Used when the agent tag has no name attribute
            default_title: Used when the agent tag has no title attribute
            default_icon: Used when the agent tag has no icon attribute

        Returns:
            AgentRecord, or None if the document has no <agent> tag
        """
        agent_match = self.AGENT_TAG_PATTERN.search(content)
        if not agent_match:
            return None

        attrs = agent_match.group(1)
        persona = self._extract_persona(content)

        return AgentRecord(
            name=self._attribute(attrs, 'name') or default_name,
            title=self._attribute(attrs, 'title') or default_title,
            icon=self._attribute(attrs, 'icon') or default_icon or self.default_icon,
            role=persona['role'],
            identity=persona['identity'],
            communication_style=persona['communication_style'],
            principles=persona['principles'],
            menu_items=extract_menu_items(content),
        )

    def _attribute(self, attrs: str, name: str) -> Optional[str]:
        match = self.ATTRIBUTE_PATTERNS[name].search(attrs)
        return match.group(1) if match else None

    def _extract_persona(self, content: str) -> dict:
        """
        Extract persona sub-fields.

        A missing <persona> block or a missing sub-field yields empty strings.
        """
        fields = {field: '' for field in self.PERSONA_FIELDS}

        persona_match = self.PERSONA_PATTERN.search(content)
        if not persona_match:
            return fields

        persona_content = persona_match.group(1)
        for field in self.PERSONA_FIELDS:
            match = re.search(rf'<{field}>([^<]+)</{field}>', persona_content)
            if match:
                fields[field] = match.group(1).strip()

        return fields


def extract_menu_items(content: str) -> List[MenuItem]:
    """
    Extract menu entries in source order.

    Only the first <menu> block is read. No block means no items.

    Example:
        >>> items = extract_menu_items('<menu><item cmd="plan">Create plan</item></menu>')
        >>> [(i.trigger, i.description) for i in items]
        [('plan', 'Create plan')]
    """
    menu_match = AgentParser.MENU_PATTERN.search(content)
    if not menu_match:
        return []

    return [
        MenuItem(trigger=match.group(1), description=match.group(2).strip())
        for match in AgentParser.ITEM_PATTERN.finditer(menu_match.group(1))
    ]


def parse_compiled_agent(
    content: str,
    default_name: str,
    default_title: str = "",
    default_icon: str = DEFAULT_ICON
) -> Optional[AgentRecord]:
    """
    Convenience function to parse one compiled agent document.

    Example:
        >>> record = parse_compiled_agent('<agent name="pm" title="PM">...</agent>', "pm")
        >>> record.name
        'pm'
    """
    return AgentParser(default_icon=default_icon).parse(content, default_name, default_title)
