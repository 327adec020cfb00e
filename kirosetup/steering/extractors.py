"""
Line-based extraction helpers for planning documents.

Planning artifacts (product briefs, PRDs, architecture docs, project context)
are free-form markdown. These helpers pull short summaries out of them by
heading keywords. Each returns None (or an empty list) when nothing matches
so callers can chain them with first_present.
"""

import re
from typing import Iterable, List, Optional

BULLET_PREFIX = re.compile(r'^[\s\-*\d.]+')
DASH_PREFIX = re.compile(r'^[\s\-*|]+')
NUMBERED_ITEM = re.compile(r'^\d+\.')
TREE_DIRECTORY = re.compile(r'├──\s*([^/]+/)\s*#\s*(.+)')


def is_heading(line: str) -> bool:
    """Markdown heading or a line opening with bold text."""
    return line.startswith('#') or line.startswith('**')


def is_section_break(line: str) -> bool:
    """Next heading, or a line that is entirely bold text."""
    return line.startswith('#') or (line.startswith('**') and line.endswith('**'))


def _matches(line: str, keywords: Iterable[str]) -> bool:
    lowered = line.lower()
    return any(keyword.lower() in lowered for keyword in keywords)


def extract_section(lines: List[str], headers: List[str], max_lines: int = 3) -> Optional[str]:
    """
    Text of the first section whose heading mentions one of headers.

    Headers are tried in order. The first max_lines non-empty lines under the
    heading are joined with spaces.
    """
    for header in headers:
        start = next(
            (i for i, line in enumerate(lines) if _matches(line, [header]) and is_heading(line)),
            None
        )
        if start is None:
            continue

        end = next(
            (i for i in range(start + 1, len(lines)) if is_section_break(lines[i])),
            len(lines)
        )
        body = [line for line in lines[start + 1:end] if line.strip()][:max_lines]
        text = ' '.join(body).strip()
        if text:
            return text
    return None


def extract_heading_block(lines: List[str], headers: List[str], max_lines: int = 5) -> Optional[str]:
    """
    Like extract_section, but only '#' headings count and nested
    sub-headings are skipped rather than ending the block.
    """
    for header in headers:
        start = next(
            (i for i, line in enumerate(lines) if _matches(line, [header]) and line.startswith('#')),
            None
        )
        if start is None:
            continue

        level = len(lines[start]) - len(lines[start].lstrip('#'))
        end = len(lines)
        for i in range(start + 1, len(lines)):
            line = lines[i]
            if line.startswith('#') and len(line) - len(line.lstrip('#')) <= level:
                end = i
                break

        body = [
            line for line in lines[start + 1:end]
            if line.strip() and not line.startswith('#')
        ][:max_lines]
        if body:
            return ' '.join(body).strip()
    return None


def extract_list(
    lines: List[str],
    keywords: List[str],
    limit: int = 5,
    numbered: bool = False
) -> List[str]:
    """
    Bullet items from the first section whose heading mentions a keyword.

    Args:
        lines: Document lines
        keywords: Heading keywords (case-insensitive)
        limit: Maximum number of items
        numbered: Also accept "1." style items

    Returns:
        Item texts without bullet markers
    """
    items: List[str] = []
    in_section = False

    for line in lines:
        if not in_section:
            if _matches(line, keywords) and is_heading(line):
                in_section = True
            continue

        if is_section_break(line):
            break

        stripped = line.strip()
        is_item = stripped.startswith('-') or stripped.startswith('*')
        if numbered and NUMBERED_ITEM.match(stripped):
            is_item = True

        if is_item:
            item = BULLET_PREFIX.sub('', line).strip() if numbered else DASH_PREFIX.sub('', line).strip()
            if item and len(items) < limit:
                items.append(item)

    return items


def extract_keyword_lines(
    lines: List[str],
    keywords: List[str],
    limit: int = 3,
    max_length: Optional[int] = None
) -> List[str]:
    """Lines mentioning any keyword, bullet markers stripped."""
    found = []
    for line in lines:
        if not _matches(line, keywords):
            continue
        text = BULLET_PREFIX.sub('', line).strip()
        if not text or (max_length and len(text) >= max_length):
            continue
        found.append(text)
        if len(found) >= limit:
            break
    return found


def extract_table_rows(lines: List[str], headers: List[str], limit: int = 5) -> List[str]:
    """
    "choice: rationale" pairs from bolded markdown table rows in a section.

    The section starts at the first line mentioning a header and ends at the
    next '##' heading.
    """
    rows = []
    in_section = False

    for line in lines:
        if not in_section:
            if any(header in line for header in headers):
                in_section = True
            continue

        if line.startswith('##'):
            break

        if '|' in line and '**' in line:
            parts = [part.strip() for part in line.split('|')]
            if len(parts) >= 3 and len(rows) < limit:
                rows.append(f"{parts[1]}: {parts[2]}")

    return rows


def extract_code_block(lines: List[str], marker: str) -> Optional[str]:
    """Contents of the first fenced block after a line containing marker."""
    in_section = False
    block: List[str] = []
    in_block = False

    for line in lines:
        if not in_section:
            in_section = marker in line
            continue

        if line.strip().startswith('```'):
            if in_block:
                break
            in_block = True
            continue

        if in_block and line.strip():
            block.append(line)

    return '\n'.join(block) if block else None


def extract_tree_directories(lines: List[str], marker: str) -> List[str]:
    """'- **dir/**: purpose' entries from commented tree lines after marker."""
    directories = []
    in_section = False

    for line in lines:
        if marker in line:
            in_section = True
            continue
        if in_section and line.startswith('##'):
            break
        if in_section:
            match = TREE_DIRECTORY.search(line)
            if match:
                directories.append(f"- **{match.group(1).strip()}**: {match.group(2).strip()}")

    return directories


def title_from_filename(filename: str) -> str:
    """'01-use-pydantic.md' -> 'Use Pydantic'"""
    stem = re.sub(r'\.md$', '', filename)
    stem = re.sub(r'^\d+-', '', stem)
    return ' '.join(word.capitalize() for word in stem.replace('-', ' ').split())


def bullets(items: List[str]) -> str:
    return '\n'.join(f"- {item}" for item in items)
