"""
Tokenizer for the GSX section (INI-like) format.

The files are hand-edited and inconsistently formatted, so the tokenizer
never raises: anything that is neither a header, a ``key = value`` pair,
a comment nor blank is skipped.
"""

import logging
from dataclasses import dataclass, field
from typing import List

from ..utils.keymap import KeyMap

logger = logging.getLogger(__name__)

COMMENT_PREFIXES = (';', '#')
INLINE_COMMENT = ';'


@dataclass
class Section:
    """A named section and its case-insensitive keys."""

    name: str
    keys: KeyMap = field(default_factory=KeyMap)


def tokenize_sections(text: str) -> List[Section]:
    """
    Split section-formatted text into ordered sections.

    Args:
        text: Raw file content

    Returns:
        Sections in file order. Keys that precede the first header are
        collected under a section with an empty name.
    """
    sections: List[Section] = []
    current = None

    for line_number, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if not line or line.startswith(COMMENT_PREFIXES):
            continue

        if line.startswith('[') and line.endswith(']'):
            current = Section(line[1:-1].strip())
            sections.append(current)
            continue

        eq = line.find('=')
        if eq <= 0:
            logger.debug(f"Skipping malformed line {line_number}: '{line}'")
            continue

        key = line[:eq].strip()
        value = line[eq + 1:]
        comment = value.find(INLINE_COMMENT)
        if comment >= 0:
            value = value[:comment]
        value = value.strip()

        if not key:
            logger.debug(f"Skipping line {line_number} with empty key")
            continue

        if current is None:
            current = Section('')
            sections.append(current)
        current.keys[key] = value

    return sections
