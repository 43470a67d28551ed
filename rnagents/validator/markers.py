# rnagents/validator/markers.py
"""Shallow content checks for agent markdown files.

An agent file is considered well formed when its text:
  - starts with the frontmatter delimiter ``---``
  - contains a ``name:`` marker
  - contains a ``description:`` marker

The checks are plain string tests, not a YAML parse. Each one is evaluated
independently so a file missing all three markers produces three findings.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

FRONTMATTER_DELIMITER = "---"
NAME_MARKER = "name:"
DESCRIPTION_MARKER = "description:"


@dataclass(frozen=True)
class MarkerFindings:
    """Which markers were found in an agent file's text."""

    has_frontmatter: bool
    has_name: bool
    has_description: bool
    delimiter: str = FRONTMATTER_DELIMITER

    def problems(self, identifier: str) -> List[Tuple[str, str]]:
        """Return (problem, fix_action) pairs for every missing marker."""
        found: List[Tuple[str, str]] = []
        if not self.has_frontmatter:
            found.append((
                "missing frontmatter",
                f"Start the file with a '{self.delimiter}' line followed by frontmatter",
            ))
        if not self.has_name:
            found.append((
                "missing 'name' field",
                f"Add `name: {identifier}` to frontmatter",
            ))
        if not self.has_description:
            found.append((
                "missing 'description' field",
                "Add `description: <one-line description>` to frontmatter",
            ))
        return found


def check_markers(
    content: str,
    delimiter: str = FRONTMATTER_DELIMITER,
    name_marker: str = NAME_MARKER,
    description_marker: str = DESCRIPTION_MARKER,
) -> MarkerFindings:
    """Run all three marker checks on ``content``."""
    return MarkerFindings(
        has_frontmatter=content.startswith(delimiter),
        has_name=name_marker in content,
        has_description=description_marker in content,
        delimiter=delimiter,
    )
