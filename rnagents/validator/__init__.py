"""Validation primitives for the RN Agents framework validator."""

from .errors import (
    AGENT,
    CORE,
    FRONTMATTER,
    STRUCTURE,
    AgentFileStatus,
    CoreFileStatus,
    ValidationError,
    ValidationResult,
)
from .markers import (
    DESCRIPTION_MARKER,
    FRONTMATTER_DELIMITER,
    NAME_MARKER,
    MarkerFindings,
    check_markers,
)

__all__ = [
    "AGENT",
    "CORE",
    "FRONTMATTER",
    "STRUCTURE",
    "AgentFileStatus",
    "CoreFileStatus",
    "ValidationError",
    "ValidationResult",
    "DESCRIPTION_MARKER",
    "FRONTMATTER_DELIMITER",
    "NAME_MARKER",
    "MarkerFindings",
    "check_markers",
]
