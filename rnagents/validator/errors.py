# rnagents/validator/errors.py
"""Validation issue collection, per-file status records and formatting."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

# Issue message template: [FAIL] TYPE: location problem -> Fix: action
ISSUE_TEMPLATE = "[{marker}] {issue_type}: {location} {problem}\n  Fix: {fix_action}"

# Issue types
AGENT = "AGENT"
FRONTMATTER = "FRONTMATTER"
CORE = "CORE"
STRUCTURE = "STRUCTURE"


class ValidationError:
    """Structured validation issue (used for both errors and warnings)."""

    def __init__(
        self,
        issue_type: str,
        location: str,
        problem: str,
        fix_action: str,
        subject: Optional[str] = None,
    ):
        self.issue_type = issue_type
        self.location = location
        self.problem = problem
        self.fix_action = fix_action
        self.subject = subject or location

    def format(self, marker: str = "FAIL") -> str:
        """Format issue message."""
        return ISSUE_TEMPLATE.format(
            marker=marker,
            issue_type=self.issue_type,
            location=self.location,
            problem=self.problem,
            fix_action=self.fix_action,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert issue to dictionary for JSON serialization."""
        return {
            "type": self.issue_type,
            "location": self.location,
            "problem": self.problem,
            "fix_action": self.fix_action,
            "subject": self.subject,
        }


@dataclass
class AgentFileStatus:
    """Outcome of checking a single agent file."""

    identifier: str
    exists: bool = False
    readable: bool = False
    has_frontmatter: bool = False
    has_name: bool = False
    has_description: bool = False
    issues: List[ValidationError] = field(default_factory=list)

    @property
    def filename(self) -> str:
        return f"{self.identifier}.md"

    @property
    def missing_markers(self) -> List[str]:
        if not self.readable:
            return []
        missing = []
        if not self.has_frontmatter:
            missing.append("frontmatter")
        if not self.has_name:
            missing.append("name")
        if not self.has_description:
            missing.append("description")
        return missing

    @property
    def ok(self) -> bool:
        return self.readable and not self.missing_markers

    @property
    def state(self) -> str:
        if not self.exists:
            return "missing"
        if not self.readable:
            return "unreadable"
        return "pass" if self.ok else "warn"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "file": self.filename,
            "exists": self.exists,
            "has_frontmatter": self.has_frontmatter,
            "has_name": self.has_name,
            "has_description": self.has_description,
            "status": self.state,
            "issues": [i.to_dict() for i in self.issues],
        }


@dataclass
class CoreFileStatus:
    """Outcome of checking a single core context file."""

    filename: str
    exists: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "exists": self.exists,
            "status": "pass" if self.exists else "missing",
        }


class ValidationResult:
    """Collects validation errors, warnings and per-file statuses for one run."""

    def __init__(self):
        self.errors: List[ValidationError] = []
        self.warnings: List[ValidationError] = []
        self.agents: List[AgentFileStatus] = []
        self.core: List[CoreFileStatus] = []
        self.agents_checked = 0
        self.core_dir_found: Optional[bool] = None
        self.fatal = False

    def add_error(
        self,
        issue_type: str,
        location: str,
        problem: str,
        fix_action: str,
        subject: Optional[str] = None,
    ) -> ValidationError:
        """Add a validation error (missing required file or directory)."""
        error = ValidationError(issue_type, location, problem, fix_action, subject)
        self.errors.append(error)
        return error

    def add_warning(
        self,
        issue_type: str,
        location: str,
        problem: str,
        fix_action: str,
        subject: Optional[str] = None,
    ) -> ValidationError:
        """Add a validation warning (present but incompletely formed file)."""
        warning = ValidationError(issue_type, location, problem, fix_action, subject)
        self.warnings.append(warning)
        return warning

    def extend(self, other: "ValidationResult"):
        """Extend with issues and statuses from another result."""
        self.errors.extend(other.errors)
        self.warnings.extend(other.warnings)
        self.agents.extend(other.agents)
        self.core.extend(other.core)
        self.agents_checked += other.agents_checked
        if other.core_dir_found is not None:
            self.core_dir_found = other.core_dir_found
        self.fatal = self.fatal or other.fatal

    @property
    def error_count(self) -> int:
        return len(self.errors)

    @property
    def warning_count(self) -> int:
        return len(self.warnings)

    def has_errors(self) -> bool:
        """Check if any errors were collected."""
        return len(self.errors) > 0

    def has_warnings(self) -> bool:
        """Check if any warnings were collected."""
        return len(self.warnings) > 0

    def passed(self, strict: bool = False) -> bool:
        """Overall status; in strict mode warnings also fail the run."""
        if strict:
            return not self.has_errors() and not self.has_warnings()
        return not self.has_errors()

    def status(self, strict: bool = False) -> str:
        return "PASS" if self.passed(strict) else "FAIL"

    def to_dict(self, strict: bool = False) -> Dict[str, Any]:
        """Convert result to dictionary for JSON serialization."""
        return {
            "errors": [e.to_dict() for e in self.errors],
            "warnings": [w.to_dict() for w in self.warnings],
            "agents_checked": self.agents_checked,
            "error_count": self.error_count,
            "warning_count": self.warning_count,
            "status": self.status(strict),
        }
