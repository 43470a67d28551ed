#!/usr/bin/env python3
"""
validate_agents.py - RN Agents Framework Validator

Validates that a framework install contains every required agent and core
context document, and that each agent file minimally looks like an agent
definition.

## What It Validates

**Agents** - one file per catalog identifier in agents/<identifier>.md
  - Missing file is an error (content checks are skipped for it)
  - File must start with the '---' frontmatter delimiter (warning)
  - File must contain a 'name:' marker (warning)
  - File must contain a 'description:' marker (warning)
  - All three content checks run independently

**Core context** - fixed list of shared documents in _core/
  - agents/_core/ is used when present (installed layout), else _core/
  - Missing _core/ directory is one error; per-file checks are skipped
  - Each missing core file is one error

## CLI Usage

  rn-agents-validate
  rn-agents-validate --root .github
  rn-agents-validate --minimal
  rn-agents-validate --strict
  rn-agents-validate --json
  rn-agents-validate --report markdown

## CLI Flags

--root PATH         Framework root containing agents/ (default: discovered from cwd)
--minimal           Only check the minimal agent set
--strict            Treat warnings as failures
--json              Output machine-readable JSON with per-file results
--report FORMAT     Output a json or markdown report
--quiet             Only print problems and the summary
--debug             Show timing and validation steps
--version           Show validator version

## Exit Codes

0   No errors (warnings allowed unless --strict)
1   Validation failed (missing files, or warnings with --strict)
2   Fatal error (agents/ directory missing, unreadable catalog)

## Error Message Format

  [FAIL] TYPE: location problem
    Fix: action

Example:
  [FAIL] AGENT: agents/qa-lead.md missing agent file
    Fix: Create agents/qa-lead.md with frontmatter containing name and description
"""

import argparse
import json
import logging
import sys
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

from rnagents import __version__
from rnagents.config.catalog import (
    Catalog,
    CatalogError,
    FrameworkLayout,
    find_framework_root,
    load_catalog,
    resolve_layout,
)
from rnagents.validator import (
    AGENT,
    CORE,
    FRONTMATTER,
    STRUCTURE,
    AgentFileStatus,
    CoreFileStatus,
    ValidationResult,
    check_markers,
)

logger = logging.getLogger(__name__)

# ============================================================================
# Constants
# ============================================================================

# Exit codes per contract
EXIT_SUCCESS = 0
EXIT_VALIDATION_FAILED = 1
EXIT_FATAL_ERROR = 2

SUMMARY_RULE = "=" * 50
REPORT_VERSION = "1.0.0"


# ============================================================================
# Agent Validation
# ============================================================================

def validate_agent_files(
    layout: FrameworkLayout,
    identifiers: List[str],
    catalog: Catalog,
) -> ValidationResult:
    """
    Check every required agent file, in catalog order.

    A missing file is one error. A present file gets one warning per missing
    marker. The agents directory must already exist (see run_validation).
    """
    result = ValidationResult()
    result.agents_checked = len(identifiers)

    for identifier in identifiers:
        status = AgentFileStatus(identifier=identifier)
        result.agents.append(status)

        path = layout.agents_dir / status.filename
        location = layout.display(path)

        if not path.is_file():
            status.issues.append(result.add_error(
                AGENT,
                location,
                "missing agent file",
                f"Create {location} with frontmatter containing name and description",
                subject=identifier,
            ))
            continue

        status.exists = True
        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            status.issues.append(result.add_error(
                AGENT,
                location,
                f"unreadable agent file: {e}",
                "Check file permissions and make sure the file is UTF-8 encoded",
                subject=identifier,
            ))
            continue

        status.readable = True
        findings = check_markers(
            content,
            delimiter=catalog.frontmatter_marker,
            name_marker=catalog.name_marker,
            description_marker=catalog.description_marker,
        )
        status.has_frontmatter = findings.has_frontmatter
        status.has_name = findings.has_name
        status.has_description = findings.has_description

        for problem, fix_action in findings.problems(identifier):
            status.issues.append(result.add_warning(
                FRONTMATTER,
                location,
                problem,
                fix_action,
                subject=identifier,
            ))

    return result


# ============================================================================
# Core Context Validation
# ============================================================================

def validate_core_files(layout: FrameworkLayout, core_files: List[str]) -> ValidationResult:
    """
    Check the core context directory and every required core document.

    A missing directory is a single error and per-file checks are skipped.
    """
    result = ValidationResult()
    core_location = layout.display(layout.core_dir) + "/"

    if not layout.core_dir.is_dir():
        result.core_dir_found = False
        result.add_error(
            CORE,
            core_location,
            "directory not found",
            f"Create {core_location} and add the core context files",
        )
        return result

    result.core_dir_found = True
    for filename in core_files:
        path = layout.core_dir / filename
        exists = path.is_file()
        result.core.append(CoreFileStatus(filename=filename, exists=exists))
        if not exists:
            location = layout.display(path)
            result.add_error(
                CORE,
                location,
                "missing core context file",
                f"Restore {location} from the framework distribution",
                subject=filename,
            )

    return result


# ============================================================================
# ValidatorRunner Class - Orchestrates Validation Checks
# ============================================================================


class ValidatorRunner:
    """
    Orchestrates the agent and core validation passes.

    Attributes:
        layout: Resolved agents/core directories
        catalog: Required agents and core files
        minimal: If True, only the minimal agent set is checked
    """

    def __init__(
        self,
        layout: FrameworkLayout,
        catalog: Catalog,
        minimal: bool = False,
    ):
        self.layout = layout
        self.catalog = catalog
        self.minimal = minimal

    def run_all(self) -> ValidationResult:
        """
        Run the agent pass followed by the core pass.

        A missing agents directory is fatal: one STRUCTURE error is recorded
        and no further checks run.
        """
        start_time = time.time()
        result = ValidationResult()

        if not self.layout.agents_dir.is_dir():
            location = self.layout.display(self.layout.agents_dir) + "/"
            result.add_error(
                STRUCTURE,
                location,
                "directory not found",
                "Run from the framework root, or pass --root pointing at the directory that contains agents/",
            )
            result.fatal = True
            logger.debug("Agents directory %s missing, aborting", self.layout.agents_dir)
            return result

        result.extend(self.run_agents())
        result.extend(self.run_core())

        elapsed = time.time() - start_time
        logger.debug("Validation completed in %.3fs", elapsed)
        return result

    def run_agents(self) -> ValidationResult:
        identifiers = self.catalog.select_agents(minimal=self.minimal)
        agent_result = validate_agent_files(self.layout, identifiers, self.catalog)
        logger.debug(
            "Agent check: %d agents, %d errors, %d warnings",
            len(identifiers),
            agent_result.error_count,
            agent_result.warning_count,
        )
        return agent_result

    def run_core(self) -> ValidationResult:
        core_result = validate_core_files(self.layout, self.catalog.core)
        logger.debug("Core check: %d errors", core_result.error_count)
        return core_result


# ============================================================================
# Main Validation Orchestrator (Thin Wrapper)
# ============================================================================


def run_validation(
    root: Optional[Path] = None,
    minimal: bool = False,
    catalog: Optional[Catalog] = None,
) -> ValidationResult:
    """
    Run all validation checks against a framework root.

    Args:
        root: Framework root (default: discovered from the current directory)
        minimal: If True, only check the minimal agent set
        catalog: Catalog to validate against (default: load_catalog())

    Returns:
        ValidationResult with all errors, warnings and per-file statuses

    Raises:
        CatalogError: If the catalog cannot be loaded
    """
    if catalog is None:
        catalog = load_catalog()
    if root is None:
        root = find_framework_root()

    layout = resolve_layout(root)
    runner = ValidatorRunner(layout=layout, catalog=catalog, minimal=minimal)
    return runner.run_all()


# ============================================================================
# Machine-Readable Reports
# ============================================================================

def build_json_output(result: ValidationResult, strict: bool = False) -> Dict[str, Any]:
    """Build detailed JSON output with per-agent and per-core-file results."""
    issues = result.to_dict(strict)
    return {
        "version": REPORT_VERSION,
        "timestamp": datetime.now(timezone.utc).isoformat(timespec="seconds"),
        "summary": {
            "agents_checked": result.agents_checked,
            "error_count": result.error_count,
            "warning_count": result.warning_count,
            "status": result.status(strict),
            "strict": strict,
            "fatal": result.fatal,
            "agents_with_issues": [a.identifier for a in result.agents if not a.ok],
        },
        "agents": {a.identifier: a.to_dict() for a in result.agents},
        "core": {
            "directory_found": result.core_dir_found,
            "files": {c.filename: c.to_dict() for c in result.core},
        },
        "errors": issues["errors"],
        "warnings": issues["warnings"],
    }


def build_error_output(message: str) -> Dict[str, Any]:
    """Build the JSON envelope printed when validation cannot run at all."""
    return {
        "version": REPORT_VERSION,
        "timestamp": datetime.now(timezone.utc).isoformat(timespec="seconds"),
        "summary": {"status": "ERROR", "message": message},
        "agents": {},
        "core": {},
        "errors": [],
        "warnings": [],
    }


def build_report_json(result: ValidationResult, strict: bool = False) -> Dict[str, Any]:
    """Build simplified JSON report (flat issue lists, no per-file sections)."""

    def _issue(issue) -> Dict[str, Any]:
        return {
            "type": issue.issue_type,
            "location": issue.location,
            "message": issue.problem,
            "suggestions": [issue.fix_action] if issue.fix_action else [],
        }

    return {
        "timestamp": datetime.now(timezone.utc).isoformat(timespec="seconds"),
        "status": "PASSED" if result.passed(strict) else "FAILED",
        "checks": ["agents", "frontmatter", "core"],
        "agents_checked": result.agents_checked,
        "failed": result.error_count,
        "warned": result.warning_count,
        "errors": [_issue(e) for e in result.errors],
        "warnings": [_issue(w) for w in result.warnings],
    }


def build_report_markdown(result: ValidationResult, strict: bool = False) -> str:
    """Build markdown validation report."""
    lines: List[str] = []

    lines.append("# RN Agents Validation Report")
    lines.append("")
    lines.append(f"**Timestamp**: {datetime.now(timezone.utc).strftime('%Y-%m-%d %H:%M:%S UTC')}")
    lines.append(f"**Status**: {'PASSED' if result.passed(strict) else 'FAILED'}")
    lines.append(f"**Agents checked**: {result.agents_checked}")
    lines.append("")

    checks = [
        ("Agents directory", STRUCTURE),
        ("Agent files present", AGENT),
        ("Agent frontmatter markers", FRONTMATTER),
        ("Core context files", CORE),
    ]

    lines.append("## Checks Performed")
    lines.append("")
    for name, issue_type in checks:
        has_issue = any(e.issue_type == issue_type for e in result.errors + result.warnings)
        marker = "[ ]" if has_issue else "[x]"
        lines.append(f"- {marker} {name}")
    lines.append("")

    for title, label, issues in (
        ("Errors", "Error", result.errors),
        ("Warnings", "Warning", result.warnings),
    ):
        lines.append(f"## {title} ({len(issues)})")
        lines.append("")
        if not issues:
            lines.append(f"_No {title.lower()}._")
            lines.append("")
            continue
        for issue in issues:
            lines.append(f"### {issue.issue_type}")
            lines.append(f"**Location**: {issue.location}")
            lines.append(f"**{label}**: {issue.problem}")
            lines.append(f"**Fix**: {issue.fix_action}")
            lines.append("")

    return "\n".join(lines)


# ============================================================================
# Console Report
# ============================================================================

def print_fatal(result: ValidationResult) -> None:
    """Print fatal structural errors to stderr."""
    for error in result.errors:
        print(error.format(), file=sys.stderr)
    print(f"\nValidation aborted ({result.error_count} error(s)).", file=sys.stderr)


def print_agent_statuses(result: ValidationResult, quiet: bool = False) -> None:
    """Print one status line per agent, followed by its issue details."""
    for status in result.agents:
        if status.ok:
            if not quiet:
                print(f"[PASS] {status.filename}")
            continue

        marker = "WARN" if status.state == "warn" else "FAIL"
        print(f"[{marker}] {status.filename}")
        for issue in status.issues:
            print(issue.format(marker), file=sys.stderr)


def print_core_statuses(result: ValidationResult, quiet: bool = False) -> None:
    """Print the core context section."""
    core_errors = [e for e in result.errors if e.issue_type == CORE]

    if result.core_dir_found is False:
        print("")
        for error in core_errors:
            print(error.format(), file=sys.stderr)
        return

    print("\nChecking core context files...")
    by_file = {e.subject: e for e in core_errors}
    for status in result.core:
        if status.exists:
            if not quiet:
                print(f"[PASS] {status.filename}")
        else:
            print(f"[FAIL] {status.filename}")
            print(by_file[status.filename].format(), file=sys.stderr)


def print_summary(result: ValidationResult, strict: bool = False) -> None:
    """Print aggregate counts and overall status."""
    print("\n" + SUMMARY_RULE)
    if not result.has_errors() and not result.has_warnings():
        print("All validations passed!")
        print(f"{result.agents_checked} agents validated")
        return

    stream = sys.stderr if not result.passed(strict) else sys.stdout
    if result.has_errors():
        print(f"{result.error_count} error(s) found", file=stream)
    if result.has_warnings():
        print(f"{result.warning_count} warning(s) found", file=stream)
    print(f"{result.agents_checked} agents checked", file=stream)

    if strict and result.has_warnings() and not result.has_errors():
        print("Validation FAILED (--strict treats warnings as errors).", file=stream)
    elif not result.has_errors():
        print("Note: warnings do not fail validation. Use --strict to treat them as errors.", file=stream)


def print_text_report(result: ValidationResult, quiet: bool = False, strict: bool = False) -> None:
    """Print the human-readable report."""
    print_agent_statuses(result, quiet=quiet)
    print_core_statuses(result, quiet=quiet)
    print_summary(result, strict=strict)


# ============================================================================
# CLI and Main
# ============================================================================

def exit_code_for(result: ValidationResult, strict: bool = False) -> int:
    """Map a result to the process exit code."""
    if result.fatal:
        return EXIT_FATAL_ERROR
    return EXIT_SUCCESS if result.passed(strict) else EXIT_VALIDATION_FAILED


def main(argv: Optional[List[str]] = None) -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="RN Agents framework validator - check required agent and core files",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Exit Codes:
  0 - No errors (warnings allowed unless --strict)
  1 - Validation failed
  2 - Fatal error (agents/ directory missing, unreadable catalog)

Examples:
  rn-agents-validate
  rn-agents-validate --root .github
  rn-agents-validate --minimal --strict
        """
    )

    parser.add_argument(
        "--root",
        type=Path,
        default=None,
        help="Framework root containing agents/ (default: discovered from the current directory)"
    )

    parser.add_argument(
        "--minimal",
        action="store_true",
        help="Only check the minimal agent set"
    )

    parser.add_argument(
        "--strict",
        action="store_true",
        help="Treat warnings as failures"
    )

    parser.add_argument(
        "--json",
        action="store_true",
        help="Output machine-readable JSON with per-agent and per-core-file results"
    )

    parser.add_argument(
        "--report",
        choices=["json", "markdown"],
        help="Output format for validation report (json or markdown)"
    )

    parser.add_argument(
        "--quiet",
        "-q",
        action="store_true",
        help="Only print problems and the summary"
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug output with timing and validation steps"
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"validate_agents.py {__version__}"
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    wants_json = args.json or args.report == "json"

    try:
        result = run_validation(root=args.root, minimal=args.minimal)
    except CatalogError as e:
        if wants_json:
            print(json.dumps(build_error_output(f"Invalid agent catalog: {e}"), indent=2))
        print(f"ERROR: Invalid agent catalog: {e}", file=sys.stderr)
        sys.exit(EXIT_FATAL_ERROR)
    except Exception as e:
        if wants_json:
            print(json.dumps(build_error_output(f"Unexpected error: {e}"), indent=2))
        print(f"ERROR: Unexpected error during validation: {e}", file=sys.stderr)
        if args.debug:
            import traceback
            traceback.print_exc(file=sys.stderr)
        sys.exit(EXIT_FATAL_ERROR)

    if args.report == "json":
        print(json.dumps(build_report_json(result, strict=args.strict), indent=2))
    elif args.report == "markdown":
        print(build_report_markdown(result, strict=args.strict))
    elif args.json:
        print(json.dumps(build_json_output(result, strict=args.strict), indent=2))
    elif result.fatal:
        print_fatal(result)
    else:
        print_text_report(result, quiet=args.quiet, strict=args.strict)

    sys.exit(exit_code_for(result, strict=args.strict))


if __name__ == "__main__":
    main()
