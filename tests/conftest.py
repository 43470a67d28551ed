"""
Test fixtures and utilities for the RN Agents validator tests.

This module provides reusable fixtures for building temporary framework trees
(agents/ and _core/), writing agent files, and running the validator CLI.
"""

import os
import subprocess
import sys
from pathlib import Path
from typing import Dict, List, Optional

import pytest

from rnagents.config.catalog import load_catalog, reset_catalog

PROJECT_ROOT = Path(__file__).resolve().parent.parent

# ============================================================================
# Environment Isolation
# ============================================================================


@pytest.fixture(autouse=True)
def isolated_catalog(monkeypatch):
    """Clear catalog cache and RN_AGENTS_* overrides around every test."""
    monkeypatch.delenv("RN_AGENTS_ROOT", raising=False)
    monkeypatch.delenv("RN_AGENTS_CATALOG", raising=False)
    reset_catalog()
    yield
    reset_catalog()


# ============================================================================
# Framework Tree Fixtures
# ============================================================================


@pytest.fixture
def temp_framework(tmp_path):
    """
    Create a temporary framework root with empty agents/ and _core/ directories.
    """
    root = tmp_path / "framework"
    (root / "agents").mkdir(parents=True)
    (root / "_core").mkdir()
    return root


@pytest.fixture
def valid_framework(temp_framework):
    """
    Create a complete framework tree: every catalog agent well formed and
    every core file present.
    """
    catalog = load_catalog()
    for identifier in catalog.agents:
        create_agent_file(temp_framework, identifier)
    create_core_files(temp_framework)
    return temp_framework


# ============================================================================
# File Helpers
# ============================================================================


def well_formed_agent(identifier: str) -> str:
    return f"""---
name: {identifier}
description: {identifier} agent for React Native projects
---

You are the {identifier}.
"""


def create_agent_file(root: Path, identifier: str, content: Optional[str] = None) -> Path:
    """
    Write agents/<identifier>.md.

    Args:
        root: Framework root
        identifier: Agent identifier (without .md)
        content: File text (default: well-formed agent definition)
    """
    path = root / "agents" / f"{identifier}.md"
    path.write_text(well_formed_agent(identifier) if content is None else content)
    return path


def remove_agent_file(root: Path, identifier: str) -> None:
    (root / "agents" / f"{identifier}.md").unlink()


def create_core_files(root: Path, core_dir: Optional[Path] = None, skip: Optional[List[str]] = None) -> Path:
    """
    Write every catalog core file into ``core_dir`` (default: <root>/_core).

    Args:
        root: Framework root
        core_dir: Directory to write into
        skip: Core filenames to leave out
    """
    core_dir = core_dir or root / "_core"
    core_dir.mkdir(parents=True, exist_ok=True)
    skip = skip or []
    for filename in load_catalog().core:
        if filename in skip:
            continue
        (core_dir / filename).write_text(f"# {filename}\n\nShared context.\n")
    return core_dir


# ============================================================================
# Validation Runner Fixtures
# ============================================================================


@pytest.fixture
def run_validator():
    """
    Fixture that returns a function to run the validator CLI on a framework root.

    Returns:
        Function(root, flags=[], use_root_flag=True, env=None) -> CompletedProcess
    """
    def _run(
        root: Path,
        flags: Optional[List[str]] = None,
        use_root_flag: bool = True,
        env: Optional[Dict[str, str]] = None,
    ):
        """
        Run the validator CLI.

        Args:
            root: Framework root (passed as --root, and used as cwd)
            flags: Optional list of command-line flags
            use_root_flag: If False, rely on root discovery from cwd
            env: Extra environment variables (e.g. RN_AGENTS_CATALOG)
        """
        if flags is None:
            flags = []

        cmd = [sys.executable, "-m", "rnagents.tools.validate_agents"]
        if use_root_flag:
            cmd += ["--root", str(root)]
        cmd += flags

        run_env = {k: v for k, v in os.environ.items() if not k.startswith("RN_AGENTS_")}
        run_env["PYTHONPATH"] = os.pathsep.join(
            p for p in [str(PROJECT_ROOT), run_env.get("PYTHONPATH", "")] if p
        )
        if env:
            run_env.update(env)

        return subprocess.run(
            cmd,
            cwd=root if root.exists() else root.parent,
            capture_output=True,
            text=True,
            env=run_env,
        )

    return _run


# ============================================================================
# Assertion Helpers
# ============================================================================


def assert_validator_passed(result: subprocess.CompletedProcess):
    """Assert that validator passed (exit code 0)."""
    assert result.returncode == 0, f"Validator failed with stderr: {result.stderr}"


def assert_validator_failed(result: subprocess.CompletedProcess, code: int = 1):
    """Assert that validator failed with the given exit code."""
    assert result.returncode == code, (
        f"Expected exit {code}, got {result.returncode}. "
        f"Stdout: {result.stdout} Stderr: {result.stderr}"
    )


def assert_error_type(stderr: str, issue_type: str):
    """Assert that stderr contains an error of a specific type."""
    assert f"[FAIL] {issue_type}:" in stderr, f"Expected error type {issue_type} in stderr. Got: {stderr}"


def assert_warning_type(stderr: str, issue_type: str):
    """Assert that stderr contains a warning of a specific type."""
    assert f"[WARN] {issue_type}:" in stderr, f"Expected warning type {issue_type} in stderr. Got: {stderr}"
