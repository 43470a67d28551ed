"""
Test suite for core context file validation and framework structure.

Scenarios covered:
- Missing _core/ directory is exactly one error, no per-file checks
- N missing core files are exactly N errors
- Installed layout (agents/_core) is preferred over _core
- Missing agents/ directory is fatal and stops all checks
"""

import shutil

from conftest import create_core_files
from rnagents.config.catalog import load_catalog, resolve_layout
from rnagents.tools.validate_agents import run_validation
from rnagents.validator import CORE, STRUCTURE


def test_missing_core_directory_is_one_error(valid_framework):
    shutil.rmtree(valid_framework / "_core")

    result = run_validation(root=valid_framework)

    assert result.error_count == 1
    assert result.errors[0].issue_type == CORE
    assert result.errors[0].location == "_core/"
    assert result.core_dir_found is False
    assert result.core == []


def test_missing_core_files_counted_individually(valid_framework):
    missing = ["_shared-workflows.md", "_conflict-resolution.md"]
    for filename in missing:
        (valid_framework / "_core" / filename).unlink()

    result = run_validation(root=valid_framework)

    assert result.error_count == 2
    assert [e.subject for e in result.errors] == missing
    assert all(e.issue_type == CORE for e in result.errors)

    present = [c.filename for c in result.core if c.exists]
    assert len(present) == 3
    assert len(result.core) == len(load_catalog().core)


def test_core_errors_do_not_affect_agent_checks(valid_framework):
    shutil.rmtree(valid_framework / "_core")

    result = run_validation(root=valid_framework)
    assert len(result.agents) == 18
    assert all(s.ok for s in result.agents)


def test_installed_layout_nests_core_in_agents(valid_framework):
    shutil.rmtree(valid_framework / "_core")
    create_core_files(valid_framework, core_dir=valid_framework / "agents" / "_core")

    layout = resolve_layout(valid_framework)
    assert layout.core_dir == (valid_framework / "agents" / "_core").resolve()

    result = run_validation(root=valid_framework)
    assert result.error_count == 0
    assert result.warning_count == 0


def test_source_layout_uses_root_core(valid_framework):
    layout = resolve_layout(valid_framework)
    assert layout.core_dir == (valid_framework / "_core").resolve()


def test_missing_agents_directory_is_fatal(tmp_path):
    root = tmp_path / "empty"
    root.mkdir()
    create_core_files(root)

    result = run_validation(root=root)

    assert result.fatal
    assert result.error_count == 1
    assert result.errors[0].issue_type == STRUCTURE
    assert result.errors[0].location == "agents/"
    # No per-identifier or core checks ran
    assert result.agents == []
    assert result.core == []
    assert result.core_dir_found is None
    assert not result.passed()
