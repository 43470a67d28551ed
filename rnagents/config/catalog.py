"""Agent catalog and framework layout configuration.

The catalog lists the agent identifiers and core context documents that a
complete framework install must contain. It ships as ``catalog.yaml`` next to
this module; environment variables take precedence over the shipped file.

Usage:
    from rnagents.config.catalog import load_catalog, find_framework_root, resolve_layout

    catalog = load_catalog()
    layout = resolve_layout(find_framework_root())
    for identifier in catalog.select_agents(minimal=False):
        ...

Environment variables:
    RN_AGENTS_CATALOG   Path to an alternate catalog YAML file
    RN_AGENTS_ROOT      Framework root directory (skips discovery)
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from rnagents.validator.markers import (
    DESCRIPTION_MARKER,
    FRONTMATTER_DELIMITER,
    NAME_MARKER,
)

logger = logging.getLogger(__name__)

_CATALOG_PATH = Path(__file__).parent / "catalog.yaml"
_cached_catalog: Optional["Catalog"] = None

CATALOG_ENV_VAR = "RN_AGENTS_CATALOG"
ROOT_ENV_VAR = "RN_AGENTS_ROOT"

AGENTS_DIRNAME = "agents"
CORE_DIRNAME = "_core"


class CatalogError(ValueError):
    """Raised when the catalog file is missing required data or inconsistent."""


@dataclass
class Catalog:
    """Required agents, core documents and content markers."""

    agents: List[str]
    core: List[str]
    minimal: List[str] = field(default_factory=list)
    frontmatter_marker: str = FRONTMATTER_DELIMITER
    name_marker: str = NAME_MARKER
    description_marker: str = DESCRIPTION_MARKER
    source: str = "default"

    def select_agents(self, minimal: bool = False) -> List[str]:
        """Return identifiers to check, in catalog order.

        Raises CatalogError when a minimal run is requested but the catalog
        defines no minimal set.
        """
        if not minimal:
            return list(self.agents)
        if not self.minimal:
            raise CatalogError(f"{self.source}: no 'minimal' agent set defined")
        wanted = set(self.minimal)
        return [a for a in self.agents if a in wanted]

    def validate(self) -> None:
        """Raise CatalogError if the catalog is unusable."""
        if not self.agents:
            raise CatalogError(f"{self.source}: 'agents' must list at least one identifier")
        _check_unique_names(self.agents, "agents", self.source)
        _check_unique_names(self.core, "core", self.source)
        _check_unique_names(self.minimal, "minimal", self.source)

        unknown = [m for m in self.minimal if m not in self.agents]
        if unknown:
            raise CatalogError(
                f"{self.source}: minimal set references unknown agents: {', '.join(unknown)}"
            )

        for label, marker in (
            ("frontmatter", self.frontmatter_marker),
            ("name", self.name_marker),
            ("description", self.description_marker),
        ):
            if not isinstance(marker, str) or not marker:
                raise CatalogError(f"{self.source}: marker '{label}' must be a non-empty string")


def _check_unique_names(values: Any, key: str, source: str) -> None:
    if not isinstance(values, list):
        raise CatalogError(f"{source}: '{key}' must be a list")
    seen = set()
    for value in values:
        if not isinstance(value, str) or not value.strip():
            raise CatalogError(f"{source}: '{key}' entries must be non-empty strings, got {value!r}")
        if value in seen:
            raise CatalogError(f"{source}: duplicate entry '{value}' in '{key}'")
        seen.add(value)


def _default_catalog() -> Dict[str, Any]:
    """Return default catalog data if catalog.yaml doesn't exist."""
    return {
        "version": "1.0",
        "agents": [
            "orchestrator",
            "product-manager",
            "solution-architect",
            "mobile-architect",
            "backend-architect",
            "data-engineer",
            "native-modules-engineer",
            "performance-optimizer",
            "eas-specialist",
            "offline-architect",
            "security-guardian",
            "test-engineer",
            "qa-lead",
            "observability-engineer",
            "release-manager",
            "ai-integration-engineer",
            "code-reviewer",
            "documentation-engineer",
        ],
        "minimal": [
            "orchestrator",
            "product-manager",
            "solution-architect",
            "mobile-architect",
            "backend-architect",
            "code-reviewer",
        ],
        "core": [
            "_framework-context.md",
            "_shared-solid-principles.md",
            "_shared-data-modeling.md",
            "_shared-workflows.md",
            "_conflict-resolution.md",
        ],
    }


def catalog_from_dict(data: Any, source: str = "default") -> Catalog:
    """Build and validate a Catalog from parsed YAML data."""
    if not isinstance(data, dict):
        raise CatalogError(f"{source}: catalog must be a mapping")

    markers = data.get("markers") or {}
    if not isinstance(markers, dict):
        raise CatalogError(f"{source}: 'markers' must be a mapping")

    catalog = Catalog(
        agents=data.get("agents") or [],
        core=data.get("core") or [],
        minimal=data.get("minimal") or [],
        frontmatter_marker=markers.get("frontmatter", FRONTMATTER_DELIMITER),
        name_marker=markers.get("name", NAME_MARKER),
        description_marker=markers.get("description", DESCRIPTION_MARKER),
        source=source,
    )
    catalog.validate()
    return catalog


def load_catalog(path: Optional[Path] = None) -> Catalog:
    """Load the catalog, with caching for the default location.

    Precedence: explicit ``path`` > RN_AGENTS_CATALOG > shipped catalog.yaml >
    built-in defaults.
    """
    global _cached_catalog

    if path is None:
        env_path = os.environ.get(CATALOG_ENV_VAR)
        if env_path:
            path = Path(env_path)

    if path is not None:
        if not path.is_file():
            raise CatalogError(f"catalog file not found: {path}")
        return _read_catalog(path)

    if _cached_catalog is not None:
        return _cached_catalog

    if _CATALOG_PATH.exists():
        _cached_catalog = _read_catalog(_CATALOG_PATH)
    else:
        logger.debug("No catalog.yaml shipped, using built-in defaults")
        _cached_catalog = catalog_from_dict(_default_catalog())

    return _cached_catalog


def _read_catalog(path: Path) -> Catalog:
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise CatalogError(f"{path}: YAML parse error: {e}") from e

    catalog = catalog_from_dict(data, source=str(path))
    logger.debug(
        "Loaded catalog %s: %d agents, %d core files",
        path,
        len(catalog.agents),
        len(catalog.core),
    )
    return catalog


def reset_catalog() -> None:
    """Reset cached catalog (for testing)."""
    global _cached_catalog
    _cached_catalog = None


# =============================================================================
# Framework layout
# =============================================================================


@dataclass(frozen=True)
class FrameworkLayout:
    """Directories a validation run reads from."""

    root: Path
    agents_dir: Path
    core_dir: Path

    def display(self, path: Path) -> str:
        """Path relative to the framework root, for messages."""
        try:
            return path.relative_to(self.root).as_posix()
        except ValueError:
            return str(path)


def find_framework_root(start: Optional[Path] = None) -> Path:
    """Find the framework root by looking for an ``agents/`` directory.

    RN_AGENTS_ROOT, when set, is returned as-is. Otherwise ``start`` (default:
    current directory) and its parents are searched; if none contains
    ``agents/``, ``start`` is returned so the missing directory is reported
    against it.
    """
    env_root = os.environ.get(ROOT_ENV_VAR)
    if env_root:
        return Path(env_root).resolve()

    current = (start or Path.cwd()).resolve()
    for path in [current] + list(current.parents):
        if (path / AGENTS_DIRNAME).is_dir():
            return path

    return current


def resolve_layout(root: Path) -> FrameworkLayout:
    """Resolve agents and core directories under ``root``.

    The installed layout nests core files inside the agents directory
    (``agents/_core``); the framework source tree keeps them at ``_core``.
    """
    root = root.resolve()
    agents_dir = root / AGENTS_DIRNAME
    nested_core = agents_dir / CORE_DIRNAME
    core_dir = nested_core if nested_core.is_dir() else root / CORE_DIRNAME
    logger.debug("Resolved layout: agents=%s core=%s", agents_dir, core_dir)
    return FrameworkLayout(root=root, agents_dir=agents_dir, core_dir=core_dir)
