"""Registry of store sections, with YAML defaults and state snapshots."""

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from .exceptions import SectionError
from .exceptions import StoreFileError
from .section import Reducer
from .section import SectionBundle
from .section import create_store_section
from .utils import deep_clone

logger = logging.getLogger(__name__)


class SectionRegistry:
    """Keeps the sections that make up one store.

    Each registered section owns one top-level key of the global state.
    The registry hands out the merged reducer mapping for an external
    combine facility, and the initial global state built from the section
    defaults. Defaults can be declared in code or in a YAML file where
    every top-level key is a section path.

    Example:
        ```python
        registry = SectionRegistry.from_yaml(Path("store-defaults.yaml"))
        todos = registry.register("todos", {"items": []})
        store = create_store(combine_reducers(registry.reducers()), registry.initial_state())
        ```
    """

    def __init__(self):
        self._sections: dict[str, SectionBundle] = {}

    @classmethod
    def from_yaml(cls, path: Path) -> "SectionRegistry":
        """Create a registry from a YAML defaults file.

        Args:
            path: YAML file mapping section paths to their default state

        Returns:
            Registry with one section per top-level key (empty if the file is missing)

        Raises:
            StoreFileError: If the file cannot be parsed or is not a mapping
        """
        registry = cls()
        defaults = _read_yaml(path)
        if defaults is None:
            logger.warning(f"Section defaults file {path} not found - no sections registered")
            return registry

        if not isinstance(defaults, Mapping):
            raise StoreFileError(f"Section defaults in {path} must be a mapping, got {type(defaults).__name__}")

        for section_path, default in defaults.items():
            registry.register(str(section_path), default)
        return registry

    # ===== Sections =====

    def register(self, path: str, default: Any = None) -> SectionBundle:
        """Create and register a section.

        Args:
            path: Key of the section in the global state
            default: Initial state of the section (default: empty mapping)

        Returns:
            The new SectionBundle

        Raises:
            SectionError: If path is invalid or already registered
        """
        if path in self._sections:
            raise SectionError(f"Section '{path}' is already registered")

        bundle = create_store_section(path, default)
        self._sections[path] = bundle
        logger.info(f"Registered store section '{path}'")
        return bundle

    def get(self, path: str) -> SectionBundle | None:
        """Get a registered section, or None if there is no such section."""
        return self._sections.get(path)

    def paths(self) -> list[str]:
        return list(self._sections)

    def __contains__(self, path: object) -> bool:
        return path in self._sections

    def __len__(self) -> int:
        return len(self._sections)

    # ===== Store Wiring =====

    def reducers(self) -> dict[str, Reducer]:
        """Merge the single-key reducer mappings of all sections.

        Returns:
            Dictionary mapping section path -> reducer
        """
        merged: dict[str, Reducer] = {}
        for bundle in self._sections.values():
            merged.update(bundle.reducer)
        return merged

    def initial_state(self) -> dict[str, Any]:
        """Global state made of every section's default."""
        return {path: bundle.section.default for path, bundle in self._sections.items()}

    # ===== Snapshots =====

    def save_snapshot(self, state: Mapping[str, Any], path: Path) -> None:
        """Write the registered sections of a global state to a YAML file.

        Sections missing from the state are skipped, keys that belong to
        no registered section are not written.

        Args:
            state: Global state
            path: Target YAML file (parent directories are created)

        Raises:
            StoreFileError: If the state cannot be serialized or written
        """
        snapshot = {key: value for key, value in state.items() if key in self._sections}
        try:
            data = deep_clone(snapshot)
        except ValueError as e:
            raise StoreFileError(f"Cannot snapshot store state: {e}") from e

        _write_yaml(path, data)
        logger.info(f"Saved snapshot of {len(data)} section(s) to {path}")

    def load_snapshot(self, path: Path) -> dict[str, Any] | None:
        """Read a snapshot written by save_snapshot.

        Args:
            path: YAML snapshot file

        Returns:
            Global state with registered sections only, or None if the file doesn't exist

        Raises:
            StoreFileError: If the file cannot be parsed or is not a mapping
        """
        data = _read_yaml(path)
        if data is None:
            return None
        if not isinstance(data, Mapping):
            raise StoreFileError(f"Snapshot in {path} must be a mapping, got {type(data).__name__}")

        unknown = [key for key in data if key not in self._sections]
        if unknown:
            logger.warning(f"Ignoring unregistered sections in snapshot {path}: {', '.join(map(str, unknown))}")
        return {key: value for key, value in data.items() if key in self._sections}


# ===== Private Helpers =====


def _read_yaml(path: Path) -> Any:
    """Read YAML file.

    Args:
        path: Path to YAML file

    Returns:
        Parsed document ({} for an empty file) or None if file doesn't exist

    Raises:
        StoreFileError: If the file cannot be read or parsed
    """
    if not path.exists():
        return None

    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise StoreFileError(f"Failed to read {path}: {e}") from e
    return {} if data is None else data


def _write_yaml(path: Path, data: dict[str, Any]) -> None:
    """Write YAML file.

    Args:
        path: Path to YAML file
        data: Dictionary to write

    Raises:
        StoreFileError: If write fails
    """
    # Ensure directory exists
    path.parent.mkdir(parents=True, exist_ok=True)

    try:
        with open(path, "w") as f:
            yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False)
    except (OSError, yaml.YAMLError) as e:
        raise StoreFileError(f"Failed to write {path}: {e}") from e
