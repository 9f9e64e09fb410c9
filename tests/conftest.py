"""Shared fixtures and a minimal store for reducerless tests."""

from collections.abc import Callable
from collections.abc import Mapping
from typing import Any

import pytest
from reducerless import ABSENT

SECTION1_DEFAULTS = {
    "a1": ["x", "y"],
    "a2": {
        "a21": {"flag": True},
        "a22": {"a221": 1, "a222": {"deep": [1, 2]}, "a223": 3},
        "a23": [4, 5],
    },
    "a3": {"a31": [6, 7], "a32": {"name": "z"}},
}


def combine_reducers(reducers: Mapping[str, Callable[..., Any]]) -> Callable[..., dict[str, Any]]:
    """Stand-in for the store's facility that combines section reducers."""

    def root(state: Mapping[str, Any] | None = None, action: Any = None) -> dict[str, Any]:
        state = state or {}
        return {path: reduce(state.get(path, ABSENT), action) for path, reduce in reducers.items()}

    return root


class Store:
    """Single-writer store: installs whatever the root reducer returns."""

    def __init__(self, reducers: Mapping[str, Callable[..., Any]]):
        self._reduce = combine_reducers(reducers)
        self._state = self._reduce(None, {"type": "@@INIT"})

    def get_state(self) -> dict[str, Any]:
        return self._state

    def dispatch(self, action: Any) -> None:
        self._state = self._reduce(self._state, action)


@pytest.fixture
def section1_defaults():
    """Nested defaults shared by section and merge tests."""
    return SECTION1_DEFAULTS


@pytest.fixture
def make_store():
    """Build a Store from one or more single-key reducer mappings."""

    def build(*reducer_maps):
        merged = {}
        for reducer_map in reducer_maps:
            merged.update(reducer_map)
        return Store(merged)

    return build
