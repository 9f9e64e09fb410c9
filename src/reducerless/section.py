"""Reducer, selector and action creators for one section of a store."""

import logging
from collections.abc import Callable
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from .exceptions import SectionError
from .models import ABSENT
from .models import Action
from .models import ActionKind
from .models import NodeKind
from .models import Section
from .utils import node_kind
from .utils import traced_update

logger = logging.getLogger(__name__)

UPDATE_MARK = " ~> "
REPLACE_MARK = " => "

Reducer = Callable[..., Any]
ActionCreator = Callable[..., Action]


@dataclass(frozen=True)
class SectionBundle:
    """Everything needed to wire a section into a store.

    Attributes:
        section: Section descriptor (path and default state)
        reducer: Single-key mapping {path: reduce}, to be merged with other
            sections' mappings before combining reducers
        select: Projection of the global state onto the section
        update: Creates actions that are traced into the section state
        replace: Creates actions that overwrite top-level keys of the section
    """

    section: Section
    reducer: dict[str, Reducer]
    select: Callable[[Mapping[str, Any]], Any]
    update: ActionCreator
    replace: ActionCreator


def create_store_section(path: str, default: Any = None) -> SectionBundle:
    """Create reducer, selector and action creators for a store section.

    Args:
        path: Key of the section in the global state
        default: Initial state of the section (default: empty mapping)

    Returns:
        SectionBundle closed over path and default

    Raises:
        SectionError: If path is empty or contains an action type marker

    Example:
        ```python
        todos = create_store_section("todos", {"items": [], "filter": "all"})
        store.dispatch(todos.update({"filter": "done"}, "pick filter"))
        todos.select(store.get_state())
        ```
    """
    _validate_path(path)
    section = Section(path=path, default={} if default is None else default)

    return SectionBundle(
        section=section,
        reducer=_new_reducer(section),
        select=_new_selector(section.path),
        update=_new_action_creator(section.path, UPDATE_MARK),
        replace=_new_action_creator(section.path, REPLACE_MARK, section.default),
    )


def action_type(path: str, mark: str, title: str = "") -> str:
    """Build an action type string: path, marker and free-form title."""
    return path + mark + title


def decode_action_kind(path: str, type_: str) -> ActionKind:
    """Tell how the section at path should treat an action type.

    Args:
        path: Section path
        type_: Action type string

    Returns:
        ActionKind.UPDATE or ActionKind.REPLACE when the type belongs to the
        section, ActionKind.UNRECOGNIZED otherwise
    """
    if type_.startswith(action_type(path, UPDATE_MARK)):
        return ActionKind.UPDATE
    if type_.startswith(action_type(path, REPLACE_MARK)):
        return ActionKind.REPLACE
    return ActionKind.UNRECOGNIZED


# ===== Private Helpers =====


def _validate_path(path: str) -> None:
    if not isinstance(path, str) or not path:
        raise SectionError(f"Section path must be a non-empty string, got {path!r}")
    for mark in (UPDATE_MARK, REPLACE_MARK):
        if mark in path:
            raise SectionError(f"Section path {path!r} must not contain {mark.strip()!r}")


def _unpack(action: Action | Mapping[str, Any]) -> tuple[str, Any]:
    if isinstance(action, Action):
        return action.type, action.payload
    return action["type"], action.get("payload")


def _new_reducer(section: Section) -> dict[str, Reducer]:
    path = section.path

    def reduce(state: Any = ABSENT, action: Action | Mapping[str, Any] | None = None) -> Any:
        if state is ABSENT:
            state = section.default
        if action is None:
            return state

        type_, payload = _unpack(action)
        kind = decode_action_kind(path, type_)

        if kind is ActionKind.UPDATE:
            logger.debug(f"Tracing update into section '{path}': {type_}")
            return traced_update(state, payload)

        if kind is ActionKind.REPLACE:
            logger.debug(f"Replacing top-level keys of section '{path}': {type_}")
            current = state if node_kind(state) is NodeKind.MAPPING else {}
            replaced = {**current, **(payload or {})}
            # Keys reset to a default that does not exist are dropped
            return {key: value for key, value in replaced.items() if value is not ABSENT}

        return state

    return {path: reduce}


def _new_selector(path: str) -> Callable[[Mapping[str, Any]], Any]:
    def select(state: Mapping[str, Any]) -> Any:
        return state[path]

    return select


def _new_action_creator(path: str, mark: str, base: Mapping[str, Any] | None = None) -> ActionCreator:
    if node_kind(base) is not NodeKind.MAPPING:
        base = {}

    def create(change: Mapping[str, Any], title: str = "") -> Action:
        keys = ",".join(str(key) for key in change)
        type_ = action_type(path, mark, f"{title} [ {keys} ]".strip())
        payload = {key: base.get(key, ABSENT) if value is ABSENT else value for key, value in change.items()}
        return Action(type=type_, payload=payload)

    return create
