"""Data models for reducerless."""

from dataclasses import dataclass
from dataclasses import field
from enum import Enum
from typing import Any


class _Absent:
    """Marker type for a key that has no value."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "ABSENT"

    def __bool__(self) -> bool:
        return False

    def __reduce__(self):
        return (_Absent, ())


ABSENT: Any = _Absent()
"""Patch value that deletes a key (update) or resets it to its default (replace)."""


class NodeKind(Enum):
    """Kind of a state tree node.

    Only MAPPING nodes are traversed by a traced update; ARRAY and SCALAR
    nodes are always replaced as a whole.
    """

    MAPPING = "mapping"
    ARRAY = "array"
    SCALAR = "scalar"


class ActionKind(Enum):
    """How a section reducer treats an action."""

    UPDATE = "update"
    REPLACE = "replace"
    UNRECOGNIZED = "unrecognized"


@dataclass(frozen=True)
class Section:
    """Where a section lives in the global state and what its reset value is.

    Attributes:
        path: Key of the section in the global state
        default: Initial state of the section, also the fallback for replace actions

    Note:
        The default is shared by the reducer and the replace action creator.
        It must not be mutated after the section is created.
    """

    path: str
    default: Any = field(default_factory=dict)


@dataclass(frozen=True)
class Action:
    """Action record consumed by an external dispatcher.

    Only the prefix of ``type`` (section path plus marker) carries meaning.
    The rest of it is a human readable title and the list of changed keys.
    """

    type: str
    payload: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "payload": self.payload}
