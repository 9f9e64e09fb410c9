"""reducerless: store sections without hand-written reducers.

This library builds the pure parts of a unidirectional state store for
named sections of a shared state tree, and provides the traced update
that keeps untouched subtrees shared between consecutive states.

Public API:
    create_store_section: Reducer, selector and action creators for a section
    SectionRegistry: Several sections, YAML defaults and state snapshots
    traced_update: Structural-sharing deep merge with key deletion
    deep_freeze, deep_clone: Helpers for immutable fixtures and copies
    ABSENT: Patch value that deletes (update) or resets (replace) a key
    Action, ActionKind, NodeKind, Section, SectionBundle: Data types
    ReducerlessError, SectionError, PatchError, CloneError, StoreFileError: Exception types

Example:
    ```python
    from reducerless import ABSENT, create_store_section

    # The store itself (dispatch, combine reducers) is provided by the application
    todos = create_store_section("todos", {"items": [], "filter": "all"})

    store.dispatch(todos.update({"filter": "done"}, "pick filter"))
    store.dispatch(todos.replace({"filter": ABSENT}))  # back to "all"

    todos.select(store.get_state())
    ```
"""

from .exceptions import CloneError
from .exceptions import PatchError
from .exceptions import ReducerlessError
from .exceptions import SectionError
from .exceptions import StoreFileError
from .models import ABSENT
from .models import Action
from .models import ActionKind
from .models import NodeKind
from .models import Section
from .registry import SectionRegistry
from .section import REPLACE_MARK
from .section import UPDATE_MARK
from .section import SectionBundle
from .section import create_store_section
from .section import decode_action_kind
from .utils import deep_clone
from .utils import deep_freeze
from .utils import node_kind
from .utils import traced_update

__version__ = "0.1.0"

__all__ = [
    "create_store_section",
    "decode_action_kind",
    "SectionRegistry",
    "SectionBundle",
    "Section",
    "Action",
    "ActionKind",
    "NodeKind",
    "ABSENT",
    "UPDATE_MARK",
    "REPLACE_MARK",
    "traced_update",
    "node_kind",
    "deep_freeze",
    "deep_clone",
    "ReducerlessError",
    "SectionError",
    "PatchError",
    "CloneError",
    "StoreFileError",
]
