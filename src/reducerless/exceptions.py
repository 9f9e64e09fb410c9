"""Exceptions for reducerless."""


class ReducerlessError(Exception):
    """Base exception for reducerless errors."""

    pass


class SectionError(ReducerlessError, ValueError):
    """Invalid store section path or duplicate section registration."""

    pass


class PatchError(ReducerlessError, TypeError):
    """Patch passed to a traced update is not a mapping."""

    pass


class CloneError(ReducerlessError, ValueError):
    """Object graph cannot survive a textual round trip."""

    pass


class StoreFileError(ReducerlessError):
    """Error reading or writing a defaults or snapshot file."""

    pass
