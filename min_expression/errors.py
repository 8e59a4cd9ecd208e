"""Exceptions raised by the search engine and its configuration layer."""


class ConfigurationError(ValueError):
    """The search configuration is unusable (rejected before the search starts)."""


class SearchInvariantError(RuntimeError):
    """
    An internal invariant of the search was violated.

    This always indicates a bug in the engine (or a caller breaking a
    store's contract), never a property of the input. The run is aborted
    because continuing could silently produce a wrong answer.
    """
