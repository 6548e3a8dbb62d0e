"""
errors.py — Exception taxonomy for the valve release engine.

All of these are fatal: they abort before (or instead of) a search and are
never retried.
"""


class ValveParseError(ValueError):
    """A puzzle line does not match the valve grammar."""


class GraphStructureError(ValueError):
    """The valve table is not referentially complete or violates a reduced-graph invariant."""


class SearchDepthError(RuntimeError):
    """Recursion exceeded the configured safety net."""
