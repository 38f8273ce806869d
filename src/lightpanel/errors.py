from __future__ import annotations

from typing import Optional


class SolverError(Exception):
    """Base class for every failure to solve a machine."""

    pass


class OutOfRangeIndexError(SolverError, IndexError):
    """Raised when a button is wired to a light the machine does not have."""

    def __init__(self, button: int, light: int, n_lights: int):
        super().__init__(
            f"button {button} toggles light {light}, "
            f"but the machine only has lights 0..{n_lights - 1}"
        )
        self.button = button
        self.light = light
        self.n_lights = n_lights

    def __reduce__(self):
        return type(self), (self.button, self.light, self.n_lights)


class InconsistentSystemError(SolverError):
    """Raised when no combination of presses reaches the target pattern."""

    def __init__(self, row: Optional[int] = None):
        if row is None:
            msg = "target pattern is unreachable"
        else:
            msg = f"row {row} reduces to 0 = 1: target pattern is unreachable"
        super().__init__(msg)
        self.row = row

    def __reduce__(self):
        return type(self), (self.row,)


class TooManyFreeVariablesError(SolverError):
    """Raised instead of enumerating a solution space that is too large."""

    def __init__(self, n_free: int, limit: int):
        super().__init__(
            f"{n_free} free variables exceed the limit of {limit} "
            f"({2 ** n_free} candidate solutions)"
        )
        self.n_free = n_free
        self.limit = limit

    def __reduce__(self):
        return type(self), (self.n_free, self.limit)


class ConfigError(SolverError, ValueError):
    """Raised for malformed solver settings or machine entries."""

    pass


class TooManyButtonsError(SolverError):
    """Raised when an exhaustive search would have to try too many subsets."""

    def __init__(self, n_buttons: int, limit: int):
        super().__init__(
            f"{n_buttons} buttons exceed the exhaustive-search limit of {limit} "
            f"({2 ** n_buttons} subsets)"
        )
        self.n_buttons = n_buttons
        self.limit = limit

    def __reduce__(self):
        return type(self), (self.n_buttons, self.limit)
