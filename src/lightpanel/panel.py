from __future__ import annotations

import operator
from typing import Iterable, Sequence

import numpy as np


def light_index(i) -> int:
    """Return i as a plain int; bools and non-integral numbers are rejected."""
    if isinstance(i, (bool, np.bool_)):
        raise TypeError(f"light index must be an integer, not {i!r}")
    return operator.index(i)


class Machine:
    """Indicator lights, the pattern they must show and the buttons wired to them.

    All lights start off. Button j toggles every light index in buttons[j].
    """

    def __init__(
        self,
        target: Sequence[bool] | np.ndarray,
        buttons: Iterable[Iterable[int]],
    ):
        self.target: tuple[bool, ...] = tuple(bool(x) for x in target)
        self.buttons: tuple[frozenset[int], ...] = tuple(
            frozenset(light_index(i) for i in b) for b in buttons
        )

    @property
    def n_lights(self) -> int:
        return len(self.target)

    @property
    def n_buttons(self) -> int:
        return len(self.buttons)

    def target_bits(self) -> np.ndarray:
        return np.array(self.target, dtype=np.uint8)

    def press(self, presses: Sequence[int] | np.ndarray) -> np.ndarray:
        """Return the light pattern after pressing every button with a 1 in presses."""
        assert len(presses) == self.n_buttons
        lights = np.zeros(self.n_lights, dtype=np.uint8)
        for j in np.flatnonzero(np.asarray(presses)):
            for i in self.buttons[j]:
                lights[i] ^= 1
        return lights

    def __eq__(self, other) -> bool:
        if not isinstance(other, Machine):
            return NotImplemented
        return self.target == other.target and self.buttons == other.buttons

    def __hash__(self) -> int:
        return hash((self.target, self.buttons))

    def __repr__(self):
        return (
            f"Machine(lights={self.n_lights}, buttons={self.n_buttons}, "
            f"on={sum(self.target)})"
        )

    def __str__(self) -> str:
        lights = "".join("#" if on else "." for on in self.target)
        wiring = " ".join(
            "(" + ",".join(str(i) for i in sorted(b)) + ")" for b in self.buttons
        )
        return f"[{lights}] {wiring}".rstrip()
