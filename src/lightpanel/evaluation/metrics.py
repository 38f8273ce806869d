from __future__ import annotations

import numpy as np

from ..panel import Machine


def hamming_weight(bits) -> int:
    return int(np.count_nonzero(np.asarray(bits)))


def reproduces_target(machine: Machine, presses) -> bool:
    # XOR of the toggle sets of every pressed button must equal the target
    return bool(np.array_equal(machine.press(presses), machine.target_bits()))
