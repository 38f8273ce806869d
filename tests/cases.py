import numpy as np

from lightpanel.panel import Machine

# (target, buttons, minimum presses)
EXAMPLE_MACHINES = [
    # [.##.] (3) (1,3) (2) (2,3) (0,2) (0,1)
    (
        [False, True, True, False],
        [[3], [1, 3], [2], [2, 3], [0, 2], [0, 1]],
        2,
    ),
    # [...#.] (0,2,3,4) (2,3) (0,4) (0,1,2) (1,2,3,4)
    (
        [False, False, False, True, False],
        [[0, 2, 3, 4], [2, 3], [0, 4], [0, 1, 2], [1, 2, 3, 4]],
        3,
    ),
    # [.###.#] (0,1,2,3,4) (0,3,4) (0,1,2,4,5) (1,2)
    (
        [False, True, True, True, False, True],
        [[0, 1, 2, 3, 4], [0, 3, 4], [0, 1, 2, 4, 5], [1, 2]],
        2,
    ),
]


def random_machine(rng: np.random.Generator, n_lights: int, n_buttons: int):
    """Random wiring and target; the target is not necessarily reachable."""
    buttons = []
    for _ in range(n_buttons):
        size = int(rng.integers(1, n_lights + 1))
        buttons.append(
            sorted(rng.choice(n_lights, size=size, replace=False).tolist())
        )
    target = rng.integers(0, 2, size=n_lights).astype(bool)
    return Machine(target, buttons)


def reachable_machine(rng: np.random.Generator, n_lights: int, n_buttons: int):
    """Random wiring with a target produced by pressing a random subset."""
    m = random_machine(rng, n_lights, n_buttons)
    presses = rng.integers(0, 2, size=n_buttons)
    return Machine(m.press(presses).astype(bool), m.buttons)
