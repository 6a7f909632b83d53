"""Seeded pseudo-random generator used for initial center selection."""

import time

# Linear congruential generator constants
A = 6364136223846793005
C = 1442695040888963407
M = 2 ** 63

_U64_MASK = (1 << 64) - 1


class Lcg:
    """Linear congruential generator: ``state = (A * state + C) mod 2**63``.

    The generator is deterministic for a given seed and owns its state, so
    callers pass an instance explicitly rather than relying on a global.
    """

    def __init__(self, seed: int):
        self._state = int(seed) & _U64_MASK

    @property
    def state(self) -> int:
        return self._state

    def next(self) -> int:
        """Advance the state and return it."""
        self._state = (A * self._state + C) % M
        return self._state


def unix_timestamp() -> int:
    """Current Unix time in whole seconds."""
    return int(time.time())
