"""
Seeded linear congruential generator used for weighted draws.
Each run owns its own instance so identical seeds give identical rosters.
"""

import secrets
from typing import Optional

MODULUS = 4294967296  # 2**32
MULTIPLIER = 1664525
INCREMENT = 1013904223


class LcgRandom:
    """Reproducible float stream in [0, 1)."""

    def __init__(self, seed: Optional[int] = None):
        if seed is None:
            seed = secrets.randbelow(MODULUS)
        self.initial_seed = int(seed) % MODULUS
        self.state = self.initial_seed
        self.draws = 0

    def random(self) -> float:
        self.state = (self.state * MULTIPLIER + INCREMENT) % MODULUS
        self.draws += 1
        return self.state / MODULUS

    __call__ = random
