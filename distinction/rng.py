import math
import random

from .errors import InvalidParameter


class RandomnessSource:
    """Uniform draws, coin flips and Bernoulli trials.

    With a seed every draw is reproducible; without one ``random.Random``
    seeds itself from OS entropy.
    """

    def __init__(self, seed: int | None = None):
        self.seed = seed
        self.rand = random.Random(seed)

    def uniform(self) -> float:
        return self.rand.random()

    def flip_coin(self) -> bool:
        return self.rand.random() < 0.5

    def bernoulli(self, p: float) -> bool:
        if math.isnan(p) or p < 0.0 or p > 1.0:
            raise InvalidParameter(f"probability must be in [0, 1], got {p}")
        return self.rand.random() < p

    def __repr__(self) -> str:
        return f"RandomnessSource(seed={self.seed!r})"
