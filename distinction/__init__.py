"""
Distinction - streaming distinct-element counting

Bounded-memory F0 estimation with the Chakraborty-Vinodchandran-Meel sampler.
"""

__version__ = "0.1.0"

from distinction.errors import (
    DistinctionError,
    InvalidParameter,
    ElementTypeError,
    EstimationFailed,
    QueryError,
)
from distinction.rng import RandomnessSource
from distinction.estimator import DistinctCounter, estimate, threshold

__all__ = [
    "__version__",
    "DistinctionError",
    "InvalidParameter",
    "ElementTypeError",
    "EstimationFailed",
    "QueryError",
    "RandomnessSource",
    "DistinctCounter",
    "estimate",
    "threshold",
]
