"""
Defaults for the estimator and its command line tools.

Environment variables override the defaults:
DISTINCTION_EPS, DISTINCTION_DELTA, DISTINCTION_SEED,
DISTINCTION_CHUNKSIZE, DISTINCTION_LOG_LEVEL.
"""

import os
from dataclasses import dataclass
from typing import Optional

from .errors import InvalidParameter


@dataclass
class EstimatorConfig:
    """Estimator settings shared by the CLI, benchmark and UI."""

    eps: float = 0.1
    delta: float = 0.005
    seed: Optional[int] = None
    chunksize: int = 1_000_000   # rows per pandas chunk when streaming files
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> "EstimatorConfig":
        """Create config from environment variables."""
        config = cls()

        if eps := os.environ.get("DISTINCTION_EPS"):
            config.eps = _number("DISTINCTION_EPS", eps, float)
        if delta := os.environ.get("DISTINCTION_DELTA"):
            config.delta = _number("DISTINCTION_DELTA", delta, float)
        if seed := os.environ.get("DISTINCTION_SEED"):
            config.seed = _number("DISTINCTION_SEED", seed, int)
        if chunksize := os.environ.get("DISTINCTION_CHUNKSIZE"):
            config.chunksize = _number("DISTINCTION_CHUNKSIZE", chunksize, int)
        if level := os.environ.get("DISTINCTION_LOG_LEVEL"):
            config.log_level = level.upper()

        return config


def _number(name: str, raw: str, kind):
    try:
        return kind(raw)
    except ValueError as exc:
        raise InvalidParameter(f"{name}={raw!r} is not a valid {kind.__name__}") from exc
