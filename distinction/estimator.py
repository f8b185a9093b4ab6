"""
Distinct-elements (F0) estimation after Chakraborty, Vinodchandran and Meel,
https://arxiv.org/abs/2301.10191.

The sample holds at most ``thresh`` elements. Every new element enters with
probability ``p``; whenever the sample fills up, each member survives a coin
flip and ``p`` is halved. At the end ``len(sample) / p`` estimates the number
of distinct elements to within a factor of (1 ± eps) with probability at least
1 - delta.
"""
from __future__ import annotations

import logging
import math
from typing import Any, Hashable, Iterable, List, Optional

from .errors import ElementTypeError, EstimationFailed, InvalidParameter
from .rng import RandomnessSource

logger = logging.getLogger(__name__)


def _check_open_unit(name: str, value: float) -> None:
    # NaN fails both comparisons
    if not (0.0 < value < 1.0):
        raise InvalidParameter(f"{name} must be in (0, 1), got {value}")


def threshold(eps: float, delta: float, stream_length: Optional[int] = None) -> int:
    """Sample capacity for the requested accuracy and confidence.

    ``ceil(12 / eps**2 * log2(8 * m / delta))`` where ``m`` is the stream
    length when known and 1 otherwise.
    """
    _check_open_unit("eps", eps)
    _check_open_unit("delta", delta)
    if stream_length is None:
        m = 1
    else:
        if stream_length < 0:
            raise InvalidParameter(f"stream_length must be >= 0, got {stream_length}")
        m = max(int(stream_length), 1)
    try:
        raw = 12.0 / eps ** 2 * math.log2(8 * m / delta)
    except (ZeroDivisionError, OverflowError) as exc:
        raise InvalidParameter(f"threshold overflows for eps={eps}, delta={delta}") from exc
    if not math.isfinite(raw):
        raise InvalidParameter(f"threshold overflows for eps={eps}, delta={delta}")
    thresh = math.ceil(raw)
    if thresh < 1:
        raise InvalidParameter(f"threshold must be >= 1, got {thresh}")
    return thresh


class DistinctCounter:
    """Single-pass estimator state: the sample, ``p`` and the threshold.

    Feed elements one by one with :meth:`feed` (or a whole iterable with
    :meth:`update`) and read the running estimate with :meth:`estimate`.

    With ``redraw_duplicates`` a repeated member is removed and re-drawn with
    the current ``p``, which is the step ordering of the published algorithm.
    By default a member that shows up again is left alone.
    """

    def __init__(
        self,
        eps: float,
        delta: float,
        rng: Optional[RandomnessSource] = None,
        stream_length: Optional[int] = None,
        thresh: Optional[int] = None,
        redraw_duplicates: bool = False,
    ) -> None:
        if thresh is None:
            thresh = threshold(eps, delta, stream_length)
        else:
            _check_open_unit("eps", eps)
            _check_open_unit("delta", delta)
            if isinstance(thresh, bool) or not isinstance(thresh, int) or thresh < 1:
                raise InvalidParameter(f"threshold must be an integer >= 1, got {thresh!r}")
        self.eps = eps
        self.delta = delta
        self.thresh = thresh
        self.rng = rng if rng is not None else RandomnessSource()
        self.redraw_duplicates = redraw_duplicates
        self.p = 1.0
        self.rounds = 0
        self.seen = 0
        # insertion-ordered so evictions replay identically for a given seed
        self._sample: dict = {}
        logger.debug("Initializing; p = %s thresh = %s", self.p, self.thresh)

    def __len__(self) -> int:
        return len(self._sample)

    def sample(self) -> List[Any]:
        return list(self._sample)

    def feed(self, x: Hashable) -> None:
        self.seen += 1
        try:
            member = x in self._sample
        except TypeError as exc:
            raise ElementTypeError(f"stream element {x!r} is not hashable") from exc

        if member:
            if not self.redraw_duplicates:
                return
            del self._sample[x]

        if self.rng.bernoulli(self.p):
            self._sample[x] = None

        if len(self._sample) == self.thresh:
            self._evict()

    def update(self, stream: Iterable[Hashable]) -> "DistinctCounter":
        for x in stream:
            self.feed(x)
        return self

    def _evict(self) -> None:
        flip = self.rng.flip_coin
        self._sample = {x: None for x in self._sample if not flip()}
        self.p /= 2.0
        self.rounds += 1
        logger.debug("Evicted to %d elements; p = %s", len(self._sample), self.p)
        if len(self._sample) == self.thresh:
            logger.warning("Sample still at threshold %d after eviction.", self.thresh)
            raise EstimationFailed(
                f"eviction did not shrink the sample below {self.thresh}; "
                "use a smaller eps or delta for a larger threshold"
            )

    def estimate(self) -> int:
        return int(len(self._sample) / self.p)

    def __repr__(self) -> str:
        return (
            f"DistinctCounter(thresh={self.thresh}, p={self.p}, "
            f"size={len(self._sample)}, seen={self.seen})"
        )


def estimate(
    stream: Iterable[Hashable],
    eps: float,
    delta: float,
    randomness_source: Optional[RandomnessSource] = None,
    stream_length: Optional[int] = None,
    redraw_duplicates: bool = False,
) -> int:
    """Estimate the number of distinct elements in ``stream`` in one pass.

    Raises ``InvalidParameter`` before reading the stream when eps or delta is
    out of range, ``ElementTypeError`` on an unhashable element, and
    ``EstimationFailed`` when an eviction leaves the sample at the threshold
    (the run has no estimate then, rather than reporting 0).

    Example:
        >>> estimate([1, 10, 20, 10, 10, 30, 20, 10, 20, 20, 1, 1, 1], 0.1, 0.005)
        4
    """
    counter = DistinctCounter(
        eps,
        delta,
        rng=randomness_source,
        stream_length=stream_length,
        redraw_duplicates=redraw_duplicates,
    )
    counter.update(stream)
    logger.debug("Finished calculating; p = %s seen = %d", counter.p, counter.seen)
    return counter.estimate()
