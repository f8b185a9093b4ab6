from __future__ import annotations
import logging
import time
from typing import Optional, Dict, Any

from .config import EstimatorConfig
from .data import load_csv, apply_where, iter_column
from .errors import QueryError
from .estimator import DistinctCounter
from .parser import parse, ParsedQuery
from .rng import RandomnessSource

logger = logging.getLogger(__name__)


class QueryEngine:
    """Runs COUNT(DISTINCT ...) queries; unset settings come from the DISTINCTION_* environment."""

    def run(
        self,
        sql: str,
        method: str = "kvm",
        eps: Optional[float] = None,
        delta: Optional[float] = None,
        seed: Optional[int] = None,
        chunksize: Optional[int] = None,
        redraw_duplicates: bool = False,
        return_exact: bool = False
    ) -> Dict[str, Any]:
        q = parse(sql)
        cfg = EstimatorConfig.from_env()
        eps = cfg.eps if eps is None else eps
        delta = cfg.delta if delta is None else delta
        seed = cfg.seed if seed is None else seed
        chunksize = cfg.chunksize if chunksize is None else chunksize
        logger.info("Running %s on %s with method=%s", q.label, q.source, method)
        t0 = time.time()

        if method == "exact":
            exact = self._run_exact(q)
            return {"mode": "exact", "time_sec": time.time() - t0, "result": exact}

        if method == "kvm":
            counter = self._stream_estimate(q, eps, delta, seed, chunksize, redraw_duplicates)
            out = {
                "mode": "kvm",
                "time_sec": time.time() - t0,
                "result": [{q.label: counter.estimate()}],
                "thresh": counter.thresh,
                "p": counter.p,
            }
            if return_exact:
                et0 = time.time()
                exact = self._run_exact(q)
                out["exact"] = {"time_sec": time.time() - et0, "result": exact}
            return out

        raise QueryError("Unknown method: " + method)

    def _run_exact(self, q: ParsedQuery):
        cols = [q.agg_col] if not q.where_col or q.where_col == q.agg_col else [q.agg_col, q.where_col]
        df = load_csv(q.source, columns=cols)
        if q.where:
            df = apply_where(df, *q.where)
        return [{q.label: int(df[q.agg_col].nunique())}]

    def _stream_estimate(self, q: ParsedQuery, eps, delta, seed, chunksize, redraw_duplicates):
        counter = DistinctCounter(eps, delta, rng=RandomnessSource(seed),
                                  redraw_duplicates=redraw_duplicates)
        counter.update(iter_column(q.source, q.agg_col, chunksize=chunksize, where=q.where))
        logger.info("Streamed %d values; sample=%d p=%s", counter.seen, len(counter), counter.p)
        return counter
