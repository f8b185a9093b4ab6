import argparse, json, logging, statistics
import numpy as np

from .config import EstimatorConfig
from .data import iter_column
from .estimator import estimate, threshold
from .rng import RandomnessSource


def synthetic_stream(distinct: int, length: int, seed: int | None = None) -> list:
    """Shuffled stream of ``length`` ints containing exactly ``distinct`` values."""
    if length < distinct or (distinct == 0 and length > 0):
        raise ValueError("need length >= distinct, and distinct > 0 for a non-empty stream")
    rng = np.random.default_rng(seed)
    values = np.arange(distinct)
    extra = rng.integers(0, distinct, size=length - distinct) if length > distinct else values[:0]
    stream = np.concatenate([values, extra])
    rng.shuffle(stream)
    return stream.tolist()


def run_trials(stream, eps: float, delta: float, trials: int = 20, seed: int = 0,
               redraw_duplicates: bool = False):
    stream = list(stream)
    exact = len(set(stream))
    estimates = []
    for i in range(trials):
        estimates.append(estimate(stream, eps, delta, RandomnessSource(seed + i),
                                  redraw_duplicates=redraw_duplicates))
    errs = [rel_error(exact, e) for e in estimates]
    return {
        'exact': exact,
        'thresh': threshold(eps, delta),
        'estimates': estimates,
        'rel_errors': errs,
        'mean_rel_error': statistics.fmean(errs) if errs else None,
        'within_eps': (sum(1 for e in errs if e <= eps) / len(errs)) if errs else None,
    }


def rel_error(exact, approx):
    denom = abs(exact) if exact != 0 else 1.0
    return abs(approx - exact) / denom


def main():
    cfg = EstimatorConfig.from_env()
    ap = argparse.ArgumentParser(description="Benchmark KVM estimates against the exact distinct count")
    ap.add_argument('--data', help='Path to CSV/Parquet; uses --column')
    ap.add_argument('--column', help='Column to count when --data is given')
    ap.add_argument('--distinct', type=int, default=100_000, help='Distinct values in the synthetic stream')
    ap.add_argument('--length', type=int, default=500_000, help='Length of the synthetic stream')
    ap.add_argument('--eps', type=float, default=cfg.eps)
    ap.add_argument('--delta', type=float, default=cfg.delta)
    ap.add_argument('--trials', type=int, default=20)
    ap.add_argument('--seed', type=int, default=cfg.seed if cfg.seed is not None else 42)
    ap.add_argument('--redraw_duplicates', action='store_true')
    ap.add_argument('--log_level', default=cfg.log_level)
    args = ap.parse_args()
    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    if args.data:
        if not args.column:
            ap.error('--column is required with --data')
        stream = list(iter_column(args.data, args.column, chunksize=cfg.chunksize))
    else:
        stream = synthetic_stream(args.distinct, args.length, seed=args.seed)

    out = run_trials(stream, args.eps, args.delta, trials=args.trials, seed=args.seed,
                     redraw_duplicates=args.redraw_duplicates)
    print(json.dumps(out, indent=2))

if __name__ == '__main__':
    main()
