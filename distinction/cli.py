import argparse, json, logging
from .config import EstimatorConfig
from .engine import QueryEngine

def main():
    cfg = EstimatorConfig.from_env()
    ap = argparse.ArgumentParser(description="Distinct count CLI")
    ap.add_argument('--query', required=True, help='e.g. SELECT COUNT(DISTINCT user_id) FROM data.csv')
    ap.add_argument('--method', default='kvm', choices=['kvm','exact'])
    ap.add_argument('--eps', type=float, default=cfg.eps)
    ap.add_argument('--delta', type=float, default=cfg.delta)
    ap.add_argument('--seed', type=int, default=cfg.seed)
    ap.add_argument('--chunksize', type=int, default=cfg.chunksize)
    ap.add_argument('--redraw_duplicates', action='store_true', help='Re-draw repeated sample members')
    ap.add_argument('--show_exact', action='store_true', help='Also compute exact for comparison')
    ap.add_argument('--log_level', default=cfg.log_level)
    args = ap.parse_args()
    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    eng = QueryEngine()
    out = eng.run(args.query, method=args.method, eps=args.eps, delta=args.delta, seed=args.seed,
                  chunksize=args.chunksize, redraw_duplicates=args.redraw_duplicates,
                  return_exact=args.show_exact)
    print(json.dumps(out, indent=2))

if __name__ == '__main__':
    main()
