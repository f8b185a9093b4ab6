import streamlit as st
import json
import matplotlib.pyplot as plt

from distinction.benchmark import run_trials, synthetic_stream
from distinction.config import EstimatorConfig
from distinction.engine import QueryEngine

cfg = EstimatorConfig.from_env()

st.set_page_config(page_title="Distinction: KVM distinct counts", layout="wide")

st.title("Distinction: streaming distinct counts")
st.write("Bounded-memory distinct counting; compare the KVM estimate with the exact count.")

eps = st.slider("eps (accuracy)", 0.01, 0.99, float(cfg.eps), 0.01)
delta = st.slider("delta (failure probability)", 0.001, 0.5, float(cfg.delta), 0.001, format="%.3f")
seed = st.number_input("Seed", value=cfg.seed if cfg.seed is not None else 42, step=1)
redraw = st.checkbox("Re-draw repeated sample members", value=False)

tab_file, tab_synth = st.tabs(["Query a file", "Synthetic trials"])

with tab_file:
    path = st.text_input("Path to data file (CSV / CSV.GZ / Parquet)", value="large_50M.csv")
    column = st.text_input("Column", value="user_id")
    where = st.text_input("Optional WHERE clause (e.g. clicked = 1)", value="")
    show_exact = st.checkbox("Also compute exact for comparison", value=False)

    if st.button("Run query"):
        sql = f"SELECT COUNT(DISTINCT {column}) FROM {path}"
        if where.strip():
            sql += f" WHERE {where.strip()}"
        out = QueryEngine().run(sql, method="kvm", eps=eps, delta=delta, seed=int(seed),
                                redraw_duplicates=redraw, return_exact=show_exact)

        st.subheader("Estimate")
        st.metric("KVM estimate", list(out["result"][0].values())[0])
        st.caption(f"thresh = {out['thresh']}, final p = {out['p']}, {out['time_sec']:.3f}s")
        if show_exact:
            st.metric("Exact", list(out["exact"]["result"][0].values())[0])
            st.caption(f"exact in {out['exact']['time_sec']:.3f}s")
        st.code(json.dumps(out, indent=2), language="json")

with tab_synth:
    distinct = st.number_input("Distinct values", value=50_000, min_value=1, step=1000)
    length = st.number_input("Stream length", value=200_000, min_value=1, step=10_000)
    trials = st.number_input("Trials", value=20, min_value=1, step=1)

    if st.button("Run trials"):
        if length < distinct:
            st.error("Stream length must be at least the number of distinct values.")
        else:
            stream = synthetic_stream(int(distinct), int(length), seed=int(seed))
            res = run_trials(stream, eps, delta, trials=int(trials), seed=int(seed),
                             redraw_duplicates=redraw)

            c1, c2, c3 = st.columns(3)
            c1.metric("Exact", res["exact"])
            c2.metric("Mean relative error", f"{res['mean_rel_error']:.4f}")
            c3.metric("Within eps", f"{res['within_eps']:.0%}")

            fig, ax = plt.subplots()
            ax.hist(res["estimates"], bins=min(20, len(res["estimates"])))
            ax.axvline(res["exact"], color="black", linestyle="--", label="exact")
            ax.axvline(res["exact"] * (1 - eps), color="red", linestyle=":", label="(1 ± eps)")
            ax.axvline(res["exact"] * (1 + eps), color="red", linestyle=":")
            ax.set_xlabel("estimate")
            ax.set_ylabel("runs")
            ax.legend()
            st.pyplot(fig)
