import pandas as pd
import pytest

from distinction import QueryError
from distinction.engine import QueryEngine


@pytest.fixture
def users_csv(tmp_path):
    path = tmp_path / "users.csv"
    ids = [i % 250 for i in range(2_000)]
    pd.DataFrame({
        "user_id": ids,
        "clicked": [i % 2 for i in range(2_000)],
    }).to_csv(path, index=False)
    return str(path)


class TestQueryEngine:

    def test_exact(self, users_csv):
        out = QueryEngine().run(f"SELECT COUNT(DISTINCT user_id) FROM {users_csv}", method="exact")
        assert out["mode"] == "exact"
        assert out["result"] == [{"COUNT(DISTINCT user_id)": 250}]

    def test_kvm_matches_exact_below_threshold(self, users_csv):
        out = QueryEngine().run(
            f"SELECT COUNT(DISTINCT user_id) FROM {users_csv}",
            method="kvm", seed=1, chunksize=300, return_exact=True,
        )
        assert out["mode"] == "kvm"
        assert out["p"] == 1.0
        assert out["result"] == out["exact"]["result"] == [{"COUNT(DISTINCT user_id)": 250}]

    def test_where(self, users_csv):
        sql = f"SELECT COUNT(DISTINCT user_id) FROM {users_csv} WHERE clicked = 1"
        exact = QueryEngine().run(sql, method="exact")
        approx = QueryEngine().run(sql, method="kvm", seed=2)
        assert exact["result"] == [{"COUNT(DISTINCT user_id)": 125}]
        assert approx["result"] == exact["result"]

    def test_kvm_with_evictions(self, users_csv):
        out = QueryEngine().run(
            f"SELECT COUNT(DISTINCT user_id) FROM {users_csv}",
            method="kvm", eps=0.9, delta=0.9, seed=3,
        )
        assert out["thresh"] < 250
        assert out["p"] < 1.0

    def test_unknown_method(self, users_csv):
        with pytest.raises(QueryError):
            QueryEngine().run(f"SELECT COUNT(DISTINCT user_id) FROM {users_csv}", method="sample")

    def test_mixed_type_column_agrees_with_exact(self, tmp_path):
        path = tmp_path / "mixed.csv"
        path.write_text("user_id\n1\n2\n3\n1\na\n")
        sql = f"SELECT COUNT(DISTINCT user_id) FROM {path}"
        approx = QueryEngine().run(sql, method="kvm", seed=5, chunksize=3)
        exact = QueryEngine().run(sql, method="exact")
        assert approx["result"] == exact["result"] == [{"COUNT(DISTINCT user_id)": 4}]

    def test_defaults_come_from_environment(self, users_csv, monkeypatch):
        monkeypatch.setenv("DISTINCTION_EPS", "0.9")
        monkeypatch.setenv("DISTINCTION_DELTA", "0.9")
        monkeypatch.setenv("DISTINCTION_SEED", "3")
        sql = f"SELECT COUNT(DISTINCT user_id) FROM {users_csv}"
        from_env = QueryEngine().run(sql)
        explicit = QueryEngine().run(sql, eps=0.9, delta=0.9, seed=3)
        assert from_env["thresh"] == explicit["thresh"] < 250
        assert from_env["result"] == explicit["result"]

    def test_explicit_arguments_beat_environment(self, users_csv, monkeypatch):
        monkeypatch.setenv("DISTINCTION_EPS", "0.9")
        out = QueryEngine().run(f"SELECT COUNT(DISTINCT user_id) FROM {users_csv}", eps=0.1, delta=0.005)
        assert out["thresh"] > 250
