import pytest

from distinction import QueryError
from distinction.parser import parse


class TestParse:

    def test_plain_count_distinct(self):
        q = parse("SELECT COUNT(DISTINCT user_id) FROM data.csv")
        assert q.agg_col == "user_id"
        assert q.source == "data.csv"
        assert q.where is None
        assert q.label == "COUNT(DISTINCT user_id)"

    def test_where_clause(self):
        q = parse("select count(distinct city) from /tmp/x.csv where clicked >= 1;")
        assert q.agg_col == "city"
        assert q.source == "/tmp/x.csv"
        assert q.where == ("clicked", ">=", "1")

    def test_trailing_semicolon(self):
        assert parse("SELECT COUNT(DISTINCT a) FROM f.parquet;").source == "f.parquet"

    def test_quoted_value(self):
        q = parse("SELECT COUNT(DISTINCT user_id) FROM d.csv WHERE city = 'Pune'")
        assert q.where == ("city", "=", "'Pune'")

    def test_whitespace_is_normalised(self):
        q = parse("  SELECT   COUNT( DISTINCT  a )\n FROM  d.csv ")
        assert q.agg_col == "a"

    @pytest.mark.parametrize("sql", [
        "SELECT COUNT(*) FROM d.csv",
        "SELECT SUM(amount) FROM d.csv",
        "SELECT city, COUNT(DISTINCT user_id) FROM d.csv",
        "DELETE FROM d.csv",
        "SELECT COUNT(DISTINCT a) FROM d.csv WHERE a ~ 3",
    ])
    def test_unsupported(self, sql):
        with pytest.raises(QueryError):
            parse(sql)
