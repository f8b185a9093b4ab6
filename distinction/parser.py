import re
from dataclasses import dataclass
from typing import Optional

from .errors import QueryError

AGG_RE = r"COUNT\(\s*DISTINCT\s+(?P<col>[^)\s]+)\s*\)"

@dataclass
class ParsedQuery:
    agg_col: str
    source: str
    where_col: Optional[str]
    where_op: Optional[str]
    where_val: Optional[str]

    @property
    def label(self) -> str:
        return f"COUNT(DISTINCT {self.agg_col})"

    @property
    def where(self):
        if self.where_col is None:
            return None
        return (self.where_col, self.where_op, self.where_val)

def parse(sql: str) -> ParsedQuery:

    s = re.sub(r"\s+", " ", sql.strip())

    m = re.match(rf"SELECT (?P<select>.+?) FROM (?P<src>[^ ]+)(?: WHERE (?P<wcol>[^ ]+) (?P<wop>!=|>=|<=|=|>|<) (?P<wval>[^ ;]+))?;?\Z", s, re.IGNORECASE)
    if not m:
        raise QueryError("Unsupported SQL. Examples: SELECT COUNT(DISTINCT user_id) FROM file.csv; SELECT COUNT(DISTINCT city) FROM file.csv WHERE clicked = 1")
    select = m.group('select').strip()
    src = m.group('src').strip().rstrip(';')

    am = re.fullmatch(AGG_RE, select, re.IGNORECASE)
    if not am:
        raise QueryError("SELECT must be a single COUNT(DISTINCT col) aggregate")

    return ParsedQuery(
        agg_col=am.group('col'),
        source=src,
        where_col=m.group('wcol'),
        where_op=m.group('wop'),
        where_val=m.group('wval'),
    )
