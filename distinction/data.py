"""
File sources for distinct counting.

CSV columns are read as text so every chunk, and the whole-file exact path,
sees the same value for the same token; pandas would otherwise infer a dtype
per chunk and ``1`` and ``'1'`` would count as two values. Parquet keeps its
stored types.
"""
from typing import Any, Iterator, Optional, Tuple

import pandas as pd
from pathlib import Path

from .errors import QueryError

OPS = ('=', '!=', '>', '<', '>=', '<=')


def _is_parquet(path: str) -> bool:
    return Path(path).suffix.lower() == ".parquet"


def load_csv(path: str, columns=None) -> pd.DataFrame:
    if _is_parquet(path):
        return pd.read_parquet(path, columns=columns)
    return pd.read_csv(path, usecols=columns, dtype=str)


def iter_column(
    path: str,
    column: str,
    chunksize: int = 1_000_000,
    where: Optional[Tuple[str, str, Any]] = None,
) -> Iterator[Any]:
    """Yield the non-null values of one column, reading the file chunk by chunk.

    ``where`` is an optional ``(column, op, value)`` filter applied per chunk.
    """
    usecols = [column]
    if where and where[0] != column:
        usecols.append(where[0])

    if _is_parquet(path):
        chunks = [pd.read_parquet(path, columns=usecols)]
    else:
        chunks = pd.read_csv(path, usecols=usecols, chunksize=chunksize, dtype=str)

    for chunk in chunks:
        if where:
            chunk = apply_where(chunk, *where)
        if chunk.empty:
            continue
        yield from chunk[column].dropna().tolist()


def apply_where(df: pd.DataFrame, col: str, op: str, val: Any) -> pd.DataFrame:
    if op not in OPS:
        raise QueryError(f"Unsupported operator: {op}")
    series = df[col]
    val = coerce(series, val)
    # numeric literal against a text column compares numerically; junk never matches
    if isinstance(val, (int, float)) and not pd.api.types.is_numeric_dtype(series):
        series = pd.to_numeric(series, errors="coerce")
    if op == '=':  return df[series == val]
    if op == '!=': return df[series != val]
    if op == '>':  return df[series >  val]
    if op == '<':  return df[series <  val]
    if op == '>=': return df[series >= val]
    return df[series <= val]


def coerce(series: pd.Series, val: Any):
    """Quoted literals stay strings, unquoted numbers become int or float."""
    if isinstance(val, str) and len(val) >= 2 and val[0] == val[-1] and val[0] in ("'", '"'):
        return val[1:-1]
    try:
        num = float(val)
    except (TypeError, ValueError):
        return val
    if 'float' in str(series.dtype) or not num.is_integer():
        return num
    return int(num)
