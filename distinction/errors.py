class DistinctionError(Exception):
    pass


class InvalidParameter(DistinctionError, ValueError):
    """eps, delta, a probability or the threshold is out of range."""


class ElementTypeError(DistinctionError, TypeError):
    """A stream element cannot be hashed, so set membership is undefined."""


class EstimationFailed(DistinctionError, RuntimeError):
    """Eviction left the sample at the threshold; the run has no estimate."""


class QueryError(DistinctionError, ValueError):
    pass
