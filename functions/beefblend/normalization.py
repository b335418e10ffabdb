import pandas as pd
from typing import Iterable, Union

# Min-max normalisation of one raw metric across a candidate pool.
# A pool with no spread scores 1.0 everywhere.

Values = Union[pd.Series, Iterable[float]]


def _as_series(values: Values) -> pd.Series:
    if isinstance(values, pd.Series):
        return values.astype(float)
    return pd.Series(list(values), dtype=float)


def normalize(values: Values, lower_is_better: bool = False) -> pd.Series:
    """Map [min, max] onto [0, 1]; the best raw value maps to 1.0."""
    return normalize_padded(values, lower_is_better, pad=0.0)


def normalize_padded(values: Values, lower_is_better: bool = False, pad: float = 0.0) -> pd.Series:
    """
    Like normalize, but the window is widened by `pad` x spread on each side
    so the pool's extremes land inside the scale rather than on 0 and 1.
    """
    scores = _as_series(values)
    if scores.empty:
        return scores

    min_score = scores.min()
    max_score = scores.max()
    spread = max_score - min_score
    if spread == 0:
        return pd.Series([1.0] * len(scores), index=scores.index)

    lo = min_score - spread * pad
    hi = max_score + spread * pad
    if lower_is_better:
        return (hi - scores) / (hi - lo)
    return (scores - lo) / (hi - lo)
