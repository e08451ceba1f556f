# src/walletsim/helpers.py
import numpy as np

from walletsim.typing import Idx1D, Int1D

_NICE_STEPS = (1, 2, 5)


def nice_ceil(value: int) -> int:
    """
    Smallest number of the form ``{1, 2, 5} * 10**k`` that is ``>= value``.

    >>> [nice_ceil(v) for v in (1, 3, 5, 6, 11, 21, 51, 100)]
    [1, 2, 5, 10, 20, 50, 100, 100]
    """
    if value <= 1:
        return 1
    decade = 1
    while decade * 10 <= value:
        decade *= 10
    for step in _NICE_STEPS:
        if step * decade >= value:
            return step * decade
    return 10 * decade


def bucket_width(
    lo: int, hi: int, target_buckets: int = 15, min_width: int = 5
) -> int:
    """
    Histogram bucket width for values spanning ``[lo, hi]``.

    Aims for roughly *target_buckets* buckets, never narrower than
    *min_width*, and snaps the result up to a "nice" value so axis labels
    read 5, 10, 20, 50, 100, ...
    """
    span = max(hi - lo, 0)
    raw = -(-span // target_buckets)  # ceil division on ints
    return nice_ceil(max(min_width, raw))


def select_top_k_indices_stable(values: Int1D, k: int) -> Idx1D:
    """
    Indices of the *k* largest values, largest first.

    Ties keep their original order (stable sort), so among equal balances
    the agent that appears first in the population ranks first.
    """
    values = np.asarray(values)
    if k <= 0 or values.size == 0:
        return np.empty(0, dtype=np.intp)
    order = np.argsort(-values, kind="stable")
    return order[:k]
