"""
Cumulative hazard from a fitted survival curve.

H(t) = -log(S(t)). Where S(t) = 0 the cumulative hazard is +inf; that is
reported, not raised.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike, NDArray


def cumulative_hazard(survival: ArrayLike) -> NDArray:
    """Elementwise -log(S).

    Parameters
    ----------
    survival : array-like
        (m,) survival probabilities in [0, 1].

    Returns
    -------
    NDArray
        (m,) cumulative hazard, +inf where S == 0.
    """
    s = np.asarray(survival, dtype=np.float64)
    with np.errstate(divide='ignore'):
        # 0.0 - x rather than -x so S == 1 gives 0.0, not -0.0
        return 0.0 - np.log(s)
