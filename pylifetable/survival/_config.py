"""
Option handling shared by the survival solvers.

Confidence levels may be given as proportions (0.95) or percentages (95).
Case weights only count on event rows.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike, NDArray
from scipy import stats

from pylifetable.core.validation import (
    check_1d,
    check_array,
    check_consistent_length,
    check_finite,
    check_nonnegative,
)

DEFAULT_CONF_LEVEL = 0.95


def normalize_conf_level(conf_level: float | None) -> float:
    """Return the confidence level as a proportion.

    None gives DEFAULT_CONF_LEVEL. Values above 1 are read as percentages.
    The result is not range-checked here; the curve fitter rejects levels
    outside (0, 1).
    """
    if conf_level is None:
        return DEFAULT_CONF_LEVEL
    level = float(conf_level)
    if level > 1:
        level = level / 100.0
    return level


def critical_value(conf_level: float) -> float:
    """Two-sided standard normal quantile for a confidence level."""
    return float(stats.norm.ppf(1.0 - (1.0 - conf_level) / 2.0))


def prepare_weights(weight: ArrayLike, event: ArrayLike) -> NDArray:
    """Zero the weight of every censored observation.

    Parameters
    ----------
    weight : array-like
        (n,) non-negative case weights.
    event : array-like
        (n,) event indicator (1=event, 0=censored).

    Returns
    -------
    NDArray
        (n,) ``weight * event``. A new array; the input is not modified.
    """
    w = check_array(weight, "weight").astype(np.float64).ravel()
    e = check_array(event, "event").ravel()
    check_1d(w, "weight")
    check_consistent_length(w, e, names=("weight", "event"))
    check_finite(w, "weight")
    check_nonnegative(w, "weight")
    return w * e
