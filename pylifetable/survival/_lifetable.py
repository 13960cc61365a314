"""
Actuarial life-table columns derived from a fitted survival curve.

Only rows with at least one event take part. Within each stratum, for the
i-th event row with lagged survival S_prev (1 before the first event) and
lagged time t_prev (0 before the first event):

    dt       = t - t_prev
    hazard   = log(S_prev / S) / dt
    density  = (S_prev - S) / dt
    mid_int  = (t + t_prev) / 2
    life     = Σ dt * (3 S - S_prev) / 2      (running over event rows)
    proplife = life / t

Lags never cross a stratum boundary. A zero-width interval (dt == 0) or an
event at t == 0 gives inf/NaN in the affected columns; they are left as-is.

References:
    Lee, E. T. & Wang, J. W. (2003). Statistical Methods for Survival Data
        Analysis, 3rd ed., ch. 4 (life-table hazard and density estimates).
"""

from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pylifetable.survival._common import LifeTableColumns
from pylifetable.survival._strata import stratum_levels


def build_life_table(
    time: ArrayLike,
    survival: ArrayLike,
    n_events: ArrayLike,
    strata: ArrayLike | None = None,
) -> LifeTableColumns:
    """Derive hazard, density, mid_int, life and proplife.

    Parameters
    ----------
    time : array-like
        (m,) fitted times, ascending within each stratum.
    survival : array-like
        (m,) S(t) at each time.
    n_events : array-like
        (m,) events at each time. Rows with no events get NaN columns.
    strata : array-like or None
        (m,) stratum tag of each row.

    Returns
    -------
    LifeTableColumns
        Full-length columns aligned with the input rows.
    """
    t = np.asarray(time, dtype=np.float64).ravel()
    s = np.asarray(survival, dtype=np.float64).ravel()
    d = np.asarray(n_events, dtype=np.float64).ravel()

    event_rows = d > 0
    columns = {
        name: np.full(len(t), np.nan)
        for name in ("hazard", "density", "mid_int", "life", "proplife")
    }

    if strata is None:
        blocks = [np.flatnonzero(event_rows)]
    else:
        tags = np.asarray(strata).ravel()
        blocks = [
            np.flatnonzero((tags == level) & event_rows)
            for level in stratum_levels(tags)
        ]

    for idx in blocks:
        if len(idx) == 0:
            continue
        derived = _derive_block(t[idx], s[idx])
        for name, values in derived.items():
            columns[name][idx] = values

    return LifeTableColumns(event_rows=event_rows, **columns)


def _derive_block(t: NDArray, s: NDArray) -> dict[str, NDArray]:
    """Life-table columns for the event rows of one stratum."""
    lag_s = np.concatenate([[1.0], s[:-1]])
    lag_t = np.concatenate([[0.0], t[:-1]])
    dt = t - lag_t

    with np.errstate(divide='ignore', invalid='ignore'):
        hazard = np.log(lag_s / s) / dt
        density = (lag_s - s) / dt
        life = np.cumsum(dt * (3.0 * s - lag_s) / 2.0)
        proplife = life / t

    return {
        "hazard": hazard,
        "density": density,
        "mid_int": (t + lag_t) / 2.0,
        "life": life,
        "proplife": proplife,
    }
