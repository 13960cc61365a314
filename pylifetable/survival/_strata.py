"""
Stratum labelling for concatenated survival curves.

Strata are fitted one at a time in the order their labels first appear in
the raw data, and each fitted row is tagged with its stratum at fit time.
label_strata() recovers the same labels for a concatenated table that
arrives without tags, by treating every decrease in time as the start of
the next stratum.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pylifetable.core.exceptions import StratumMismatchError


def stratum_levels(strata: ArrayLike) -> NDArray:
    """Distinct stratum values in order of first appearance.

    Labels only need to be hashable; object columns may mix types.
    """
    import pandas as pd

    values = np.asarray(strata).ravel()
    return np.asarray(pd.unique(values), dtype=values.dtype)


def label_blocks(block_sizes: Sequence[int], levels: ArrayLike) -> NDArray:
    """Expand per-stratum row counts into one label per row.

    Raises
    ------
    StratumMismatchError
        If the number of blocks differs from the number of levels.
    """
    levels = np.asarray(levels).ravel()
    if len(block_sizes) != len(levels):
        raise StratumMismatchError(
            f"{len(block_sizes)} stratum blocks cannot be labelled with "
            f"{len(levels)} stratum levels",
            n_blocks=len(block_sizes),
            n_levels=len(levels),
        )
    return np.repeat(levels, np.asarray(block_sizes, dtype=np.intp))


def time_resets(time: ArrayLike) -> NDArray:
    """Indices i where time[i] < time[i-1]."""
    t = np.asarray(time, dtype=np.float64).ravel()
    return np.flatnonzero(t[1:] < t[:-1]) + 1


def label_strata(time: ArrayLike, levels: ArrayLike) -> NDArray:
    """Label the rows of a concatenated, per-stratum time-sorted table.

    Parameters
    ----------
    time : array-like
        (m,) times, ascending within each stratum, strata concatenated.
    levels : array-like
        Stratum labels in the order their blocks appear.

    Returns
    -------
    NDArray
        (m,) label for each row.

    Raises
    ------
    StratumMismatchError
        If the number of detected blocks is not len(levels). A stratum whose
        first time is not below the previous stratum's last time cannot be
        told apart from its predecessor.
    """
    t = np.asarray(time, dtype=np.float64).ravel()
    if len(t) == 0:
        return label_blocks([], levels)
    starts = np.concatenate([[0], time_resets(t)])
    sizes = np.diff(np.concatenate([starts, [len(t)]]))
    return label_blocks(sizes.tolist(), levels)
