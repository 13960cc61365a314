"""
SurvivalDesign: immutable container for time-to-event data.

Wraps time, event indicator, optional case weights, and optional strata.
Validates inputs at construction time; downstream code trusts clean data.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from pylifetable.core.validation import (
    check_1d,
    check_array,
    check_consistent_length,
    check_finite,
    check_nonnegative,
)


@dataclass(frozen=True)
class SurvivalDesign:
    """Immutable survival data container.

    Parameters
    ----------
    time : NDArray
        Time to event or censoring. Must be non-negative.
    event : NDArray
        Event indicator: 1 = event observed, 0 = censored.
    weights : NDArray or None
        Non-negative case weights.
    strata : NDArray or None
        Strata labels for stratified analyses.
    """

    time: NDArray
    event: NDArray
    weights: NDArray | None
    strata: NDArray | None

    @classmethod
    def for_survival(
        cls,
        time,
        event,
        *,
        weights=None,
        strata=None,
    ) -> SurvivalDesign:
        """Create and validate survival data.

        Parameters
        ----------
        time : array-like
            Time to event or censoring.
        event : array-like
            Event indicator (0/1 or bool).
        weights : array-like or None
            Optional non-negative case weights.
        strata : array-like or None
            Optional strata labels.

        Returns
        -------
        SurvivalDesign

        Raises
        ------
        ValueError
            If inputs are invalid.
        """
        time = np.asarray(time, dtype=np.float64).ravel()
        event = np.asarray(event, dtype=np.float64).ravel()

        n = len(time)

        if n == 0:
            raise ValueError("time must have at least one observation")

        if len(event) != n:
            raise ValueError(
                f"time and event must have the same length: "
                f"got {n} and {len(event)}"
            )

        if np.any(np.isnan(time)):
            raise ValueError("time must not contain missing values")

        if np.any(time < 0):
            raise ValueError("time must be non-negative")

        # Allow event to be 0/1 or True/False
        unique_events = np.unique(event)
        if not np.all(np.isin(unique_events, [0.0, 1.0])):
            raise ValueError(
                f"event must contain only 0 and 1, "
                f"got unique values: {unique_events}"
            )

        weights_arr = None
        if weights is not None:
            weights_arr = check_array(weights, "weights").astype(np.float64).ravel()
            check_1d(weights_arr, "weights")
            check_consistent_length(time, weights_arr, names=("time", "weights"))
            check_finite(weights_arr, "weights")
            check_nonnegative(weights_arr, "weights")

        strata_arr = None
        if strata is not None:
            strata_arr = np.asarray(strata).ravel()
            if len(strata_arr) != n:
                raise ValueError(
                    f"strata must have {n} elements to match time, "
                    f"got {len(strata_arr)}"
                )
            if _has_missing(strata_arr):
                raise ValueError("strata must not contain missing values")

        return cls(
            time=time,
            event=event,
            weights=weights_arr,
            strata=strata_arr,
        )

    @property
    def n(self) -> int:
        """Number of observations."""
        return len(self.time)

    @property
    def n_events(self) -> int:
        """Number of observed events."""
        return int(np.sum(self.event))


def _has_missing(values: NDArray) -> bool:
    if values.dtype.kind == 'f':
        return bool(np.any(np.isnan(values)))
    if values.dtype == object:
        return any(v is None or v != v for v in values)
    return False
