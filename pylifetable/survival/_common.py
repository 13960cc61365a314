"""
Parameter payloads for survival analysis results.

Each dataclass is a frozen payload carried inside a Result[P] envelope.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from numpy.typing import NDArray


SURVIVAL_TABLE_KIND = "gg_survival"


@dataclass(frozen=True)
class KMParams:
    """Product-limit survival curve parameters.

    Follows R's survival::survfit(). One row per distinct
    observed time, strata concatenated in first-appearance order.
    """

    time: NDArray                # (m,) distinct observed times
    survival: NDArray            # (m,) S(t) at each time
    n_risk: NDArray              # (m,) (weighted) number at risk just before t
    n_events: NDArray            # (m,) (weighted) events at t
    n_censored: NDArray          # (m,) (weighted) censorings at t
    se: NDArray                  # (m,) standard error of S(t)
    std_err: NDArray             # (m,) standard error of log S(t), survfit's std.err
    ci_lower: NDArray            # (m,) lower CI for S(t)
    ci_upper: NDArray            # (m,) upper CI for S(t)
    strata: NDArray | None       # (m,) stratum each row was fitted in
    strata_levels: tuple[Any, ...] | None  # levels, first-appearance order
    conf_level: float            # confidence level (e.g. 0.95)
    conf_type: str               # CI type: "log" (default), "plain", "log-log"
    method: str                  # "kaplan-meier" or "fleming-harrington"
    weighted: bool
    n_observations: int          # total n
    n_events_total: int          # total observed events (unweighted)


@dataclass(frozen=True)
class LifeTableColumns:
    """Derived life-table columns, aligned with the fitted rows.

    Rows without events carry NaN in every column.
    """

    event_rows: NDArray          # (m,) bool, rows with n_events > 0
    hazard: NDArray              # (m,) log(S_prev / S) / dt
    density: NDArray             # (m,) (S_prev - S) / dt
    mid_int: NDArray             # (m,) (t + t_prev) / 2
    life: NDArray                # (m,) running area under S(t)
    proplife: NDArray            # (m,) life / t


@dataclass(frozen=True)
class SurvivalTableParams:
    """Full survival table: fitted curve plus derived columns."""

    curve: KMParams
    cum_hazard: NDArray          # (m,) -log(S)
    groups: NDArray | None       # (m,) stratum label, None when unstratified
    life_table: LifeTableColumns
    z: float                     # two-sided normal critical value
    kind: str = SURVIVAL_TABLE_KIND
