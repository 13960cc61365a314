"""
Public API for survival analysis.

    kaplan_meier(time, event) → KMSolution
    nelson(data, interval, censor) → SurvivalTableSolution

Each function validates inputs, creates a SurvivalDesign, runs the
estimator, and wraps the Result in a Solution.
"""

from __future__ import annotations

from typing import Any, Literal

import numpy as np

from pylifetable.core.compute.timing import Timer
from pylifetable.core.datasource import DataSource
from pylifetable.core.result import Result
from pylifetable.survival.design import SurvivalDesign
from pylifetable.survival._common import SurvivalTableParams
from pylifetable.survival._config import (
    critical_value,
    normalize_conf_level,
    prepare_weights,
)
from pylifetable.survival._hazard import cumulative_hazard
from pylifetable.survival._km import kaplan_meier_fit
from pylifetable.survival._lifetable import build_life_table
from pylifetable.survival.solution import KMSolution, SurvivalTableSolution

_METHOD_NAMES = {
    "kaplan-meier": "Kaplan-Meier",
    "fleming-harrington": "Fleming-Harrington",
}


def kaplan_meier(
    time,
    event,
    *,
    strata=None,
    weights=None,
    conf_level: float = 0.95,
    conf_type: Literal["log", "plain", "log-log"] = "log",
    method: Literal["kaplan-meier", "fleming-harrington"] = "kaplan-meier",
) -> KMSolution:
    """Product-limit survival curve estimation.

    Matches R's survival::survfit(Surv(time, event) ~ strata(g), weights=w).

    Parameters
    ----------
    time : array-like
        Time to event or censoring.
    event : array-like
        Event indicator (1=event, 0=censored).
    strata : array-like or None
        Strata labels. Each stratum is fitted separately and the curves
        are concatenated in the order the labels first appear.
    weights : array-like or None
        Non-negative case weights.
    conf_level : float
        Confidence level for CI (default 0.95).
    conf_type : str
        CI transformation: "log" (R default), "plain", "log-log".
    method : str
        "kaplan-meier" (product limit) or "fleming-harrington"
        (exponentiated Nelson-Aalen).

    Returns
    -------
    KMSolution
    """
    design = SurvivalDesign.for_survival(
        time, event, weights=weights, strata=strata,
    )

    if not (0 < conf_level < 1):
        raise ValueError(
            f"conf_level must be in (0, 1), got {conf_level}"
        )

    if conf_type not in ("log", "plain", "log-log"):
        raise ValueError(
            f"conf_type must be 'log', 'plain', or 'log-log', "
            f"got '{conf_type}'"
        )

    if method not in _METHOD_NAMES:
        raise ValueError(
            f"method must be 'kaplan-meier' or 'fleming-harrington', "
            f"got '{method}'"
        )

    timer = Timer()
    timer.start()

    params = kaplan_meier_fit(
        design.time, design.event,
        conf_level=conf_level,
        conf_type=conf_type,
        method=method,
        weights=design.weights,
        strata=design.strata,
    )

    timer.stop()

    warnings_list = []
    if params.strata is None:
        if not np.any(params.n_events > 0):
            warnings_list.append("no events observed; S(t) = 1 throughout")
    else:
        for level in params.strata_levels:
            if not np.any(params.n_events[params.strata == level] > 0):
                warnings_list.append(f"stratum '{level}' has no events")

    result = Result(
        params=params,
        info={
            "method": _METHOD_NAMES[method],
            "conf_level": conf_level,
            "conf_type": conf_type,
            "weighted": design.weights is not None,
            "n_strata": len(params.strata_levels) if params.strata_levels else 1,
            "n_observations": design.n,
            "n_events": design.n_events,
        },
        timing=timer.result(),
        backend_name="cpu_km",
        warnings=tuple(warnings_list),
    )

    return KMSolution(_result=result)


def nelson(
    data,
    interval: str,
    censor: str,
    *,
    by: str | None = None,
    weight=None,
    conf_level: float | None = None,
    **fit_options: Any,
) -> SurvivalTableSolution:
    """Survival, cumulative hazard and life-table estimates.

    Fits the survival curve (per stratum when ``by`` is given), adds
    ``cum_haz = -log(S)``, labels each row with its stratum, and derives
    hazard, density, mid_int, life and proplife on the rows where at least
    one event occurred. Rows without events keep their curve values and
    carry NaN in the life-table columns.

    Parameters
    ----------
    data : DataFrame, mapping or DataSource
        Subject-level table.
    interval : str
        Column holding time to event or censoring.
    censor : str
        Column holding the event indicator (1/True = event).
    by : str or None
        Stratifying column.
    weight : str, array-like or None
        Case weights, as a column name or a vector. Censored rows get
        weight 0 before fitting.
    conf_level : float or None
        Confidence level; values above 1 are percentages. Default 0.95.
    **fit_options
        Passed to kaplan_meier() unchanged (``conf_type``, ``method``).

    Returns
    -------
    SurvivalTableSolution

    Raises
    ------
    ValidationError
        If a named column is missing (before any fitting).
    ValueError
        From the curve fitter, e.g. for a confidence level outside (0, 1)
        after normalisation.

    Examples
    --------
    >>> sol = nelson(pbc, interval="years", censor="status", by="treatment")
    >>> sol.to_dataframe().columns[:10].tolist()
    ['time', 'n', 'cens', 'dead', 'surv', 'se', 'lower', 'upper', 'cum_haz', 'groups']
    """
    source = DataSource.build(data)
    weight_column = weight if isinstance(weight, str) else None
    source.require(interval, censor, by, weight_column)

    time = source[interval]
    event = source[censor]
    strata = source[by] if by is not None else None

    level = normalize_conf_level(conf_level)
    z = critical_value(level)

    prepared = None
    if weight is not None:
        raw = source[weight_column] if weight_column is not None else weight
        prepared = prepare_weights(raw, event)

    timer = Timer()
    timer.start()

    with timer.section("fit"):
        fit = kaplan_meier(
            time, event,
            strata=strata,
            weights=prepared,
            conf_level=level,
            **fit_options,
        )
    curve = fit.params

    with timer.section("derive"):
        cum_haz = cumulative_hazard(curve.survival)
        table = build_life_table(
            curve.time, curve.survival, curve.n_events, strata=curve.strata,
        )

    timer.stop()

    warnings_list = list(fit.warnings)
    if np.any(np.isinf(cum_haz)):
        warnings_list.append("survival reaches 0; cum_haz is inf from there on")
    n_bad_hazard = int(np.sum(table.event_rows & ~np.isfinite(table.hazard)))
    if n_bad_hazard:
        warnings_list.append(
            f"hazard is not finite on {n_bad_hazard} event row(s)"
        )
    n_bad_proplife = int(np.sum(table.event_rows & np.isnan(table.proplife)))
    if n_bad_proplife:
        warnings_list.append(
            f"proplife is undefined on {n_bad_proplife} event row(s) at time 0"
        )

    params = SurvivalTableParams(
        curve=curve,
        cum_hazard=cum_haz,
        groups=curve.strata,
        life_table=table,
        z=z,
    )

    result = Result(
        params=params,
        info={
            "method": fit.info["method"],
            "conf_level": level,
            "z": z,
            "interval": interval,
            "censor": censor,
            "by": by,
            "weighted": prepared is not None,
        },
        timing=timer.result(),
        backend_name="cpu_nelson",
        warnings=tuple(warnings_list),
    )

    return SurvivalTableSolution(_result=result)
