"""
Product-limit survival curve estimator.

Follows R's survival::survfit(Surv(time, event) ~ strata(g), weights=w):
- Kaplan-Meier estimate: S(t) = ∏(1 - d_j / n_j)
- Fleming-Harrington estimate: S(t) = exp(-Σ d_j / n_j)
- Greenwood variance (KM): Var(S(t)) = S(t)^2 * Σ(d_j / (n_j * (n_j - d_j)))
- Aalen variance (FH): Var(S(t)) = S(t)^2 * Σ(d_j / n_j^2)
- std_err is survfit's std.err, the standard error of log S(t); se is
  the standard error of S(t) itself
- Confidence intervals via log, plain, or log-log transformation

Every distinct observed time is reported, including times with only
censorings (n_events = 0), as survfit does with censor=TRUE. With case
weights, n_risk, n_events and n_censored are weighted sums.

References:
    Kaplan, E. L., & Meier, P. (1958). Nonparametric estimation from
        incomplete observations. JASA, 53(282), 457-481.
    Fleming, T. R., & Harrington, D. P. (1984). Nonparametric estimation
        of the survival distribution in censored data. Comm. Statist.
        Theory Methods, 13(20), 2469-2486.
    R Core Team. survival::survfit.formula
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray
from scipy import stats

from pylifetable.survival._common import KMParams
from pylifetable.survival._strata import label_blocks, stratum_levels

_CURVE_FIELDS = (
    "time", "survival", "n_risk", "n_events", "n_censored",
    "se", "std_err", "ci_lower", "ci_upper",
)


def kaplan_meier_fit(
    time: NDArray,
    event: NDArray,
    conf_level: float,
    conf_type: str,
    method: str = "kaplan-meier",
    weights: NDArray | None = None,
    strata: NDArray | None = None,
) -> KMParams:
    """Compute the survival curve, one stratum at a time.

    Parameters
    ----------
    time : NDArray
        (n,) time to event or censoring.
    event : NDArray
        (n,) event indicator (1=event, 0=censored).
    conf_level : float
        Confidence level for CI (e.g. 0.95).
    conf_type : str
        CI type: "log" (default, matches R), "plain", "log-log".
    method : str
        "kaplan-meier" or "fleming-harrington".
    weights : NDArray or None
        (n,) non-negative case weights; None means unit weights.
    strata : NDArray or None
        (n,) stratum labels. Strata are fitted in first-appearance order.

    Returns
    -------
    KMParams
    """
    z = stats.norm.ppf((1.0 + conf_level) / 2.0)
    w = np.ones_like(time) if weights is None else weights

    if strata is None:
        curve = _fit_curve(time, event, w, z, conf_type, method)
        tags = None
        levels = None
    else:
        levels_arr = stratum_levels(strata)
        pieces = []
        for level in levels_arr:
            mask = strata == level
            pieces.append(
                _fit_curve(time[mask], event[mask], w[mask], z, conf_type, method)
            )
        curve = {
            name: np.concatenate([p[name] for p in pieces])
            for name in _CURVE_FIELDS
        }
        tags = label_blocks([len(p["time"]) for p in pieces], levels_arr)
        levels = tuple(levels_arr.tolist())

    return KMParams(
        **curve,
        strata=tags,
        strata_levels=levels,
        conf_level=conf_level,
        conf_type=conf_type,
        method=method,
        weighted=weights is not None,
        n_observations=len(time),
        n_events_total=int(np.sum(event)),
    )


def _fit_curve(
    time: NDArray,
    event: NDArray,
    weights: NDArray,
    z: float,
    conf_type: str,
    method: str,
) -> dict[str, NDArray]:
    """Survival curve for a single stratum."""
    out_time, inverse = np.unique(time, return_inverse=True)
    m = len(out_time)

    # Tabulate (weighted) events and censorings at each distinct time
    out_n_events = np.bincount(inverse, weights=weights * event, minlength=m)
    out_n_censored = np.bincount(
        inverse, weights=weights * (1.0 - event), minlength=m,
    )

    # n_risk at t_j: everyone whose time is >= t_j
    leaving = out_n_events + out_n_censored
    out_n_risk = np.cumsum(leaving[::-1])[::-1]

    # Zero-weight risk sets carry no events; their hazard component is 0
    hazard_component = np.divide(
        out_n_events, out_n_risk,
        out=np.zeros(m), where=out_n_risk > 0,
    )

    if method == "kaplan-meier":
        survival = np.cumprod(1.0 - hazard_component)
        # Avoid division by zero when n_j == d_j (all at risk die)
        denom = out_n_risk * (out_n_risk - out_n_events)
        denom = np.where(denom > 0, denom, np.inf)
        var_log = np.cumsum(out_n_events / denom)
    elif method == "fleming-harrington":
        survival = np.exp(-np.cumsum(hazard_component))
        denom = np.where(out_n_risk > 0, out_n_risk ** 2, np.inf)
        var_log = np.cumsum(out_n_events / denom)
    else:
        raise ValueError(
            f"Unknown method '{method}'. "
            f"Choose from 'kaplan-meier', 'fleming-harrington'."
        )

    std_err = np.sqrt(var_log)
    se = survival * std_err

    ci_lower, ci_upper = _compute_ci(survival, se, z, conf_type)

    return {
        "time": out_time,
        "survival": survival,
        "n_risk": out_n_risk,
        "n_events": out_n_events,
        "n_censored": out_n_censored,
        "se": se,
        "std_err": std_err,
        "ci_lower": ci_lower,
        "ci_upper": ci_upper,
    }


def _compute_ci(
    survival: NDArray,
    se: NDArray,
    z: float,
    conf_type: str,
) -> tuple[NDArray, NDArray]:
    """Compute CI for survival function.

    Parameters
    ----------
    survival : S(t) values
    se : standard errors of S(t)
    z : normal quantile (e.g. 1.96 for 95%)
    conf_type : "log", "plain", or "log-log"

    Returns
    -------
    (ci_lower, ci_upper) clipped to [0, 1]
    """
    if conf_type == "plain":
        # Plain: S(t) ± z * se
        ci_lower = survival - z * se
        ci_upper = survival + z * se

    elif conf_type == "log":
        # Log transformation (R default): exp(log(S) ± z * se / S)
        with np.errstate(divide='ignore', invalid='ignore'):
            log_s = np.log(survival)
            se_log = se / survival
            ci_lower = np.exp(log_s - z * se_log)
            ci_upper = np.exp(log_s + z * se_log)

    elif conf_type == "log-log":
        # Log-log transformation: exp(-exp(log(-log(S)) ± z * se / (S * log(S))))
        with np.errstate(divide='ignore', invalid='ignore'):
            log_s = np.log(survival)
            log_neg_log_s = np.log(-log_s)
            se_loglog = se / (survival * np.abs(log_s))
            ci_lower = np.exp(-np.exp(log_neg_log_s + z * se_loglog))
            ci_upper = np.exp(-np.exp(log_neg_log_s - z * se_loglog))
    else:
        raise ValueError(
            f"Unknown conf_type '{conf_type}'. "
            f"Choose from 'log', 'plain', 'log-log'."
        )

    # Clip to [0, 1]
    ci_lower = np.clip(ci_lower, 0.0, 1.0)
    ci_upper = np.clip(ci_upper, 0.0, 1.0)

    # Handle NaN (from S=0 or S=1 edge cases)
    ci_lower = np.where(np.isnan(ci_lower), 0.0, ci_lower)
    ci_upper = np.where(np.isnan(ci_upper), 1.0, ci_upper)

    return ci_lower, ci_upper
