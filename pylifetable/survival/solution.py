"""
Solution wrappers for survival analysis results.

Each Solution wraps a Result[Params] and exposes user-friendly properties
with R-style summary() methods.
"""

from __future__ import annotations

from typing import Any, TYPE_CHECKING

import numpy as np

from pylifetable.core.result import Result
from pylifetable.survival._common import KMParams, SurvivalTableParams

if TYPE_CHECKING:
    import pandas as pd


def _median(time, survival) -> float | None:
    """Smallest t where S(t) <= 0.5."""
    idx = survival <= 0.5
    if not idx.any():
        return None
    return float(time[idx][0])


class KMSolution:
    """Product-limit survival curve solution.

    Properties mirror R's survfit() output.
    """

    __slots__ = ('_result',)

    def __init__(self, _result: Result[KMParams]) -> None:
        self._result = _result

    # -- Properties delegating to KMParams --

    @property
    def params(self) -> KMParams:
        return self._result.params

    @property
    def time(self):
        """Distinct observed times."""
        return self._result.params.time

    @property
    def survival(self):
        """S(t) at each time."""
        return self._result.params.survival

    @property
    def n_risk(self):
        """Number at risk just before each time."""
        return self._result.params.n_risk

    @property
    def n_events(self):
        """Number of events at each time."""
        return self._result.params.n_events

    @property
    def n_censored(self):
        """Number censored at each time."""
        return self._result.params.n_censored

    @property
    def se(self):
        """Standard error of S(t)."""
        return self._result.params.se

    @property
    def std_err(self):
        """Standard error of log S(t), as survfit reports it."""
        return self._result.params.std_err

    @property
    def ci_lower(self):
        """Lower confidence bound for S(t)."""
        return self._result.params.ci_lower

    @property
    def ci_upper(self):
        """Upper confidence bound for S(t)."""
        return self._result.params.ci_upper

    @property
    def strata(self):
        """Stratum of each row, or None when unstratified."""
        return self._result.params.strata

    @property
    def strata_levels(self):
        return self._result.params.strata_levels

    @property
    def conf_level(self) -> float:
        return self._result.params.conf_level

    @property
    def conf_type(self) -> str:
        return self._result.params.conf_type

    @property
    def method(self) -> str:
        return self._result.params.method

    @property
    def n_observations(self) -> int:
        return self._result.params.n_observations

    @property
    def n_events_total(self) -> int:
        return self._result.params.n_events_total

    @property
    def median_survival(self) -> float | None | dict[Any, float | None]:
        """Median survival time (smallest t where S(t) <= 0.5).

        A dict keyed by stratum when the fit is stratified.
        """
        if self.strata is None:
            return _median(self.time, self.survival)
        return {
            level: _median(
                self.time[self.strata == level],
                self.survival[self.strata == level],
            )
            for level in self.strata_levels
        }

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def timing(self):
        return self._result.timing

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    def summary(self) -> str:
        """R-style summary of the survival curve."""
        lines = []
        lines.append("Call: kaplan_meier()")
        lines.append("")
        lines.append(
            f"  n={self.n_observations}, "
            f"events={self.n_events_total}, "
            f"method={self.method}"
        )
        lines.append("")

        median = self.median_survival
        if isinstance(median, dict):
            for level, value in median.items():
                value_str = f"{value:.4g}" if value is not None else "NA"
                lines.append(f"  median survival [{level}] = {value_str}")
        else:
            median_str = f"{median:.4g}" if median is not None else "NA"
            lines.append(f"  median survival = {median_str}")
        lines.append("")

        # Table header
        ci_pct = int(round(self.conf_level * 100))
        lines.append(
            f"  {'time':>8s}  {'n.risk':>8s}  {'n.event':>8s}  "
            f"{'survival':>10s}  {'se':>10s}  "
            f"{'lower {ci_pct}%':>10s}  {'upper {ci_pct}%':>10s}"
        )

        # Show up to 20 rows
        m = len(self.time)
        show = min(m, 20)
        for i in range(show):
            lines.append(
                f"  {self.time[i]:8.4g}  {self.n_risk[i]:8.4g}  "
                f"{self.n_events[i]:8.4g}  "
                f"{self.survival[i]:10.6f}  {self.se[i]:10.6f}  "
                f"{self.ci_lower[i]:10.6f}  {self.ci_upper[i]:10.6f}"
            )
        if m > 20:
            lines.append(f"  ... ({m - 20} more rows)")

        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"KMSolution(n={self.n_observations}, "
            f"events={self.n_events_total}, "
            f"median={self.median_survival})"
        )


class SurvivalTableSolution:
    """Survival curve with cumulative hazard and life-table columns.

    Carries the type tag ``kind == "gg_survival"`` so plotting and
    reporting code can recognise it.
    """

    __slots__ = ('_result',)

    def __init__(self, _result: Result[SurvivalTableParams]) -> None:
        self._result = _result

    @property
    def kind(self) -> str:
        return self._result.params.kind

    @property
    def curve(self) -> KMParams:
        return self._result.params.curve

    @property
    def time(self):
        return self.curve.time

    @property
    def survival(self):
        return self.curve.survival

    @property
    def n_risk(self):
        return self.curve.n_risk

    @property
    def n_events(self):
        return self.curve.n_events

    @property
    def n_censored(self):
        return self.curve.n_censored

    @property
    def se(self):
        return self.curve.se

    @property
    def std_err(self):
        return self.curve.std_err

    @property
    def ci_lower(self):
        return self.curve.ci_lower

    @property
    def ci_upper(self):
        return self.curve.ci_upper

    @property
    def cum_hazard(self):
        """-log(S(t)); +inf where S(t) = 0."""
        return self._result.params.cum_hazard

    @property
    def groups(self):
        """Stratum label of each row, or None when unstratified."""
        return self._result.params.groups

    @property
    def event_rows(self):
        """Boolean mask of rows with at least one event."""
        return self._result.params.life_table.event_rows

    @property
    def hazard(self):
        return self._result.params.life_table.hazard

    @property
    def density(self):
        return self._result.params.life_table.density

    @property
    def mid_int(self):
        return self._result.params.life_table.mid_int

    @property
    def life(self):
        return self._result.params.life_table.life

    @property
    def proplife(self):
        return self._result.params.life_table.proplife

    @property
    def conf_level(self) -> float:
        return self.curve.conf_level

    @property
    def z(self) -> float:
        """Two-sided normal critical value for conf_level."""
        return self._result.params.z

    @property
    def n_observations(self) -> int:
        return self.curve.n_observations

    @property
    def n_events_total(self) -> int:
        return self.curve.n_events_total

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def timing(self):
        return self._result.timing

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    def has_warning(self, substring: str) -> bool:
        return self._result.has_warning(substring)

    def columns(self, events_only: bool = False) -> dict[str, np.ndarray]:
        """Output columns, in table order.

        The ``se`` column is the standard error of log S(t), as in survfit.

        Parameters
        ----------
        events_only : bool
            Keep only rows with at least one event (the life table proper).
        """
        cols = {
            "time": self.time,
            "n": self.n_risk,
            "cens": self.n_censored,
            "dead": self.n_events,
            "surv": self.survival,
            "se": self.std_err,
            "lower": self.ci_lower,
            "upper": self.ci_upper,
            "cum_haz": self.cum_hazard,
        }
        if self.groups is not None:
            cols["groups"] = self.groups
        cols.update({
            "hazard": self.hazard,
            "density": self.density,
            "mid_int": self.mid_int,
            "life": self.life,
            "proplife": self.proplife,
        })
        if events_only:
            cols = {name: values[self.event_rows] for name, values in cols.items()}
        return cols

    def to_dataframe(self, events_only: bool = False) -> 'pd.DataFrame':
        """Output table as a pandas DataFrame tagged with ``attrs["kind"]``."""
        import pandas as pd

        df = pd.DataFrame(self.columns(events_only=events_only))
        df.attrs["kind"] = self.kind
        return df

    def life_table(self) -> 'pd.DataFrame':
        """Event rows only, with all derived columns populated."""
        return self.to_dataframe(events_only=True)

    def summary(self) -> str:
        """R-style summary of the life table (event rows)."""
        lines = []
        lines.append("Call: nelson()")
        lines.append("")
        lines.append(
            f"  n={self.n_observations}, "
            f"events={self.n_events_total}, "
            f"conf.level={self.conf_level:.4g}"
        )
        lines.append("")

        has_groups = self.groups is not None
        header = (
            f"  {'time':>8s}  {'surv':>8s}  {'cum_haz':>8s}  "
            f"{'hazard':>8s}  {'density':>8s}  {'life':>8s}  {'proplife':>8s}"
        )
        if has_groups:
            header += f"  {'groups':>8s}"
        lines.append(header)

        rows = np.flatnonzero(self.event_rows)
        show = rows[:20]
        for i in show:
            line = (
                f"  {self.time[i]:8.4g}  {self.survival[i]:8.4f}  "
                f"{self.cum_hazard[i]:8.4f}  {self.hazard[i]:8.4g}  "
                f"{self.density[i]:8.4g}  {self.life[i]:8.4g}  "
                f"{self.proplife[i]:8.4g}"
            )
            if has_groups:
                line += f"  {str(self.groups[i]):>8s}"
            lines.append(line)
        if len(rows) > 20:
            lines.append(f"  ... ({len(rows) - 20} more rows)")

        for w in self.warnings:
            lines.append(f"  Warning: {w}")

        return "\n".join(lines)

    def __repr__(self) -> str:
        strata = self.curve.strata_levels
        n_strata = len(strata) if strata is not None else 1
        return (
            f"SurvivalTableSolution(kind={self.kind!r}, "
            f"n={self.n_observations}, events={self.n_events_total}, "
            f"rows={len(self.time)}, strata={n_strata})"
        )
