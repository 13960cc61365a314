"""
Survival analysis.

Public API:
    kaplan_meier(...) -> KMSolution
    nelson(...) -> SurvivalTableSolution
    cumulative_hazard(survival) -> NDArray
    build_life_table(time, survival, n_events, strata) -> LifeTableColumns
    label_strata(time, levels) -> NDArray
"""

from pylifetable.survival.solvers import kaplan_meier, nelson
from pylifetable.survival.solution import KMSolution, SurvivalTableSolution
from pylifetable.survival._common import (
    KMParams,
    LifeTableColumns,
    SurvivalTableParams,
    SURVIVAL_TABLE_KIND,
)
from pylifetable.survival._config import (
    DEFAULT_CONF_LEVEL,
    critical_value,
    normalize_conf_level,
    prepare_weights,
)
from pylifetable.survival._hazard import cumulative_hazard
from pylifetable.survival._lifetable import build_life_table
from pylifetable.survival._strata import label_strata, stratum_levels

__all__ = [
    "kaplan_meier",
    "nelson",
    "KMSolution",
    "SurvivalTableSolution",
    "KMParams",
    "LifeTableColumns",
    "SurvivalTableParams",
    "SURVIVAL_TABLE_KIND",
    "DEFAULT_CONF_LEVEL",
    "critical_value",
    "normalize_conf_level",
    "prepare_weights",
    "cumulative_hazard",
    "build_life_table",
    "label_strata",
    "stratum_levels",
]
