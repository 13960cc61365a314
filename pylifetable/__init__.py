"""
PyLifeTable: nonparametric survival curves and actuarial life tables.

Estimates the survival function, cumulative hazard, hazard rate, event
density and proportion of life lived from right-censored time-to-event
data, optionally stratified and weighted.

Submodules:
    core: Result envelope, exceptions, validation, tabular data access
    survival: Product-limit fitting and life-table derivation
"""

__version__ = "0.1.0"

from pylifetable import survival
from pylifetable.survival import kaplan_meier, nelson

__all__ = [
    "__version__",
    "survival",
    "kaplan_meier",
    "nelson",
]
