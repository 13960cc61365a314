"""
Shared compute infrastructure for PyLifeTable.

Submodules:
    timing: Execution timing utilities
"""

from pylifetable.core.compute.timing import Timer

__all__ = [
    "Timer",
]
