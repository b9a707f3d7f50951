"""
Exact minimum vertex cover and maximum clique by branch and bound.
"""
from .algorithms import (
    BoundConfig,
    Graph,
    MVCResult,
    SearchConfig,
    complement,
    solve,
    solve_max_clique,
)
from .clock import Clock, NullClock

__version__ = "0.1"

__all__ = [
    "BoundConfig",
    "Clock",
    "Graph",
    "MVCResult",
    "NullClock",
    "SearchConfig",
    "complement",
    "solve",
    "solve_max_clique",
]
