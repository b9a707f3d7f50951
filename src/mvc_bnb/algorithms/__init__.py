from .mvc_graph import ActiveGraph, Graph
from .bounds import BoundConfig, BoundEstimator
from .branch_and_bound import BranchAndBoundSearch, MVCResult, SearchConfig, solve
from .complement import CliqueResult, complement, solve_max_clique, solve_on_complement
from .helpers import is_clique, is_independent_set, is_vertex_cover
from .naive_search import naive_max_clique, naive_search

__all__ = [
    "ActiveGraph",
    "BoundConfig",
    "BoundEstimator",
    "BranchAndBoundSearch",
    "CliqueResult",
    "Graph",
    "MVCResult",
    "SearchConfig",
    "complement",
    "is_clique",
    "is_independent_set",
    "is_vertex_cover",
    "naive_max_clique",
    "naive_search",
    "solve",
    "solve_max_clique",
    "solve_on_complement",
]
