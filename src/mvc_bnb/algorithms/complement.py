"""
Maximum clique through minimum vertex cover of the complement graph.

A clique of G is an independent set of the complement, and the vertices
outside a minimum vertex cover form a maximum independent set, so
omega(G) = n - MVC(complement(G)).
"""
import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from .branch_and_bound import BranchAndBoundSearch, MVCResult, SearchConfig
from .mvc_graph import Graph

logger = logging.getLogger(__name__)


def complement(graph: Graph) -> Graph:
    """Graph on the same vertices with an edge exactly where ``graph`` has none."""
    n = graph.order
    edges = []
    for u in range(n):
        nbrs = graph.neighbor_set(u)
        for v in range(u + 1, n):
            if v not in nbrs:
                edges.append((u, v))
    return Graph(n, edges)


@dataclass
class CliqueResult:
    """Maximum clique derived from an MVC run on the complement."""
    value: int
    clique: Tuple[int, ...]
    mvc_result: MVCResult

    @property
    def proven_optimal(self) -> bool:
        return self.mvc_result.proven_optimal


def solve_on_complement(graph: Graph, config: Optional[SearchConfig] = None, clock=None) -> MVCResult:
    """Minimum vertex cover of the complement of ``graph``."""
    compl = complement(graph)
    logger.info(f"Complement has {compl.order} vertices, {compl.size} edges "
                f"(density {compl.density():.3f})")
    return BranchAndBoundSearch(compl, config, clock).run()


def solve_max_clique(graph: Graph, config: Optional[SearchConfig] = None, clock=None) -> CliqueResult:
    """
    Maximum clique of ``graph``.

    Returns:
        The clique size ``n - MVC(complement)``, the clique itself (the
        vertices left out of the complement's cover) and the underlying run
    """
    result = solve_on_complement(graph, config, clock)
    in_cover = set(result.cover)
    clique = tuple(v for v in range(graph.order) if v not in in_cover)
    return CliqueResult(value=graph.order - result.size, clique=clique, mvc_result=result)
