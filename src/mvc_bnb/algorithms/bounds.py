"""
Lower bounds on the number of vertices still needed to cover the active subgraph.

Every bound here is admissible: it never exceeds the minimum vertex cover of
the subgraph induced by the active vertices, so the maximum of any subset of
them is admissible as well.
"""
from dataclasses import dataclass
from typing import List, Set

import numpy as np

from ..clock import CLQ_LB, DEG_LB, NullClock
from .mvc_graph import ActiveGraph


@dataclass(frozen=True)
class BoundConfig:
    """Which lower bounds the search computes at every node."""
    degree: bool = True
    sorted_degree: bool = False
    clique: bool = False
    clique_partition: bool = False

    @property
    def any_enabled(self) -> bool:
        return self.degree or self.sorted_degree or self.clique or self.clique_partition


def degree_bound(model: ActiveGraph) -> int:
    """ceil(uncovered / max active degree): one vertex covers at most that many edges."""
    uncovered = model.uncovered_edge_count()
    if uncovered == 0:
        return 0
    _, max_degree = model.max_active_degree()
    return -(-uncovered // max_degree)


def sorted_degree_bound(model: ActiveGraph) -> int:
    """
    Smallest k such that the k largest active degrees add up to the uncovered count.

    Any k cover vertices cover at most the sum of their degrees, so fewer
    than this many cannot cover every edge.
    """
    uncovered = model.uncovered_edge_count()
    if uncovered == 0:
        return 0
    degrees = np.sort(model.active_degrees())[::-1]
    cumulative = np.cumsum(degrees)
    return int(np.searchsorted(cumulative, uncovered, side="left")) + 1


def _candidate_order(model: ActiveGraph) -> List[int]:
    """Active vertices by descending active degree, lowest index first on ties."""
    vertices = model.active_vertices()
    if len(vertices) == 0:
        return []
    degrees = model.active_degrees()
    # lexsort is stable and sorts by the last key first
    order = np.lexsort((vertices, -degrees))
    return [int(v) for v in vertices[order]]


def greedy_clique(model: ActiveGraph) -> List[int]:
    """Grow one clique among the active vertices, starting at the max degree vertex."""
    graph = model.graph
    clique: List[int] = []
    for v in _candidate_order(model):
        if model.active_degree(v) < len(clique):
            break
        nbrs = graph.neighbor_set(v)
        if all(c in nbrs for c in clique):
            clique.append(v)
    return clique


def clique_bound(model: ActiveGraph) -> int:
    """A clique of size k forces k - 1 of its vertices into any cover."""
    if model.uncovered_edge_count() == 0:
        return 0
    return max(len(greedy_clique(model)) - 1, 0)


def greedy_clique_partition(model: ActiveGraph) -> List[Set[int]]:
    """First-fit partition of the active vertices into cliques."""
    graph = model.graph
    cliques: List[Set[int]] = []
    for v in _candidate_order(model):
        nbrs = graph.neighbor_set(v)
        for clique in cliques:
            if clique <= nbrs:
                clique.add(v)
                break
        else:
            cliques.append({v})
    return cliques


def clique_partition_bound(model: ActiveGraph) -> int:
    """Sum of |C| - 1 over disjoint cliques C covering the active vertices."""
    if model.uncovered_edge_count() == 0:
        return 0
    return sum(len(clique) - 1 for clique in greedy_clique_partition(model))


class BoundEstimator:
    """
    Computes the configured lower bounds and returns their maximum.

    Args:
        config: Which bounds to compute
        clock: Phase timer; degree bounds are timed as ``deg_lb`` and clique
            bounds as ``clq_lb``
    """

    def __init__(self, config: BoundConfig = None, clock=None):
        self.config = config if config is not None else BoundConfig()
        self.clock = clock if clock is not None else NullClock()

    def lower_bound(self, model: ActiveGraph) -> int:
        if model.uncovered_edge_count() == 0:
            return 0
        config = self.config
        best = 0
        if config.degree or config.sorted_degree:
            with self.clock.phase(DEG_LB):
                if config.sorted_degree:
                    # dominates the plain degree bound
                    best = max(best, sorted_degree_bound(model))
                else:
                    best = max(best, degree_bound(model))
        if config.clique or config.clique_partition:
            with self.clock.phase(CLQ_LB):
                if config.clique_partition:
                    best = max(best, clique_partition_bound(model))
                if config.clique:
                    best = max(best, clique_bound(model))
        return best
