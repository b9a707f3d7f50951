"""
Exhaustive baselines, only usable on small graphs.

Subsets are enumerated by increasing size, so the first hit is optimal.
"""
import itertools
from typing import List

from .helpers import is_clique, is_vertex_cover
from .mvc_graph import Graph


def naive_search(graph: Graph) -> List[int]:
    """
    Minimum vertex cover by trying every subset from the smallest up.

    Returns:
        The lexicographically first minimum cover among subsets of that size
    """
    vertices = range(graph.order)
    for k in range(graph.order + 1):
        for candidate in itertools.combinations(vertices, k):
            if is_vertex_cover(graph, candidate):
                return list(candidate)
    # unreachable: the full vertex set is always a cover
    return list(vertices)


def naive_max_clique(graph: Graph) -> List[int]:
    """Maximum clique by trying every subset from the largest down."""
    vertices = range(graph.order)
    for k in range(graph.order, 0, -1):
        for candidate in itertools.combinations(vertices, k):
            if is_clique(graph, candidate):
                return list(candidate)
    return []
