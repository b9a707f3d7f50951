from typing import Iterable

from .mvc_graph import Graph


def is_vertex_cover(graph: Graph, vertices: Iterable[int]) -> bool:
    """Every edge has at least one endpoint in ``vertices``."""
    cover = set(vertices)
    for u, v in graph.edges():
        if u not in cover and v not in cover:
            return False
    return True


def is_clique(graph: Graph, vertices: Iterable[int]) -> bool:
    vertices = list(vertices)
    for i, u in enumerate(vertices):
        for v in vertices[i + 1:]:
            if u == v or not graph.has_edge(u, v):
                return False
    return True


def is_independent_set(graph: Graph, vertices: Iterable[int]) -> bool:
    vertices = list(vertices)
    for i, u in enumerate(vertices):
        for v in vertices[i + 1:]:
            if graph.has_edge(u, v):
                return False
    return True
