"""
Graph representations used by the branch and bound search.

``Graph`` is the immutable input graph on vertices ``0..n-1``.
``ActiveGraph`` layers a mutable active-vertex subset on top of it: vertices
are switched off and on again in strict stack order, and the active degrees
and the number of uncovered edges are kept up to date incrementally so the
search never has to copy the graph.
"""
from typing import Dict, FrozenSet, Iterable, Iterator, List, Optional, Tuple

import networkx as nx
import numpy as np

from ..errors import InvalidGraphError


class Graph:
    """Immutable simple undirected graph on vertices ``0..n-1``."""

    __slots__ = ("_n", "_adj", "_adj_sets", "_m")

    def __init__(self, n: int, edges: Iterable[Tuple[int, int]] = ()):
        if n < 0:
            raise InvalidGraphError(f"Vertex count must be non-negative, got {n}")
        neighbours: List[List[int]] = [[] for _ in range(n)]
        seen = set()
        for u, v in edges:
            if not (0 <= u < n and 0 <= v < n):
                raise InvalidGraphError(f"Edge ({u}, {v}) references a vertex outside 0..{n - 1}")
            if u == v:
                raise InvalidGraphError(f"Self loop on vertex {u}")
            key = (u, v) if u < v else (v, u)
            if key in seen:
                raise InvalidGraphError(f"Duplicate edge ({u}, {v})")
            seen.add(key)
            neighbours[u].append(v)
            neighbours[v].append(u)

        self._n = n
        self._adj = tuple(tuple(sorted(nbrs)) for nbrs in neighbours)
        self._adj_sets = tuple(frozenset(nbrs) for nbrs in self._adj)
        self._m = len(seen)

    @classmethod
    def from_networkx(cls, G: nx.Graph) -> Tuple["Graph", Dict[object, int]]:
        """
        Build a graph from a NetworkX graph.

        Nodes are relabelled to ``0..n-1`` in sorted order (insertion order if
        the labels are not comparable).

        Returns:
            The graph and the mapping from original labels to vertex indices
        """
        if G.is_directed() or G.is_multigraph():
            raise InvalidGraphError("Only simple undirected graphs are supported")
        nodes = list(G.nodes())
        try:
            nodes = sorted(nodes)
        except TypeError:
            pass
        mapping = {node: i for i, node in enumerate(nodes)}
        edges = [(mapping[u], mapping[v]) for u, v in G.edges()]
        return cls(len(nodes), edges), mapping

    def to_networkx(self) -> nx.Graph:
        G = nx.Graph()
        G.add_nodes_from(range(self._n))
        G.add_edges_from(self.edges())
        return G

    @property
    def order(self) -> int:
        return self._n

    @property
    def size(self) -> int:
        return self._m

    def __len__(self):
        return self._n

    def neighbors(self, v: int) -> Tuple[int, ...]:
        return self._adj[v]

    def neighbor_set(self, v: int) -> FrozenSet[int]:
        return self._adj_sets[v]

    def degree(self, v: int) -> int:
        return len(self._adj[v])

    def has_edge(self, u: int, v: int) -> bool:
        return v in self._adj_sets[u]

    def edges(self) -> Iterator[Tuple[int, int]]:
        """Every edge once, as ``(u, v)`` with ``u < v``, in lexicographic order."""
        for u, nbrs in enumerate(self._adj):
            for v in nbrs:
                if u < v:
                    yield u, v

    def edge_set(self) -> FrozenSet[Tuple[int, int]]:
        return frozenset(self.edges())

    def density(self) -> float:
        if self._n < 2:
            return 0.0
        return 2 * self._m / (self._n * (self._n - 1))

    def __eq__(self, other):
        if not isinstance(other, Graph):
            return NotImplemented
        return self._n == other._n and self._adj == other._adj

    def __hash__(self):
        return hash((self._n, self._adj))

    def __repr__(self):
        return f"Graph(order={self._n}, size={self._m})"


class ActiveNeighbors:
    """Restartable view over the currently active neighbours of a vertex."""

    __slots__ = ("_model", "_v")

    def __init__(self, model: "ActiveGraph", v: int):
        self._model = model
        self._v = v

    def __iter__(self):
        active = self._model._active
        for u in self._model.graph.neighbors(self._v):
            if active[u]:
                yield u

    def __len__(self):
        return sum(1 for _ in self)

    def __repr__(self):
        return f"ActiveNeighbors({self._v}: {list(self)})"


class ActiveGraph:
    """
    Mutable view of a ``Graph`` restricted to its active vertices.

    Degrees are only meaningful for active vertices. ``deactivate`` and
    ``reactivate`` must be paired in stack order; this is checked.
    """

    def __init__(self, graph: Graph):
        self.graph = graph
        n = graph.order
        self._active = np.ones(n, dtype=bool)
        self._degree = np.fromiter((graph.degree(v) for v in range(n)), dtype=np.int64, count=n)
        self._uncovered = graph.size
        self._num_active = n
        self._trail: List[int] = []

    def deactivate(self, v: int):
        if not self._active[v]:
            raise ValueError(f"Vertex {v} is already inactive")
        active = self._active
        degree = self._degree
        active[v] = False
        removed = 0
        for u in self.graph.neighbors(v):
            if active[u]:
                degree[u] -= 1
                removed += 1
        self._uncovered -= removed
        self._num_active -= 1
        self._trail.append(v)

    def reactivate(self, v: int):
        if not self._trail or self._trail[-1] != v:
            last = self._trail[-1] if self._trail else None
            raise RuntimeError(f"Cannot reactivate {v}: last deactivated vertex is {last}")
        self._trail.pop()
        active = self._active
        degree = self._degree
        restored = 0
        for u in self.graph.neighbors(v):
            if active[u]:
                degree[u] += 1
                restored += 1
        active[v] = True
        self._uncovered += restored
        self._num_active += 1

    def is_active(self, v: int) -> bool:
        return bool(self._active[v])

    @property
    def num_active(self) -> int:
        return self._num_active

    @property
    def depth(self) -> int:
        """Number of deactivations not yet undone."""
        return len(self._trail)

    def active_vertices(self) -> np.ndarray:
        return np.flatnonzero(self._active)

    def active_degree(self, v: int) -> int:
        if not self._active[v]:
            raise ValueError(f"Vertex {v} is inactive")
        return int(self._degree[v])

    def active_degrees(self) -> np.ndarray:
        """Degrees of the active vertices, in vertex order."""
        return self._degree[self._active]

    def max_active_degree(self) -> Tuple[Optional[int], int]:
        """
        Active vertex of maximum active degree.

        Ties go to the lowest index (``argmax`` returns the first maximum).

        Returns:
            ``(vertex, degree)``, or ``(None, 0)`` when no vertex is active
        """
        if self._num_active == 0:
            return None, 0
        masked = np.where(self._active, self._degree, -1)
        v = int(masked.argmax())
        return v, int(masked[v])

    def uncovered_edge_count(self) -> int:
        return self._uncovered

    def active_neighbors(self, v: int) -> ActiveNeighbors:
        return ActiveNeighbors(self, v)

    def active_subgraph_edges(self) -> List[Tuple[int, int]]:
        """Edges with both endpoints active."""
        active = self._active
        return [(u, v) for u, v in self.graph.edges() if active[u] and active[v]]

    def __repr__(self):
        return (f"ActiveGraph(active={self._num_active}/{self.graph.order}, "
                f"uncovered={self._uncovered})")
