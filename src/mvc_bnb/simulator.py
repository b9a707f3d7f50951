"""
Graph generation for vertex cover and clique experiments.
"""
import itertools
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

import networkx as nx
import numpy as np

from .algorithms.mvc_graph import Graph


@dataclass
class GraphConfig:
    """Configuration for random graph generation."""
    num_vertices: int = 20
    edge_prob: float = 0.3
    num_cliques: int = 0
    clique_size: int = 5
    edge_removal_prob: float = 0.1
    edge_addition_prob: float = 0.05
    seed: Optional[int] = None


class GraphGenerator:
    """Random and structured graphs with known covers."""

    @staticmethod
    def path(n: int) -> Graph:
        return Graph(n, [(i, i + 1) for i in range(n - 1)])

    @staticmethod
    def cycle(n: int) -> Graph:
        if n < 3:
            raise ValueError("A cycle needs at least 3 vertices")
        return Graph(n, [(i, (i + 1) % n) for i in range(n)])

    @staticmethod
    def complete(n: int) -> Graph:
        return Graph(n, itertools.combinations(range(n), 2))

    @staticmethod
    def star(leaves: int) -> Graph:
        """Vertex 0 is the centre."""
        return Graph(leaves + 1, [(0, i) for i in range(1, leaves + 1)])

    @staticmethod
    def empty(n: int) -> Graph:
        return Graph(n)

    @staticmethod
    def queen(size: int) -> Graph:
        """Queen graph: squares of a size x size board, adjacent when a queen attacks."""
        squares = [(r, c) for r in range(size) for c in range(size)]
        edges = []
        for i, (r1, c1) in enumerate(squares):
            for j in range(i + 1, len(squares)):
                r2, c2 = squares[j]
                if r1 == r2 or c1 == c2 or abs(r1 - r2) == abs(c1 - c2):
                    edges.append((i, j))
        return Graph(len(squares), edges)

    @staticmethod
    def random_graph(num_vertices: int, edge_prob: float, seed: Optional[int] = None) -> Graph:
        """G(n, p) with a reproducible generator."""
        rng = np.random.default_rng(seed)
        pairs = list(itertools.combinations(range(num_vertices), 2))
        keep = rng.random(len(pairs)) < edge_prob
        return Graph(num_vertices, [pair for pair, k in zip(pairs, keep) if k])

    @staticmethod
    def create_disjoint_cliques(clique_sizes: List[int]) -> Tuple[nx.Graph, Dict[int, int]]:
        """
        Create a graph with disjoint cliques of specified sizes.

        Returns:
            G: NetworkX graph with disjoint cliques
            communities: Dictionary mapping node to its clique id
        """
        G = nx.Graph()
        communities = {}
        node_id = 0
        for i, size in enumerate(clique_sizes):
            clique_nodes = list(range(node_id, node_id + size))
            G.add_nodes_from(clique_nodes)
            G.add_edges_from(itertools.combinations(clique_nodes, 2))
            for u in clique_nodes:
                communities[u] = i
            node_id += size
        return G, communities

    @staticmethod
    def perturb_graph(G: nx.Graph, communities: Dict[int, int], edge_removal_prob: float,
                      edge_addition_prob: float, rng: np.random.Generator) -> nx.Graph:
        """Remove edges inside cliques and add edges between them."""
        G_perturbed = G.copy()
        for u, v in list(G.edges()):
            if communities[u] == communities[v] and rng.random() < edge_removal_prob:
                G_perturbed.remove_edge(u, v)

        nodes = list(G.nodes())
        for i, u in enumerate(nodes):
            for v in nodes[i + 1:]:
                if communities[u] != communities[v] and rng.random() < edge_addition_prob:
                    G_perturbed.add_edge(u, v)
        return G_perturbed

    @classmethod
    def generate(cls, config: GraphConfig) -> Graph:
        """
        Generate a graph from ``config``.

        With ``num_cliques > 0`` the graph is a set of perturbed disjoint
        cliques (dense, clique-rich); otherwise it is G(n, p).
        """
        if config.num_cliques <= 0:
            return cls.random_graph(config.num_vertices, config.edge_prob, config.seed)
        rng = np.random.default_rng(config.seed)
        G, communities = cls.create_disjoint_cliques([config.clique_size] * config.num_cliques)
        G = cls.perturb_graph(G, communities, config.edge_removal_prob, config.edge_addition_prob, rng)
        graph, _ = Graph.from_networkx(G)
        return graph
