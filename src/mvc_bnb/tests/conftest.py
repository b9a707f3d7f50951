from __future__ import annotations

import itertools
import os
import random
from pathlib import Path

import networkx as nx
import numpy as np
import pytest

from mvc_bnb.algorithms.mvc_graph import Graph

DEFAULT_SEED = int(os.getenv("MVC_BNB_SEED", "1234"))

RESOURCES = Path(__file__).resolve().parents[3] / "resources"


def pytest_configure(config) -> None:  # pylint: disable=unused-argument
    random.seed(DEFAULT_SEED)
    np.random.seed(DEFAULT_SEED)


def oracle_mvc_size(graph: Graph) -> int:
    """n - alpha(G), with alpha computed by networkx as a max clique of the complement."""
    if graph.order == 0:
        return 0
    H = nx.complement(graph.to_networkx())
    clique, _ = nx.max_weight_clique(H, weight=None)
    return graph.order - len(clique)


def brute_force_mvc_size(vertices, edges) -> int:
    """Smallest subset of ``vertices`` touching every edge in ``edges``."""
    vertices = list(vertices)
    edges = list(edges)
    for k in range(len(vertices) + 1):
        for subset in itertools.combinations(vertices, k):
            chosen = set(subset)
            if all(u in chosen or v in chosen for u, v in edges):
                return k
    return len(vertices)


@pytest.fixture
def resources() -> Path:
    return RESOURCES


@pytest.fixture
def graphs_dir() -> Path:
    return RESOURCES / "graphs"
