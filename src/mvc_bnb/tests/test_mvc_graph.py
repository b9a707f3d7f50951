import unittest

import networkx as nx
import numpy as np

from mvc_bnb.algorithms.mvc_graph import ActiveGraph, Graph
from mvc_bnb.errors import InvalidGraphError
from mvc_bnb.simulator import GraphGenerator


class TestGraph(unittest.TestCase):

    def test_construction(self):
        g = Graph(4, [(0, 1), (1, 2), (2, 0), (2, 3)])
        self.assertEqual(g.order, 4)
        self.assertEqual(g.size, 4)
        self.assertEqual(g.neighbors(2), (0, 1, 3))
        self.assertTrue(g.has_edge(1, 0))
        self.assertFalse(g.has_edge(0, 3))
        self.assertEqual(list(g.edges()), [(0, 1), (0, 2), (1, 2), (2, 3)])

    def test_rejects_self_loop(self):
        with self.assertRaises(InvalidGraphError):
            Graph(3, [(1, 1)])

    def test_rejects_duplicate_edge(self):
        with self.assertRaises(InvalidGraphError):
            Graph(3, [(0, 1), (1, 0)])

    def test_rejects_out_of_range(self):
        with self.assertRaises(InvalidGraphError):
            Graph(3, [(0, 3)])
        with self.assertRaises(InvalidGraphError):
            Graph(3, [(-1, 2)])

    def test_invalid_graph_error_is_value_error(self):
        with self.assertRaises(ValueError):
            Graph(2, [(0, 0)])

    def test_networkx_roundtrip(self):
        G = nx.Graph()
        G.add_edges_from([(10, 20), (20, 30)])
        G.add_node(40)
        g, mapping = Graph.from_networkx(G)
        self.assertEqual(mapping, {10: 0, 20: 1, 30: 2, 40: 3})
        self.assertEqual(g.edge_set(), {(0, 1), (1, 2)})
        H = g.to_networkx()
        self.assertEqual(H.number_of_nodes(), 4)
        self.assertEqual(set(map(tuple, map(sorted, H.edges()))), {(0, 1), (1, 2)})

    def test_from_networkx_rejects_directed(self):
        with self.assertRaises(InvalidGraphError):
            Graph.from_networkx(nx.DiGraph([(0, 1)]))

    def test_equality(self):
        self.assertEqual(Graph(3, [(0, 1)]), Graph(3, [(1, 0)]))
        self.assertNotEqual(Graph(3, [(0, 1)]), Graph(3, [(0, 2)]))


class TestActiveGraph(unittest.TestCase):

    def setUp(self):
        # 0 - 1 - 2 - 3 plus chord 0 - 2
        self.graph = Graph(4, [(0, 1), (1, 2), (2, 3), (0, 2)])
        self.model = ActiveGraph(self.graph)

    def test_initial_state(self):
        self.assertEqual(self.model.uncovered_edge_count(), 4)
        self.assertEqual(self.model.num_active, 4)
        self.assertEqual([self.model.active_degree(v) for v in range(4)], [2, 2, 3, 1])

    def test_deactivate_updates_counts(self):
        self.model.deactivate(2)
        self.assertEqual(self.model.uncovered_edge_count(), 1)
        self.assertFalse(self.model.is_active(2))
        self.assertEqual(self.model.active_degree(0), 1)
        self.assertEqual(self.model.active_degree(1), 1)
        self.assertEqual(self.model.active_degree(3), 0)
        self.assertEqual(self.model.active_subgraph_edges(), [(0, 1)])

    def test_reactivate_is_exact_inverse(self):
        self.model.deactivate(2)
        self.model.deactivate(0)
        self.assertEqual(self.model.uncovered_edge_count(), 0)
        self.model.reactivate(0)
        self.model.reactivate(2)
        self.assertEqual(self.model.uncovered_edge_count(), 4)
        self.assertEqual([self.model.active_degree(v) for v in range(4)], [2, 2, 3, 1])
        self.assertEqual(self.model.depth, 0)

    def test_stack_discipline_enforced(self):
        self.model.deactivate(1)
        self.model.deactivate(3)
        with self.assertRaises(RuntimeError):
            self.model.reactivate(1)

    def test_double_deactivate_rejected(self):
        self.model.deactivate(1)
        with self.assertRaises(ValueError):
            self.model.deactivate(1)

    def test_max_active_degree_ties_lowest_index(self):
        g = GraphGenerator.cycle(5)
        model = ActiveGraph(g)
        self.assertEqual(model.max_active_degree(), (0, 2))
        model.deactivate(0)
        # 2 and 3 keep degree 2, 1 and 4 drop to 1
        self.assertEqual(model.max_active_degree(), (2, 2))

    def test_max_active_degree_empty(self):
        model = ActiveGraph(Graph(1))
        model.deactivate(0)
        self.assertEqual(model.max_active_degree(), (None, 0))

    def test_active_neighbors_restartable(self):
        neighbours = self.model.active_neighbors(2)
        self.assertEqual(list(neighbours), [0, 1, 3])
        self.assertEqual(list(neighbours), [0, 1, 3])
        self.model.deactivate(1)
        self.assertEqual(list(neighbours), [0, 3])
        self.assertEqual(len(neighbours), 2)

    def test_random_walk_restores_everything(self):
        graph = GraphGenerator.random_graph(15, 0.4, seed=7)
        model = ActiveGraph(graph)
        degrees = [model.active_degree(v) for v in range(graph.order)]
        rng = np.random.default_rng(3)
        order = [int(v) for v in rng.permutation(graph.order)[:10]]

        for v in order:
            model.deactivate(v)
            active = set(int(u) for u in model.active_vertices())
            expected = sum(1 for a, b in graph.edges() if a in active and b in active)
            self.assertEqual(model.uncovered_edge_count(), expected)
            for u in active:
                self.assertEqual(model.active_degree(u), sum(1 for w in graph.neighbors(u) if w in active))

        for v in reversed(order):
            model.reactivate(v)

        self.assertEqual(model.uncovered_edge_count(), graph.size)
        self.assertEqual([model.active_degree(v) for v in range(graph.order)], degrees)


if __name__ == '__main__':
    unittest.main()
