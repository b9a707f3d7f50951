"""
Integer Linear Programming (ILP) formulation of minimum vertex cover.

    min  sum_v x_v
    s.t. x_u + x_v >= 1   for every edge (u, v)
         x_v in {0, 1}

Used as an independent exact oracle next to the branch and bound search.
"""
import logging

import pulp

from .mvc_graph import Graph

logger = logging.getLogger(__name__)


def solve_ilp_vertex_cover(graph: Graph, time_limit=60, verbose=False):
    """
    Solve minimum vertex cover with CBC through pulp.

    Args:
        graph: Graph to cover
        time_limit: CBC time limit in seconds (0 or None for no limit)
        verbose: Show solver output

    Returns:
        dict with ``mvc_size``, ``cover``, ``optimal`` and ``status``, or
        ``{"error": ...}`` if no solution was found
    """
    if graph.size == 0:
        return {"mvc_size": 0, "cover": [], "optimal": True, "status": "Optimal"}

    prob = pulp.LpProblem("Minimum_Vertex_Cover", pulp.LpMinimize)
    x = {v: pulp.LpVariable(f"x_{v}", cat=pulp.LpBinary) for v in range(graph.order)}

    prob += pulp.lpSum(x.values())
    for u, v in graph.edges():
        prob += x[u] + x[v] >= 1

    if time_limit:
        status = prob.solve(pulp.PULP_CBC_CMD(timeLimit=time_limit, msg=verbose))
    else:
        status = prob.solve(pulp.PULP_CBC_CMD(msg=verbose))

    status_name = pulp.LpStatus[status]
    logger.debug(f"ILP status: {status_name}")
    if status != pulp.LpStatusOptimal:
        return {"error": f"Solver finished with status {status_name}", "status": status_name}

    cover = [v for v in range(graph.order) if (pulp.value(x[v]) or 0) > 0.5]
    return {
        "mvc_size": len(cover),
        "cover": cover,
        "optimal": True,
        "status": status_name,
    }
