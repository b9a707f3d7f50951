'''
Add graphs found in a directory to the known-optimal store.

Every .clq / .col file gets an entry (order, size, no value). With
``solve=True`` the minimum vertex cover is computed as well and recorded,
but only when the solver proves it optimal:

    - "bnb": branch and bound within ``time_limit`` seconds
    - "ilp": the pulp/CBC formulation

Example:
    python main.py update-store --graphs-dir resources/graphs --solve
'''
import logging
from pathlib import Path
from typing import Dict

from .algorithms.branch_and_bound import SearchConfig, solve as solve_bnb
from .algorithms.ilp_solver import solve_ilp_vertex_cover
from .data.data_loader import list_graph_files, load_clq_file
from .data.known_optimal import KnownOptimalStore
from .errors import InvalidClqFileFormat

logger = logging.getLogger(__name__)


def _solve(graph, method: str, time_limit):
    if method == "ilp":
        res = solve_ilp_vertex_cover(graph, time_limit=time_limit or 0)
        if "error" in res:
            return None, res["error"]
        return res["mvc_size"], None
    if method == "bnb":
        result = solve_bnb(graph, SearchConfig(time_limit=time_limit))
        if not result.proven_optimal:
            return None, f"not proven optimal ({result.stop_reason})"
        return result.size, None
    raise ValueError(f"Unknown method {method!r}, expected 'bnb' or 'ilp'")


def update_store_from_directory(store: KnownOptimalStore, directory, solve: bool = False,
                                method: str = "bnb", time_limit=None) -> Dict[str, str]:
    """
    Register every DIMACS graph in ``directory`` with ``store`` and save it.

    Files that fail to parse are reported and skipped; they never stop the
    scan.

    Returns:
        Mapping of file name to what happened to it
    """
    path = Path(directory)
    if not path.exists():
        raise FileNotFoundError(f"Path not found: {directory}")

    outcome = {}
    for graph_file in list_graph_files(path):
        name = graph_file.name
        try:
            graph = load_clq_file(graph_file)
        except InvalidClqFileFormat as e:
            logger.error(f"Error while loading graph at {graph_file}: {e}")
            outcome[name] = f"invalid: {e.message}"
            continue

        added = store.add_graph(name, graph_file.suffix.lstrip("."), graph)
        status = "added" if added else "present"

        if solve and store.get(name) is None:
            logger.info(f"Computing minimum vertex cover for {name} ...")
            value, problem = _solve(graph, method, time_limit)
            if value is None:
                logger.warning(f"No proven optimum for {name}: {problem}")
                status += ", unsolved"
            else:
                store.update_value(name, value)
                status += f", val={value}"
        outcome[name] = status
        logger.info(f"{name}: {graph.order} vertices, {graph.size} edges -> {status}")

    store.save()
    return outcome
