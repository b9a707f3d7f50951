"""
Command line entry point.

    python main.py naive test.clq
    python main.py bnb test.clq [-c]
    python main.py clique test.clq
    python main.py update-store [--solve]
"""
import argparse
import logging
import sys
from pathlib import Path

from .add_ground_truth import update_store_from_directory
from .algorithms.bounds import BoundConfig
from .algorithms.branch_and_bound import SearchConfig, solve
from .algorithms.complement import complement, solve_max_clique, solve_on_complement
from .algorithms.helpers import is_vertex_cover
from .algorithms.naive_search import naive_search
from .clock import Clock, timed_step
from .data.data_loader import load_graph
from .data.known_optimal import KnownOptimalStore
from .errors import KnownOptimalStoreError, MVCError
from .evaluation.report import annotate, format_result, result_row, save_results_csv

logger = logging.getLogger(__name__)

DEFAULT_GRAPHS_DIR = "resources/graphs"
DEFAULT_STORE = "resources/graph_data.yml"


def resolve_graph_path(name: str, graphs_dir: str) -> Path:
    """``name`` as given if it exists, otherwise looked up in ``graphs_dir``."""
    path = Path(name)
    if path.exists():
        return path
    return Path(graphs_dir) / name


def _search_config(args) -> SearchConfig:
    bounds = BoundConfig(
        degree=not args.no_degree_bound,
        sorted_degree=args.sorted_degree_bound,
        clique=args.clique_bound,
        clique_partition=args.clique_partition_bound,
    )
    return SearchConfig(bounds=bounds, time_limit=args.time_limit, node_limit=args.node_limit)


def _describe_bounds(bounds: BoundConfig) -> str:
    names = [name for name in ("degree", "sorted_degree", "clique", "clique_partition")
             if getattr(bounds, name)]
    return " + ".join(names) if names else "no bounds"


def _record(args, graph_id: str, value: int, result, algorithm: str, comment: str):
    """Append the run to the store; failures are reported but do not fail the run."""
    store = KnownOptimalStore(args.store)
    try:
        store.add_run(graph_id, value, result.elapsed, result.stopped_early, algorithm, comment)
        store.save()
    except KnownOptimalStoreError as e:
        logger.warning(f"Run not recorded: {e}")


@timed_step("naive")
def cmd_naive(args) -> int:
    graph_path = resolve_graph_path(args.graph, args.graphs_dir)
    graph = load_graph(graph_path)
    cover = naive_search(graph)
    print(f"Minimum vertex cover for the {graph_path.name!r} graph = {len(cover)} => {[v + 1 for v in cover]}")
    return 0


@timed_step("bnb")
def cmd_bnb(args) -> int:
    graph_path = resolve_graph_path(args.graph, args.graphs_dir)
    graph = load_graph(graph_path)
    config = _search_config(args)
    clock = Clock()

    if args.complement:
        print("/!\\ This computes the MVC value on the complement graph /!\\")
        result = solve_on_complement(graph, config, clock)
        target = complement(graph)
        annotation = None
    else:
        result = solve(graph, config, clock)
        target = graph
        annotation = annotate(result.size, graph_path.name, KnownOptimalStore(args.store))

    if not is_vertex_cover(target, result.cover):
        logger.error("Returned set is not a vertex cover")
        return 1

    print(format_result(result, graph_path.name, annotation))

    comment = _describe_bounds(config.bounds) + (" on complement" if args.complement else "")
    if args.record and not args.complement:
        _record(args, graph_path.name, result.size, result, "BnB", comment)
    if args.csv:
        save_results_csv([result_row(graph_path.name, result, "BnB", annotation)], args.csv)
    if args.plot:
        from .visualization.plot import visualize_cover
        visualize_cover(target, result.cover, title=f"MVC of {graph_path.name}", path=args.plot)
    return 0


@timed_step("clique")
def cmd_clique(args) -> int:
    graph_path = resolve_graph_path(args.graph, args.graphs_dir)
    graph = load_graph(graph_path)
    compl_size = graph.order * (graph.order - 1) // 2 - graph.size
    logger.info(f"Finding max clique. Complement: order = {graph.order}, size = {compl_size}")

    clock = Clock()
    res = solve_max_clique(graph, _search_config(args), clock)
    if not is_vertex_cover(complement(graph), res.mvc_result.cover):
        logger.error("Returned set is not a vertex cover of the complement")
        return 1

    print(format_result(res.mvc_result, graph_path.name, value=res.value, label="Max clique"))
    print(f"Clique         : {[v + 1 for v in res.clique]}")

    if args.csv:
        row = result_row(graph_path.name, res.mvc_result, "BnB-clique")
        row["clique"] = res.value
        save_results_csv([row], args.csv)
    if args.plot:
        from .visualization.plot import visualize_cover
        visualize_cover(graph, res.clique, title=f"Max clique of {graph_path.name}", path=args.plot)
    return 0


@timed_step("update-store")
def cmd_update_store(args) -> int:
    store = KnownOptimalStore(args.store, create=True)
    outcome = update_store_from_directory(store, args.graphs_dir, solve=args.solve,
                                          method=args.method, time_limit=args.time_limit)
    for name, status in outcome.items():
        print(f"{name}: {status}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Exact minimum vertex cover / maximum clique by branch and bound.")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    parser.add_argument("--graphs-dir", default=DEFAULT_GRAPHS_DIR,
                        help=f"directory graph names are resolved against (default: {DEFAULT_GRAPHS_DIR})")
    parser.add_argument("--store", default=DEFAULT_STORE,
                        help=f"known-optimal YAML store (default: {DEFAULT_STORE})")

    def positive_float(s):
        value = float(s)
        if value <= 0:
            raise argparse.ArgumentTypeError(f"must be positive: {s}")
        return value

    def positive_int(s):
        value = int(s)
        if value <= 0:
            raise argparse.ArgumentTypeError(f"must be positive: {s}")
        return value

    search = argparse.ArgumentParser(add_help=False)
    search.add_argument("--time-limit", type=positive_float, default=None, help="seconds before giving up")
    search.add_argument("--node-limit", type=positive_int, default=None, help="search nodes before giving up")
    search.add_argument("--no-degree-bound", action="store_true", help="disable the degree lower bound")
    search.add_argument("--sorted-degree-bound", action="store_true", help="use the sorted degree lower bound")
    search.add_argument("--clique-bound", action="store_true", help="use the greedy clique lower bound")
    search.add_argument("--clique-partition-bound", action="store_true",
                        help="use the clique partition lower bound")
    search.add_argument("--csv", default=None, help="write the result row to this CSV file")
    search.add_argument("--plot", default=None, help="save a drawing of the solution to this file")

    sub = parser.add_subparsers(dest="command", required=True)

    naive = sub.add_parser("naive", help="exhaustive search (small graphs only)")
    naive.add_argument("graph")
    naive.set_defaults(func=cmd_naive)

    bnb = sub.add_parser("bnb", parents=[search], help="branch and bound minimum vertex cover")
    bnb.add_argument("graph")
    bnb.add_argument("-c", "--complement", action="store_true", help="solve the complement graph instead")
    bnb.add_argument("--record", action="store_true", help="append the run to the store")
    bnb.set_defaults(func=cmd_bnb)

    clique = sub.add_parser("clique", parents=[search], help="maximum clique through the complement")
    clique.add_argument("graph")
    clique.set_defaults(func=cmd_clique)

    update = sub.add_parser("update-store", help="add the graphs of --graphs-dir to the store")
    update.add_argument("--solve", action="store_true", help="compute missing values")
    update.add_argument("--method", choices=("bnb", "ilp"), default="bnb")
    update.add_argument("--time-limit", type=positive_float, default=None)
    update.set_defaults(func=cmd_update_store)

    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format='[%(levelname)s] %(message)s')
    try:
        return args.func(args)
    except (MVCError, FileNotFoundError) as e:
        logger.error(f"{type(e).__name__}: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
