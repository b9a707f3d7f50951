"""
Exact minimum vertex cover by branch and bound.

At every node of the search tree a vertex v of maximum active degree is
chosen and two exhaustive cases are explored:

1. v is in the cover: remove v from the active graph.
2. v is not in the cover: every active neighbour of v must be, so remove v
   and add all of N(v) to the cover.

A node is cut when the partial cover plus a lower bound on the rest cannot
beat the incumbent. The active graph is mutated in place and restored when a
branch returns.
"""
import sys
import time
import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, FrozenSet, Iterable, List, Optional, Tuple

from ..clock import MAX_DEG, SAVE_RESTORE, NullClock
from .bounds import BoundConfig, BoundEstimator
from .helpers import is_vertex_cover
from .mvc_graph import ActiveGraph, Graph

logger = logging.getLogger(__name__)

COMPLETE = "complete"
TIME_LIMIT = "time_limit"
NODE_LIMIT = "node_limit"


@dataclass
class SearchConfig:
    """
    Settings of one search invocation.

    Args:
        bounds: Lower bounds used for pruning
        time_limit: Wall clock budget in seconds; None for no limit
        node_limit: Maximum number of search nodes to enter; None for no limit
        initial_cover: A known vertex cover used as the starting incumbent
    """
    bounds: BoundConfig = field(default_factory=BoundConfig)
    time_limit: Optional[float] = None
    node_limit: Optional[int] = None
    initial_cover: Optional[Iterable[int]] = None

    def __post_init__(self):
        if self.time_limit is not None and self.time_limit <= 0:
            raise ValueError(f"time_limit must be positive, got {self.time_limit}")
        if self.node_limit is not None and self.node_limit <= 0:
            raise ValueError(f"node_limit must be positive, got {self.node_limit}")


class BestSolution:
    """The incumbent: smallest cover found so far in one search."""

    def __init__(self, size: int, cover: Iterable[int]):
        self.size = size
        self.cover: FrozenSet[int] = frozenset(cover)
        self.history: List[int] = [size]

    def offer(self, cover: Iterable[int]) -> bool:
        """Replace the incumbent if ``cover`` is strictly smaller."""
        cover = frozenset(cover)
        if len(cover) >= self.size:
            return False
        self.size = len(cover)
        self.cover = cover
        self.history.append(self.size)
        return True


class SearchState:
    """
    Mutable state threaded through the recursion.

    Holds the active graph and the partial cover. Every ``include`` /
    ``exclude`` has a matching undo that restores the previous state exactly.
    """

    def __init__(self, graph: Graph):
        self.model = ActiveGraph(graph)
        self.cover: List[int] = []
        self.cover_set = set()

    @property
    def partial_size(self) -> int:
        return len(self.cover)

    def _push(self, v: int):
        self.model.deactivate(v)
        self.cover.append(v)
        self.cover_set.add(v)

    def _pop(self, v: int):
        self.cover.pop()
        self.cover_set.discard(v)
        self.model.reactivate(v)

    def include(self, v: int):
        self._push(v)

    def undo_include(self, v: int):
        self._pop(v)

    def exclude(self, v: int) -> List[int]:
        """Leave v out of the cover; its active neighbours go in. Returns them."""
        forced = list(self.model.active_neighbors(v))
        self.model.deactivate(v)
        for u in forced:
            self._push(u)
        return forced

    def undo_exclude(self, v: int, forced: List[int]):
        for u in reversed(forced):
            self._pop(u)
        self.model.reactivate(v)


@dataclass
class MVCResult:
    """Outcome of one branch and bound run."""
    size: int
    cover: Tuple[int, ...]
    proven_optimal: bool
    stop_reason: str
    nodes: int
    pruned: int
    elapsed: float
    phase_times: Dict[str, float] = field(default_factory=dict)
    history: List[int] = field(default_factory=list)

    @property
    def stopped_early(self) -> bool:
        """True when a time or node budget ended the search."""
        return self.stop_reason != COMPLETE


class BranchAndBoundSearch:
    """
    One exact MVC search over ``graph``.

    Args:
        graph: Graph to cover
        config: Bounds and budgets
        clock: Phase timer (``Clock``); defaults to a clock that records nothing
        observer: Called with the ``SearchState`` on every node entry
    """

    def __init__(self, graph: Graph, config: Optional[SearchConfig] = None, clock=None,
                 observer: Optional[Callable[[SearchState], None]] = None):
        self.graph = graph
        self.config = config if config is not None else SearchConfig()
        self.clock = clock if clock is not None else NullClock()
        self.observer = observer
        self.estimator = BoundEstimator(self.config.bounds, self.clock)

        self.nodes = 0
        self.pruned = 0
        self._stop_reason = COMPLETE
        self._deadline = None

    def _initial_solution(self) -> BestSolution:
        if self.config.initial_cover is None:
            return BestSolution(self.graph.order, range(self.graph.order))
        cover = frozenset(self.config.initial_cover)
        if any(not 0 <= v < self.graph.order for v in cover):
            raise ValueError("initial_cover contains vertices outside the graph")
        if not is_vertex_cover(self.graph, cover):
            raise ValueError("initial_cover is not a vertex cover of the graph")
        return BestSolution(len(cover), cover)

    def _budget_exhausted(self) -> bool:
        if self._stop_reason != COMPLETE:
            return True
        if self.config.node_limit is not None and self.nodes >= self.config.node_limit:
            self._stop_reason = NODE_LIMIT
        elif self._deadline is not None and time.perf_counter() >= self._deadline:
            self._stop_reason = TIME_LIMIT
        return self._stop_reason != COMPLETE

    def run(self) -> MVCResult:
        graph = self.graph
        best = self._initial_solution()
        state = SearchState(graph)

        self.nodes = 0
        self.pruned = 0
        self._stop_reason = COMPLETE
        self._deadline = None
        # phase times in the result cover this run only
        self.clock.reset()
        start = time.perf_counter()
        if self.config.time_limit is not None:
            self._deadline = start + self.config.time_limit

        logger.info(f"Branch and bound on {graph.order} vertices, {graph.size} edges")
        # at most one level per vertex on top of whatever the caller already uses
        previous_limit = sys.getrecursionlimit()
        sys.setrecursionlimit(previous_limit + graph.order + 100)
        try:
            self._search(state, best)
        finally:
            sys.setrecursionlimit(previous_limit)
        elapsed = time.perf_counter() - start

        proven = self._stop_reason == COMPLETE
        if proven:
            logger.info(f"Minimum vertex cover of size {best.size} found in {elapsed:.4f}s "
                        f"({self.nodes} nodes, {self.pruned} pruned)")
        else:
            logger.warning(f"Search stopped early ({self._stop_reason}) after {self.nodes} nodes; "
                           f"best cover of size {best.size} is not proven optimal")

        return MVCResult(
            size=best.size,
            cover=tuple(sorted(best.cover)),
            proven_optimal=proven,
            stop_reason=self._stop_reason,
            nodes=self.nodes,
            pruned=self.pruned,
            elapsed=elapsed,
            phase_times=self.clock.snapshot(),
            history=list(best.history),
        )

    def _search(self, state: SearchState, best: BestSolution):
        if self._budget_exhausted():
            return
        self.nodes += 1
        if self.observer is not None:
            self.observer(state)

        model = state.model
        if model.uncovered_edge_count() == 0:
            if best.offer(state.cover):
                logger.debug(f"New incumbent of size {best.size} at node {self.nodes}")
            return

        if state.partial_size + self.estimator.lower_bound(model) >= best.size:
            self.pruned += 1
            return

        with self.clock.phase(MAX_DEG):
            v, _ = model.max_active_degree()

        with self.clock.phase(SAVE_RESTORE):
            state.include(v)
        self._search(state, best)
        with self.clock.phase(SAVE_RESTORE):
            state.undo_include(v)

        if self._stop_reason != COMPLETE:
            return

        with self.clock.phase(SAVE_RESTORE):
            forced = state.exclude(v)
        self._search(state, best)
        with self.clock.phase(SAVE_RESTORE):
            state.undo_exclude(v, forced)


def solve(graph: Graph, config: Optional[SearchConfig] = None, clock=None) -> MVCResult:
    """Minimum vertex cover of ``graph``."""
    return BranchAndBoundSearch(graph, config, clock).run()
