"""
Formatting and tabulation of search results.
"""
import logging
from pathlib import Path
from typing import Dict, List, Optional

import pandas as pd

from ..algorithms.branch_and_bound import MVCResult
from ..clock import PHASES
from ..errors import KnownOptimalStoreError

logger = logging.getLogger(__name__)

PHASE_LABELS = {
    "deg_lb": "deg",
    "clq_lb": "clq",
    "max_deg": "max deg",
    "save_restore": "save/restore",
}


def phase_breakdown(result: MVCResult) -> Dict[str, Dict[str, float]]:
    """
    Seconds and share of the total run time spent in each phase.

    Returns:
        ``{phase: {"seconds": s, "percent": p}}`` for the standard phases
    """
    total = result.elapsed
    breakdown = {}
    for name in PHASES:
        seconds = result.phase_times.get(name, 0.0)
        percent = seconds * 100.0 / total if total > 0 else 0.0
        breakdown[name] = {"seconds": seconds, "percent": percent}
    return breakdown


def annotate(value: int, graph_id: str, store) -> str:
    """
    Compare ``value`` with the recorded optimum for ``graph_id``.

    Store failures only degrade the annotation; they are logged, not raised.
    """
    if store is None:
        return "no recorded value"
    try:
        known = store.get(graph_id)
    except KnownOptimalStoreError as e:
        logger.warning(f"Known-optimal store unavailable: {e}")
        return f"unknown ({e})"
    if known is None:
        return "no recorded value"
    if known.value == value:
        return "optimal"
    return f"not optimal, recorded value is {known.value}"


def format_result(result: MVCResult, graph_id: str, annotation: Optional[str] = None,
                  value: Optional[int] = None, label: str = "MVC") -> str:
    """
    Multi-line text report of one run.

    Args:
        result: The search outcome
        graph_id: Name shown in the header
        annotation: Optimality note from ``annotate``
        value: Reported value if it differs from the cover size (clique runs)
        label: Name of the reported value
    """
    value = result.size if value is None else value
    lines = [
        "================ Result ===================",
        f"Graph          : {graph_id}",
        f"{label:<15}: {value}",
    ]
    if label == "MVC":
        lines.append(f"Cover          : {list(result.cover)}")
    lines.append(f"Time           : {result.elapsed:.6f}s")
    lines.append(f"Proven optimal : {'yes' if result.proven_optimal else 'no (' + result.stop_reason + ')'}")
    lines.append(f"Nodes          : {result.nodes} ({result.pruned} pruned)")
    if annotation is not None:
        lines.append(f"Known value    : {annotation}")
    if result.phase_times:
        lines.append("======== Details about performance ========")
        for name, row in phase_breakdown(result).items():
            lines.append(f"Time spent in {PHASE_LABELS[name]} : {row['percent']:.4f}% ({row['seconds']:.6f}s)")
    return "\n".join(lines)


def result_row(graph_id: str, result: MVCResult, algorithm: str = "BnB",
               annotation: Optional[str] = None) -> Dict:
    row = {
        "graph": graph_id,
        "algorithm": algorithm,
        "mvc": result.size,
        "proven_optimal": result.proven_optimal,
        "stop_reason": result.stop_reason,
        "nodes": result.nodes,
        "pruned": result.pruned,
        "time": result.elapsed,
        "annotation": annotation,
    }
    for name in PHASES:
        row[f"time_{name}"] = result.phase_times.get(name, 0.0)
    return row


def results_to_dataframe(rows: List[Dict]) -> pd.DataFrame:
    df = pd.DataFrame(rows)
    if not df.empty and "time" in df.columns:
        df = df.sort_values(["graph", "algorithm"]).reset_index(drop=True)
    return df


def save_results_csv(rows: List[Dict], path) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    results_to_dataframe(rows).to_csv(path, index=False)
    logger.info(f"Saved {len(rows)} result row(s) to {path}")
    return path
