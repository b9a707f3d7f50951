import shutil

import matplotlib
import pandas as pd
import pytest

matplotlib.use("Agg")

from mvc_bnb import cli  # noqa: E402
from mvc_bnb.algorithms.branch_and_bound import MVCResult, SearchConfig, solve  # noqa: E402
from mvc_bnb.algorithms.complement import CliqueResult  # noqa: E402
from mvc_bnb.clock import Clock  # noqa: E402
from mvc_bnb.data.known_optimal import KnownOptimalStore  # noqa: E402
from mvc_bnb.evaluation.report import (  # noqa: E402
    annotate,
    format_result,
    phase_breakdown,
    result_row,
    results_to_dataframe,
    save_results_csv,
)
from mvc_bnb.simulator import GraphGenerator  # noqa: E402
from mvc_bnb.visualization.plot import plot_phase_times, visualize_cover  # noqa: E402


@pytest.fixture
def store_path(resources, tmp_path):
    path = tmp_path / "graph_data.yml"
    shutil.copy(resources / "graph_data.yml", path)
    return path


def test_annotate(store_path):
    store = KnownOptimalStore(store_path)
    assert annotate(3, "test.clq", store) == "optimal"
    assert annotate(4, "test.clq", store) == "not optimal, recorded value is 3"
    assert annotate(3, "other.clq", store) == "no recorded value"
    assert annotate(3, "test.clq", None) == "no recorded value"


def test_annotate_degrades_on_broken_store(tmp_path):
    path = tmp_path / "bad.yml"
    path.write_text("not: [a list\n")
    assert annotate(3, "test.clq", KnownOptimalStore(path)).startswith("unknown (")
    assert annotate(3, "test.clq", KnownOptimalStore(tmp_path / "missing.yml")).startswith("unknown (")


def test_format_result_with_phases():
    result = solve(GraphGenerator.cycle(5), clock=Clock())
    text = format_result(result, "c5", "optimal")
    assert text.startswith("================ Result ===================")
    assert "MVC            : 3" in text
    assert "Known value    : optimal" in text
    assert "Time spent in deg : " in text
    assert "Time spent in save/restore : " in text


def test_format_result_for_limited_run():
    result = solve(GraphGenerator.path(4), SearchConfig(node_limit=1))
    text = format_result(result, "p4")
    assert "Proven optimal : no (node_limit)" in text
    assert "Details about performance" not in text


def test_phase_breakdown_percentages():
    result = solve(GraphGenerator.random_graph(12, 0.4, seed=1), clock=Clock())
    breakdown = phase_breakdown(result)
    assert set(breakdown) == {"deg_lb", "clq_lb", "max_deg", "save_restore"}
    assert breakdown["clq_lb"]["seconds"] == 0.0
    assert sum(row["percent"] for row in breakdown.values()) <= 100.0


def test_results_csv(tmp_path):
    rows = [
        result_row("b.clq", solve(GraphGenerator.cycle(5))),
        result_row("a.clq", solve(GraphGenerator.path(4)), annotation="optimal"),
    ]
    df = results_to_dataframe(rows)
    assert list(df["graph"]) == ["a.clq", "b.clq"]

    path = save_results_csv(rows, tmp_path / "out" / "results.csv")
    loaded = pd.read_csv(path)
    assert list(loaded["mvc"]) == [2, 3]
    assert "time_deg_lb" in loaded.columns


def test_plots(tmp_path):
    graph = GraphGenerator.cycle(5)
    result = solve(graph, clock=Clock())
    fig = visualize_cover(graph, result.cover, "c5", path=tmp_path / "cover.png")
    assert fig is not None
    assert (tmp_path / "cover.png").exists()
    plot_phase_times(result, "c5", path=tmp_path / "phases.png")
    assert (tmp_path / "phases.png").exists()


def run_cli(graphs_dir, store_path, *args):
    return cli.main(["--graphs-dir", str(graphs_dir), "--store", str(store_path), *args])


def test_cli_bnb(graphs_dir, store_path, capsys):
    assert run_cli(graphs_dir, store_path, "bnb", "test.clq") == 0
    out = capsys.readouterr().out
    assert "MVC            : 3" in out
    assert "Known value    : optimal" in out


def test_cli_bnb_with_bounds_and_record(graphs_dir, store_path, tmp_path, capsys):
    csv_path = tmp_path / "run.csv"
    code = run_cli(graphs_dir, store_path, "bnb", "petersen.col", "--clique-bound",
                   "--sorted-degree-bound", "--record", "--csv", str(csv_path))
    assert code == 0
    assert "MVC            : 6" in capsys.readouterr().out
    runs = KnownOptimalStore(store_path).get_runs("petersen.col")
    assert runs[-1]["mvc_val"] == 6
    assert runs[-1]["comment"] == "degree + sorted_degree + clique"
    assert csv_path.exists()


def test_cli_bnb_complement(graphs_dir, store_path, capsys):
    assert run_cli(graphs_dir, store_path, "bnb", "k4.clq", "-c") == 0
    out = capsys.readouterr().out
    assert "complement graph" in out
    assert "MVC            : 0" in out


def test_cli_clique(graphs_dir, store_path, capsys):
    assert run_cli(graphs_dir, store_path, "clique", "test.clq") == 0
    out = capsys.readouterr().out
    assert "Max clique     : 3" in out
    assert "Clique         : [" in out


def test_cli_naive(graphs_dir, store_path, capsys):
    assert run_cli(graphs_dir, store_path, "naive", "triangle.clq") == 0
    assert "= 2 =>" in capsys.readouterr().out


def test_cli_node_limit(graphs_dir, store_path, capsys):
    assert run_cli(graphs_dir, store_path, "bnb", "petersen.col", "--node-limit", "1") == 0
    assert "Proven optimal : no (node_limit)" in capsys.readouterr().out


def test_cli_missing_graph(graphs_dir, store_path):
    assert run_cli(graphs_dir, store_path, "bnb", "missing.clq") == 1


def test_cli_invalid_graph(tmp_path, store_path):
    (tmp_path / "bad.clq").write_text("p edge 3 5\ne 1 2\n")
    assert run_cli(tmp_path, store_path, "bnb", "bad.clq") == 1


def test_cli_rejects_bad_limit(graphs_dir, store_path):
    with pytest.raises(SystemExit):
        run_cli(graphs_dir, store_path, "bnb", "test.clq", "--time-limit", "0")


def test_cli_update_store(graphs_dir, tmp_path, capsys):
    store_path = tmp_path / "new.yml"
    assert run_cli(graphs_dir, store_path, "update-store", "--solve") == 0
    assert "test.clq: added, val=3" in capsys.readouterr().out
    assert KnownOptimalStore(store_path).get_optimal_value("star_5.clq") == 1


def test_cli_clique_rejects_invalid_complement_cover(graphs_dir, store_path, monkeypatch):
    def bogus(graph, config=None, clock=None):
        mvc = MVCResult(size=0, cover=(), proven_optimal=True, stop_reason="complete",
                        nodes=1, pruned=0, elapsed=0.0)
        return CliqueResult(value=graph.order, clique=tuple(range(graph.order)), mvc_result=mvc)

    monkeypatch.setattr(cli, "solve_max_clique", bogus)
    assert run_cli(graphs_dir, store_path, "clique", "test.clq") == 1
