import matplotlib.pyplot as plt
import networkx as nx

from ..clock import PHASES


def _finish(fig, path):
    if path is not None:
        fig.savefig(path, bbox_inches="tight")
        plt.close(fig)
    else:
        plt.show()


def visualize_cover(graph, highlighted, title="Minimum Vertex Cover", path=None):
    """
    Draw the graph with the highlighted vertices (a cover or a clique) in red.

    Args:
        graph: mvc_bnb Graph
        highlighted: Vertices to highlight
        title: Title for the plot
        path: Save to this file instead of showing the figure
    """
    G = graph.to_networkx()
    highlighted = set(highlighted)
    fig = plt.figure(figsize=(10, 7))

    pos = nx.spring_layout(G, seed=42)
    node_colors = ["tab:red" if v in highlighted else "tab:blue" for v in G.nodes()]
    nx.draw_networkx_nodes(G, pos, node_size=200, node_color=node_colors, alpha=0.8)
    nx.draw_networkx_edges(G, pos, width=0.5, alpha=0.5)
    nx.draw_networkx_labels(G, pos, labels={v: v + 1 for v in G.nodes()}, font_size=8)

    plt.title(f"{title} ({len(highlighted)} highlighted)")
    plt.axis('off')
    _finish(fig, path)
    return fig


def plot_phase_times(result, title="Time per phase", path=None):
    """Bar chart of the seconds spent in each search phase."""
    fig, ax = plt.subplots(figsize=(7, 4))
    seconds = [result.phase_times.get(name, 0.0) for name in PHASES]
    ax.bar(PHASES, seconds, color="tab:blue", alpha=0.8)
    ax.set_ylabel("seconds")
    ax.set_title(f"{title} (total {result.elapsed:.4f}s)")
    _finish(fig, path)
    return fig
