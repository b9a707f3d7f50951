"""
Utilities for loading and saving graph files.

Supported formats:
    .clq / .col   DIMACS ("p edge n m" header, "e i j" edges, 1-based)
    .txt          adjacency list ("v: n1 n2 ...", one vertex per line)
    .graph        METIS adjacency (header "n m", line i lists neighbours of i)
"""
import logging
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

import networkx as nx

from ..algorithms.mvc_graph import Graph
from ..errors import InvalidClqFileFormat, InvalidGraphError

logger = logging.getLogger(__name__)

DIMACS_SUFFIXES = (".clq", ".col")


def _parse_int(token: str, what: str, source, line_number) -> int:
    try:
        return int(token)
    except ValueError:
        raise InvalidClqFileFormat(f"Expected an integer {what}, got {token!r}", source, line_number) from None


def parse_clq(lines: Iterable[str], source: Optional[str] = None) -> Graph:
    """
    Parse DIMACS clique/colouring text.

    Args:
        lines: Lines of the file
        source: Name used in error messages

    Raises:
        InvalidClqFileFormat: on any structural problem
    """
    order = None
    expected_edges = 0
    edges: List[Tuple[int, int]] = []
    seen = set()

    for line_number, raw in enumerate(lines, start=1):
        values = raw.split()
        if not values:
            continue
        tag = values[0]
        if tag == "c":
            continue
        if tag == "p":
            if order is not None:
                raise InvalidClqFileFormat("Duplicate 'p' header line", source, line_number)
            if len(values) != 4:
                raise InvalidClqFileFormat("Header must read 'p edge <n> <m>'", source, line_number)
            if values[1] not in ("edge", "col"):
                raise InvalidClqFileFormat(f"Expecting edge/col format, got {values[1]!r}", source, line_number)
            order = _parse_int(values[2], "vertex count", source, line_number)
            expected_edges = _parse_int(values[3], "edge count", source, line_number)
            if order <= 0:
                raise InvalidClqFileFormat("Expecting graph order", source, line_number)
            if expected_edges < 0:
                raise InvalidClqFileFormat("Edge count must be non-negative", source, line_number)
        elif tag == "e":
            if order is None:
                raise InvalidClqFileFormat("Edge before the 'p' header", source, line_number)
            if len(values) != 3:
                raise InvalidClqFileFormat("Edge line must read 'e <i> <j>'", source, line_number)
            i = _parse_int(values[1], "vertex", source, line_number)
            j = _parse_int(values[2], "vertex", source, line_number)
            for vertex in (i, j):
                if not 1 <= vertex <= order:
                    raise InvalidClqFileFormat(f"Vertex {vertex} outside 1..{order}", source, line_number)
            if i == j:
                raise InvalidClqFileFormat(f"Self loop on vertex {i}", source, line_number)
            key = (min(i, j), max(i, j))
            if key in seen:
                raise InvalidClqFileFormat(f"Duplicate edge ({i}, {j})", source, line_number)
            seen.add(key)
            edges.append((i - 1, j - 1))
        else:
            raise InvalidClqFileFormat(f"Invalid file format for line {raw.rstrip()!r}", source, line_number)

    if order is None:
        raise InvalidClqFileFormat("Expecting graph order", source)
    if len(edges) != expected_edges:
        raise InvalidClqFileFormat(f"Expecting {expected_edges} edges but read {len(edges)} edges", source)
    return Graph(order, edges)


def load_clq_file(path) -> Graph:
    """Load a graph from a DIMACS .clq / .col file."""
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            return parse_clq(f, str(path))
    except OSError as e:
        raise InvalidClqFileFormat(f"Unable to read file: {e}", str(path)) from e


def graph_to_string(graph: Graph) -> str:
    """DIMACS text of ``graph``, 1-based."""
    lines = [f"p edge {graph.order} {graph.size}"]
    lines.extend(f"e {u + 1} {v + 1}" for u, v in graph.edges())
    return "\n".join(lines) + "\n"


def write_clq_file(graph: Graph, path, comment: Optional[str] = None):
    path = Path(path)
    text = graph_to_string(graph)
    if comment:
        text = "".join(f"c {line}\n" for line in comment.splitlines()) + text
    path.write_text(text, encoding="utf-8")
    logger.info(f"Wrote {graph} to {path}")


def txt_to_networkx(txt_filepath) -> nx.Graph:
    """Convert txt adjacency list format to NetworkX graph"""
    G = nx.Graph()

    with open(txt_filepath, 'r', encoding="utf-8") as f:
        for line_number, line in enumerate(f, start=1):
            line = line.strip()
            if not line:
                continue
            head = line.split(':')[0].strip()
            if ':' in line and head.isdigit():
                vertex = int(head)
                G.add_node(vertex)
                rest = line.split(':', 1)[1].strip()
                for token in rest.split():
                    if not token.isdigit():
                        raise InvalidClqFileFormat(f"Invalid neighbour {token!r}", str(txt_filepath), line_number)
                    neighbor = int(token)
                    if neighbor == vertex:
                        raise InvalidClqFileFormat(f"Self loop on vertex {vertex}", str(txt_filepath), line_number)
                    G.add_edge(vertex, neighbor)
            else:
                # Hit the attributes section, stop parsing
                break

    return G


def load_txt_file(path) -> Graph:
    """Load an adjacency list .txt file, relabelled to 0..n-1 in sorted order."""
    try:
        G = txt_to_networkx(path)
    except OSError as e:
        raise InvalidClqFileFormat(f"Unable to read file: {e}", str(path)) from e
    if G.number_of_nodes() == 0:
        raise InvalidClqFileFormat("Expecting graph order", str(path))
    graph, _ = Graph.from_networkx(G)
    return graph


def load_metis_file(path) -> Graph:
    """Load a METIS .graph file (first line ``n m``, then one neighbour line per vertex)."""
    path = Path(path)
    try:
        lines = path.read_text(encoding="utf-8").splitlines()
    except OSError as e:
        raise InvalidClqFileFormat(f"Unable to read file: {e}", str(path)) from e

    lines = [line for line in lines if not line.lstrip().startswith("%")]
    if not lines:
        raise InvalidClqFileFormat("Expecting graph order", str(path))
    header = lines[0].split()
    if len(header) < 2:
        raise InvalidClqFileFormat("Header must read '<n> <m>'", str(path), 1)
    order = _parse_int(header[0], "vertex count", str(path), 1)
    expected_edges = _parse_int(header[1], "edge count", str(path), 1)
    if order <= 0:
        raise InvalidClqFileFormat("Expecting graph order", str(path), 1)

    edges = set()
    body = lines[1:order + 1]
    for offset, line in enumerate(body):
        u = offset
        for token in line.split():
            v = _parse_int(token, "vertex", str(path), offset + 2) - 1
            if not 0 <= v < order:
                raise InvalidClqFileFormat(f"Vertex {v + 1} outside 1..{order}", str(path), offset + 2)
            if u == v:
                raise InvalidClqFileFormat(f"Self loop on vertex {u + 1}", str(path), offset + 2)
            edges.add((min(u, v), max(u, v)))
    if len(edges) != expected_edges:
        raise InvalidClqFileFormat(f"Expecting {expected_edges} edges but read {len(edges)} edges", str(path))
    return Graph(order, sorted(edges))


def load_graph(path) -> Graph:
    """Load a graph, choosing the parser from the file suffix."""
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix in DIMACS_SUFFIXES:
        return load_clq_file(path)
    if suffix == ".txt":
        return load_txt_file(path)
    if suffix == ".graph":
        return load_metis_file(path)
    raise InvalidGraphError(f"Unsupported graph file format: {path.name}")


def list_graph_files(directory, suffixes=DIMACS_SUFFIXES) -> List[Path]:
    """Graph files directly inside ``directory``, sorted by name."""
    directory = Path(directory)
    if not directory.exists():
        return []
    return sorted(p for p in directory.iterdir() if p.is_file() and p.suffix.lower() in suffixes)
