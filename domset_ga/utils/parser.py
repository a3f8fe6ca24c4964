import logging
import sys

from domset_ga.errors import ParseError
from domset_ga.graph import Graph
from domset_ga.logger import logger


def parse_pace_lines(lines):
    """
    Parses a PACE-style Dominating Set input.
    Format:
      c (comment lines)
      p ds n m
      u v    (m lines of edges, 1-based)
    Returns:
      n (int): number of vertices
      edges (list of tuples): list of undirected edges (1-based).
    Raises ParseError on anything that would corrupt the adjacency data.
    """
    n = None
    m = 0
    edges = []
    for line_number, line in enumerate(lines, start=1):
        line = line.strip()
        if not line or line.startswith('c'):
            continue
        parts = line.split()
        if parts[0] == 'p':
            # line looks like: p ds n m
            if n is not None:
                raise ParseError("duplicate 'p' line", line_number)
            if len(parts) < 4:
                raise ParseError(f"expected 'p ds n m', got {line!r}", line_number)
            try:
                n = int(parts[2])
                m = int(parts[3])
            except ValueError:
                raise ParseError(f"non-integer vertex or edge count in {line!r}", line_number)
            if n < 0 or m < 0:
                raise ParseError(f"negative count in {line!r}", line_number)
            continue

        if n is None:
            raise ParseError("edge line before the 'p' line", line_number)
        if len(parts) != 2:
            raise ParseError(f"expected two vertex ids, got {line!r}", line_number)
        try:
            u = int(parts[0])
            v = int(parts[1])
        except ValueError:
            raise ParseError(f"non-integer vertex id in {line!r}", line_number)
        if not (1 <= u <= n and 1 <= v <= n):
            raise ParseError(f"vertex id out of range 1..{n} in {line!r}", line_number)
        edges.append((u, v))

    if n is None:
        raise ParseError("missing 'p ds n m' line")
    if len(edges) != m:
        logger.log(f"Declared {m} edges but read {len(edges)}", level=logging.WARNING)
    return n, edges


def parse_pace_input(filePath: str):
    """
    Parses a PACE-style graph file. "-" reads standard input.
    """
    if filePath == "-":
        return parse_pace_lines(sys.stdin)
    with open(filePath, "r") as f:
        return parse_pace_lines(f)


def read_graph(filePath: str):
    """Parse a PACE graph and return a frozen 0-based Graph."""
    n, edges = parse_pace_input(filePath)
    logger.log(f"Parsed graph with {n} vertices and {len(edges)} edges", level=logging.DEBUG)
    return Graph.from_edges(n, edges, one_based=True)


def write_pace(graph, stream):
    """Serialize the graph back to the PACE edge list format (1-based)."""
    edges = list(graph.edges())
    stream.write(f"p ds {graph.n} {len(edges)}\n")
    for u, v in edges:
        stream.write(f"{u + 1} {v + 1}\n")


def write_solution(members, stream):
    """
    Write a dominating set: its size on the first line, then one 1-based
    vertex id per line in ascending order.
    """
    members = sorted(members)
    lines = [str(len(members))]
    lines.extend(str(v + 1) for v in members)
    stream.write("\n".join(lines) + "\n")
    stream.flush()
