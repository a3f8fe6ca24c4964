import io

import pytest

from domset_ga.errors import ParseError
from domset_ga.utils.parser import (
    parse_pace_input,
    parse_pace_lines,
    read_graph,
    write_pace,
    write_solution,
)

from conftest import random_graph

SAMPLE = """c a small test graph
p ds 4 3
1 2
c comments may appear anywhere
2 3

3 4
"""


def test_parse_pace_lines():
    n, edges = parse_pace_lines(io.StringIO(SAMPLE))
    assert n == 4
    assert edges == [(1, 2), (2, 3), (3, 4)]


def test_read_graph_from_file(tmp_path):
    path = tmp_path / "sample.gr"
    path.write_text(SAMPLE)
    graph = read_graph(str(path))
    assert graph.n == 4
    assert graph.neighbors_of(1) == (0, 2)
    assert graph.frozen


def test_read_from_stdin(monkeypatch):
    monkeypatch.setattr("sys.stdin", io.StringIO(SAMPLE))
    n, edges = parse_pace_input("-")
    assert n == 4 and len(edges) == 3


@pytest.mark.parametrize("text, line_number", [
    ("p ds 3 1\n1 x\n", 2),
    ("p ds 2 1\n1 3\n", 2),
    ("p ds 2 1\n0 1\n", 2),
    ("1 2\np ds 2 1\n", 1),
    ("p ds 2\n", 1),
    ("p ds two 1\n", 1),
    ("p ds 3 2\n1 2 3\n", 2),
    ("p ds 2 1\np ds 2 1\n", 2),
])
def test_malformed_input_raises_parse_error(text, line_number):
    with pytest.raises(ParseError) as exc:
        parse_pace_lines(io.StringIO(text))
    assert exc.value.line_number == line_number
    assert f"line {line_number}" in str(exc.value)


def test_missing_problem_line():
    with pytest.raises(ParseError):
        parse_pace_lines(io.StringIO("c nothing here\n"))


def test_edge_count_mismatch_is_only_a_warning(capsys):
    n, edges = parse_pace_lines(io.StringIO("p ds 3 5\n1 2\n"))
    assert n == 3 and edges == [(1, 2)]
    assert "Declared 5 edges" in capsys.readouterr().err


def test_edge_list_round_trip():
    graph = random_graph(30, 0.2, 5)
    buffer = io.StringIO()
    write_pace(graph, buffer)
    buffer.seek(0)
    n, edges = parse_pace_lines(buffer)
    assert n == graph.n
    assert sorted(tuple(sorted((u - 1, v - 1))) for u, v in edges) == sorted(graph.edges())
    rebuilt = read_graph_from_text(buffer.getvalue())
    for v in range(graph.n):
        assert sorted(rebuilt.neighbors_of(v)) == sorted(graph.neighbors_of(v))


def read_graph_from_text(text):
    from domset_ga.graph import Graph

    n, edges = parse_pace_lines(io.StringIO(text))
    return Graph.from_edges(n, edges, one_based=True)


def test_write_solution_sorts_and_converts_to_one_based():
    out = io.StringIO()
    write_solution([4, 0, 2], out)
    assert out.getvalue() == "3\n1\n3\n5\n"


def test_write_empty_solution():
    out = io.StringIO()
    write_solution([], out)
    assert out.getvalue() == "0\n"
