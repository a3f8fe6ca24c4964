import os
import random

import networkx as nx
import pytest

from domset_ga.graph import Graph
from domset_ga.logger import logger

os.environ.setdefault("MPLBACKEND", "Agg")


def random_graph(n, p, seed):
    G = nx.gnp_random_graph(n, p, seed=seed)
    return Graph.from_edges(n, G.edges())


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def path3():
    # 1 - 2 - 3
    return Graph.from_edges(3, [(1, 2), (2, 3)], one_based=True)


@pytest.fixture
def star():
    # centre 1 with five leaves
    return Graph.from_edges(6, [(1, leaf) for leaf in range(2, 7)], one_based=True)


@pytest.fixture
def two_edges():
    return Graph.from_edges(4, [(1, 2), (3, 4)], one_based=True)


@pytest.fixture
def duplicate_edges():
    # edge 0-1 stored twice, plus 0-2
    return Graph.from_edges(3, [(0, 1), (0, 1), (0, 2)])


@pytest.fixture(params=[(30, 0.1, 1), (60, 0.05, 2), (40, 0.3, 3), (25, 0.0, 4)])
def sample_graph(request):
    n, p, seed = request.param
    return random_graph(n, p, seed)


@pytest.fixture(autouse=True)
def reset_logger():
    yield
    logger.close()
    logger.set_level("INFO")
