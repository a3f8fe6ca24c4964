def covered_mask(graph, in_set):
    """
    Mark every member of the candidate and every neighbour of a member.

    :param graph: Graph (0-based).
    :param in_set: list of booleans, in_set[v] is True when v is in the candidate set.
    :return: list of booleans, True for dominated vertices.
    """
    covered = [False] * graph.n
    adjacency_list = graph.adjacency_list
    for u in range(graph.n):
        if in_set[u]:
            covered[u] = True
            for v in adjacency_list[u]:
                covered[v] = True
    return covered


def uncovered(graph, in_set):
    """
    Return the vertices (ascending) that are neither in the candidate set
    nor adjacent to one of its members.
    """
    covered = covered_mask(graph, in_set)
    return [v for v in range(graph.n) if not covered[v]]


def count_uncovered(graph, in_set):
    return graph.n - sum(covered_mask(graph, in_set))


def is_valid_dominating_set(adjacency_list, candidate_set):
    """
    Check if 'candidate_set' is a valid dominating set for the graph.

    :param adjacency_list: sequence of neighbour collections, adjacency_list[v] are the neighbors of v (0-based).
    :param candidate_set: iterable of vertex indices (0-based) that form the proposed dominating set.
    :return: True if 'candidate_set' is a dominating set, False otherwise.
    """
    n = len(adjacency_list)
    dominators = set(candidate_set)

    for v in range(n):
        # v is dominated by itself or by one of its neighbours
        if v in dominators:
            continue
        if dominators.isdisjoint(adjacency_list[v]):
            return False

    return True
