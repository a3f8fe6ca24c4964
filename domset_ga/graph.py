from domset_ga.errors import GraphFrozenError


class Graph:
    def __init__(self, n):
        """
        Create a graph with n vertices (0-based).
        Adjacency is stored as one list of neighbours per vertex.
        Duplicate edges are kept as duplicate entries.
        """
        self.n = n
        self.adjacency_list = [[] for _ in range(n)]
        self.frozen = False
        self._max_degree = None

    @classmethod
    def from_edges(cls, n, edges, one_based=False):
        """
        Build and freeze a graph from an iterable of (u, v) pairs.
        Set one_based=True when the pairs use PACE 1-based ids.
        """
        graph = cls(n)
        offset = 1 if one_based else 0
        for u, v in edges:
            u, v = u - offset, v - offset
            if not (0 <= u < n and 0 <= v < n):
                raise ValueError(f"Edge ({u + offset}, {v + offset}) is out of range for {n} vertices")
            graph.add_edge(u, v)
        return graph.freeze()

    def add_edge(self, u, v):
        """
        Add undirected edge (u, v).
        u, v are assumed to be 0-based indices.
        """
        if self.frozen:
            raise GraphFrozenError("Cannot add an edge to a frozen graph")
        self.adjacency_list[u].append(v)
        if u != v:
            self.adjacency_list[v].append(u)

    def freeze(self):
        """
        Turn the adjacency lists into tuples. The graph is read-only afterwards
        and can be shared by every component of the solver.
        """
        if not self.frozen:
            self.adjacency_list = [tuple(neighbours) for neighbours in self.adjacency_list]
            self._max_degree = max((len(neighbours) for neighbours in self.adjacency_list), default=0)
            self.frozen = True
        return self

    def neighbors_of(self, v):
        """
        Return the neighbours of vertex v (duplicates included).
        """
        return self.adjacency_list[v]

    def degree(self, v):
        return len(self.adjacency_list[v])

    def max_degree(self):
        if self._max_degree is not None:
            return self._max_degree
        return max((len(neighbours) for neighbours in self.adjacency_list), default=0)

    def edges(self):
        """
        Yield every stored edge once as (u, v) with u <= v.
        An edge added twice is yielded twice.
        """
        for u in range(self.n):
            for v in self.adjacency_list[u]:
                if u <= v:
                    yield u, v

    def to_networkx(self):
        import networkx as nx

        G = nx.Graph()
        G.add_nodes_from(range(self.n))
        G.add_edges_from(self.edges())
        return G

    def __len__(self):
        return self.n

    def __repr__(self):
        return f"Graph(n={self.n}, m={sum(1 for _ in self.edges())})"
