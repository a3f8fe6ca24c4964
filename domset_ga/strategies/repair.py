from abc import ABC, abstractmethod

from domset_ga.errors import ConfigError, RepairInvariantError
from domset_ga.utils.validator import uncovered


class RepairStrategy(ABC):
    name = None

    @abstractmethod
    def repair(self, graph, in_set, rng):
        """
        Push the candidate towards a dominating set, in place.
          - graph: the underlying frozen Graph object
          - in_set: list of booleans of length n, the candidate membership
          - rng: random.Random instance owned by the solver
        """
        pass


class NoRepair(RepairStrategy):
    """Leave the candidate as it is. Only useful with the penalized fitness."""

    name = "none"

    def repair(self, graph, in_set, rng):
        return in_set


class FullRepair(RepairStrategy):
    """Add every undominated vertex to the set."""

    name = "full"

    def repair(self, graph, in_set, rng):
        for v in uncovered(graph, in_set):
            in_set[v] = True
        return in_set


class IndexedVertexSet:
    """
    Vertex set with O(1) add, remove-by-value and uniform random pick.
    Removal swaps the last element into the freed slot.
    """

    def __init__(self, n, vertices=()):
        self.items = []
        self.position = [-1] * n
        for v in vertices:
            self.add(v)

    def add(self, v):
        if self.position[v] == -1:
            self.position[v] = len(self.items)
            self.items.append(v)

    def discard(self, v):
        index = self.position[v]
        if index == -1:
            return
        last = self.items.pop()
        if last != v:
            self.items[index] = last
            self.position[last] = index
        self.position[v] = -1

    def choice(self, rng):
        return self.items[rng.randrange(len(self.items))]

    def __contains__(self, v):
        return self.position[v] != -1

    def __len__(self):
        return len(self.items)


class GreedyRandomRepair(RepairStrategy):
    """
    Repeatedly add a uniformly random undominated vertex until none is left.
    Feasible, but not locally minimal.
    """

    name = "greedy-random"

    def repair(self, graph, in_set, rng):
        pending = IndexedVertexSet(graph.n, uncovered(graph, in_set))
        while pending:
            v = pending.choice(rng)
            in_set[v] = True
            pending.discard(v)
            for w in graph.neighbors_of(v):
                pending.discard(w)
        return in_set


class GainBuckets:
    """
    Bucket priority queue over integer gains with O(1) decrease-key.

    bucket[g] holds the vertices whose current gain is g; gain[v] and
    position[v] locate v inside its bucket. The top pointer only moves down
    because gains never increase.
    """

    def __init__(self, gains, max_gain):
        self.max_gain = max_gain
        self.buckets = [[] for _ in range(max_gain + 1)]
        self.gain = list(gains)
        self.position = [0] * len(self.gain)
        for v, g in enumerate(self.gain):
            self.position[v] = len(self.buckets[g])
            self.buckets[g].append(v)
        self.top = max_gain

    def _detach(self, v):
        bucket = self.buckets[self.gain[v]]
        index = self.position[v]
        last = bucket.pop()
        if last != v:
            bucket[index] = last
            self.position[last] = index

    def decrement(self, v):
        g = self.gain[v]
        if g == 0:
            raise RepairInvariantError(f"gain of vertex {v} would drop below zero")
        self._detach(v)
        self.gain[v] = g - 1
        self.position[v] = len(self.buckets[g - 1])
        self.buckets[g - 1].append(v)

    def highest(self):
        """Return the highest non-empty bucket with a positive gain, or None."""
        while self.top > 0 and not self.buckets[self.top]:
            self.top -= 1
        if self.top == 0:
            return None
        return self.buckets[self.top]

    def validate(self):
        seen = [False] * len(self.gain)
        for g, bucket in enumerate(self.buckets):
            for index, v in enumerate(bucket):
                if seen[v]:
                    raise RepairInvariantError(f"vertex {v} is in more than one bucket")
                if self.gain[v] != g or self.position[v] != index:
                    raise RepairInvariantError(f"vertex {v} is filed under the wrong gain or slot")
                seen[v] = True
        if not all(seen):
            missing = [v for v, ok in enumerate(seen) if not ok]
            raise RepairInvariantError(f"vertices missing from the buckets: {missing[:10]}")
        for v, g in enumerate(self.gain):
            if not 0 <= g <= self.max_gain:
                raise RepairInvariantError(f"gain {g} of vertex {v} is out of range")


class BucketGreedyRepair(RepairStrategy):
    """
    Greedy maximum-coverage repair.

    gain(v) is the number of undominated vertices in v's closed neighbourhood.
    The vertex with the highest gain is added (random tie-break) and the gains
    of everything next to the newly dominated vertices are decreased, so each
    vertex moves at most deg(v) + 1 times in total.
    """

    name = "greedy"

    def __init__(self, debug=False):
        self.debug = debug

    def repair(self, graph, in_set, rng):
        n = graph.n
        adjacency_list = graph.adjacency_list
        covered = [False] * n
        for u in range(n):
            if in_set[u]:
                covered[u] = True
                for v in adjacency_list[u]:
                    covered[v] = True
        covered_count = sum(covered)
        if covered_count == n:
            return in_set

        gains = []
        for v in range(n):
            g = 0 if covered[v] else 1
            for w in adjacency_list[v]:
                if not covered[w]:
                    g += 1
            gains.append(g)
        queue = GainBuckets(gains, graph.max_degree() + 1)
        if self.debug:
            queue.validate()

        while covered_count < n:
            bucket = queue.highest()
            if bucket is None:
                raise RepairInvariantError(
                    f"no vertex with positive gain while {n - covered_count} vertices are undominated")
            v = bucket[rng.randrange(len(bucket))]
            in_set[v] = True

            newly_covered = [] if covered[v] else [v]
            newly_covered.extend(w for w in adjacency_list[v] if not covered[w])
            for w in newly_covered:
                if covered[w]:
                    # duplicate neighbour entry
                    continue
                covered[w] = True
                covered_count += 1
                queue.decrement(w)
                for x in adjacency_list[w]:
                    queue.decrement(x)

            if self.debug:
                queue.validate()
        return in_set


class LocalRemoval(RepairStrategy):
    """
    Drop redundant members of a dominating set.

    coverage(v) counts how many members dominate v (itself included). A member
    is removed when every vertex it dominates keeps at least one other
    dominator. Members are visited in random order, so the result is
    1-minimal but not biased towards low indices.
    """

    name = "local-removal"

    def repair(self, graph, in_set, rng):
        n = graph.n
        adjacency_list = graph.adjacency_list
        coverage = [0] * n
        members = []
        for u in range(n):
            if in_set[u]:
                members.append(u)
                coverage[u] += 1
                for v in adjacency_list[u]:
                    coverage[v] += 1

        rng.shuffle(members)
        for v in members:
            # how much coverage each dominated vertex loses if v leaves
            loss = {v: 1}
            for w in adjacency_list[v]:
                loss[w] = loss.get(w, 0) + 1
            if all(coverage[w] > lost for w, lost in loss.items()):
                in_set[v] = False
                for w, lost in loss.items():
                    coverage[w] -= lost
        return in_set


class ChainedRepair(RepairStrategy):
    """Run several strategies one after the other."""

    def __init__(self, *strategies):
        self.strategies = strategies
        self.name = "+".join(strategy.name for strategy in strategies)

    def repair(self, graph, in_set, rng):
        for strategy in self.strategies:
            strategy.repair(graph, in_set, rng)
        return in_set


REPAIR_STRATEGIES = {
    NoRepair.name: NoRepair,
    FullRepair.name: FullRepair,
    GreedyRandomRepair.name: GreedyRandomRepair,
    BucketGreedyRepair.name: BucketGreedyRepair,
    LocalRemoval.name: LocalRemoval,
}


def make_repair(name, local_search=False):
    try:
        strategy = REPAIR_STRATEGIES[name]()
    except KeyError:
        raise ConfigError(f"Unknown repair strategy {name!r}, expected one of {sorted(REPAIR_STRATEGIES)}")
    if local_search and name != LocalRemoval.name:
        return ChainedRepair(strategy, LocalRemoval())
    return strategy
