from abc import ABC, abstractmethod

from domset_ga.errors import ConfigError


class MutationOperator(ABC):
    name = None

    @abstractmethod
    def mutate(self, in_set, rng, prob):
        """Change the candidate in place, every bit independently with probability prob."""
        pass


class ShrinkMutation(MutationOperator):
    """Members leave the set with probability prob. The set never grows."""

    name = "shrink"

    def mutate(self, in_set, rng, prob):
        random = rng.random
        for i in range(len(in_set)):
            if random() < prob:
                in_set[i] = False
        return in_set


class FlipMutation(MutationOperator):
    """With probability prob a bit is redrawn from a fair coin, so the set can grow or shrink."""

    name = "flip"

    def mutate(self, in_set, rng, prob):
        random = rng.random
        for i in range(len(in_set)):
            if random() < prob:
                in_set[i] = random() < 0.5
        return in_set


class CrossoverOperator(ABC):
    name = None

    @abstractmethod
    def crossover(self, parent_a, parent_b, rng):
        """Return a new membership list built from two parents of equal length."""
        pass


class UniformCrossover(CrossoverOperator):
    name = "uniform"

    def crossover(self, parent_a, parent_b, rng):
        random = rng.random
        return [a if random() < 0.5 else b for a, b in zip(parent_a, parent_b)]


class IntersectionCrossover(CrossoverOperator):
    """Keep only the vertices both parents agree on. Usually needs repair."""

    name = "intersection"

    def crossover(self, parent_a, parent_b, rng):
        return [a and b for a, b in zip(parent_a, parent_b)]


MUTATIONS = {
    ShrinkMutation.name: ShrinkMutation,
    FlipMutation.name: FlipMutation,
}

CROSSOVERS = {
    UniformCrossover.name: UniformCrossover,
    IntersectionCrossover.name: IntersectionCrossover,
}


def make_mutation(name):
    try:
        return MUTATIONS[name]()
    except KeyError:
        raise ConfigError(f"Unknown mutation {name!r}, expected one of {sorted(MUTATIONS)}")


def make_crossover(name):
    if name is None:
        return None
    try:
        return CROSSOVERS[name]()
    except KeyError:
        raise ConfigError(f"Unknown crossover {name!r}, expected one of {sorted(CROSSOVERS)}")
