"""
Selection over a population of individuals (lower fitness is better).

Every function returns an object that is a member of the population; callers
clone it before changing anything.
"""


def _require_members(population):
    if not population:
        raise ValueError("Cannot select from an empty population")


def tournament_select(population, rng, k=2):
    """
    Best of k uniform draws with replacement, first seen wins ties.
    With k >= len(population) every member competes exactly once.
    """
    _require_members(population)
    if k < 1:
        raise ValueError(f"Tournament size must be at least 1, got {k}")
    if k >= len(population):
        return best_select(population)

    best = None
    for _ in range(k):
        candidate = population[rng.randrange(len(population))]
        if best is None or candidate.fitness < best.fitness:
            best = candidate
    return best


def random_select(population, rng):
    _require_members(population)
    return population[rng.randrange(len(population))]


def best_select(population):
    _require_members(population)
    return min(population, key=lambda individual: individual.fitness)


def worst_index(population):
    """Index of the first individual with the highest fitness."""
    _require_members(population)
    worst = 0
    for i in range(1, len(population)):
        if population[i].fitness > population[worst].fitness:
            worst = i
    return worst


def worst_select(population):
    return population[worst_index(population)]
