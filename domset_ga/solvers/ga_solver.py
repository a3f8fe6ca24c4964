import logging
import random
import time

from domset_ga.config import SolverConfig
from domset_ga.logger import logger
from domset_ga.solvers.anytime import Champion, ChampionCell
from domset_ga.strategies.repair import make_repair
from domset_ga.strategies.selection import best_select, tournament_select, worst_index
from domset_ga.strategies.variation import ShrinkMutation, make_crossover, make_mutation
from domset_ga.utils.validator import count_uncovered


class Individual:
    __slots__ = ("in_set", "fitness", "feasible")

    def __init__(self, in_set, fitness=0, feasible=False):
        self.in_set = in_set
        self.fitness = fitness
        self.feasible = feasible

    def copy(self):
        return Individual(list(self.in_set), self.fitness, self.feasible)

    def members(self):
        return [v for v, inside in enumerate(self.in_set) if inside]

    def size(self):
        return sum(self.in_set)

    def __repr__(self):
        return f"Individual(fitness={self.fitness}, feasible={self.feasible}, size={self.size()})"


class GeneticDominatingSetSolver:
    """
    Steady-state evolutionary search for a small dominating set.

    Each generation clones one tournament winner, varies and repairs the
    clone, and lets it replace the weakest member if it is strictly better.
    The best feasible individual seen so far is published to `champion_cell`
    as an immutable snapshot.
    """

    def __init__(self, graph, config: SolverConfig = None, rng=None, champion_cell=None):
        self.graph = graph.freeze()
        self.n = graph.n
        self.config = (config if config is not None else SolverConfig()).validate()
        self.rng = rng if rng is not None else random.Random(self.config.seed)

        self.repair_strategy = make_repair(self.config.repair, self.config.local_search)
        self.init_mutation = ShrinkMutation()
        self.mutation = make_mutation(self.config.mutation)
        self.crossover = make_crossover(self.config.crossover)

        self.population = []
        self.champion_cell = champion_cell if champion_cell is not None else ChampionCell()
        self.generation = 0
        self.start_time = None
        # (generation, elapsed seconds, fitness, members) for every champion improvement
        self.history = []

    @property
    def champion(self):
        return self.champion_cell.snapshot

    def evaluate(self, individual):
        """
        Score an individual in place.
          strict:    fitness = |S|; an infeasible set scores above every feasible one
          penalized: fitness = |S| + number of undominated vertices
        """
        size = individual.size()
        missing = count_uncovered(self.graph, individual.in_set)
        individual.feasible = missing == 0
        if self.config.fitness == "penalized":
            individual.fitness = size + missing
        elif missing:
            individual.fitness = self.n + 1 + missing
        else:
            individual.fitness = size
        return individual

    def initialize(self, stop_token=None):
        """
        Build the starting population: all vertices in, thinned by the
        initialization mutation, then repaired and scored.

        The full vertex set is published first so a champion exists from the
        start. Every individual is offered as soon as it is scored, and
        building stops early once stop_token is set.
        """
        self.start_time = time.time()
        self.generation = 0
        self.population = []
        # The full vertex set always dominates the graph.
        self._offer(self.evaluate(Individual([True] * self.n)))

        for i in range(self.config.population_size):
            if stop_token is not None and stop_token.is_set():
                logger.log(f"Stop requested after {i}/{self.config.population_size} "
                           f"initial individuals", level=logging.WARNING)
                break
            in_set = [True] * self.n
            self.init_mutation.mutate(in_set, self.rng, self.config.init_flip_prob)
            self.repair_strategy.repair(self.graph, in_set, self.rng)
            individual = self.evaluate(Individual(in_set))
            self.population.append(individual)
            self._offer(individual)
            logger.log(f"Initialized individual {i + 1}/{self.config.population_size} "
                       f"with fitness {individual.fitness}", level=logging.DEBUG)

        if self.population and not any(individual.feasible for individual in self.population):
            logger.log("No feasible individual in the initial population, "
                       "keeping the full vertex set as champion", level=logging.WARNING)
        logger.log(f"Population of {len(self.population)} initialized, "
                   f"champion size {self.champion.size}", level=logging.INFO)
        return self.population

    def _offer(self, individual):
        """Publish the individual as champion if it is feasible and strictly better."""
        current = self.champion_cell.snapshot
        if not individual.feasible:
            return False
        if current is not None and individual.fitness >= current.fitness:
            return False
        champion = Champion.from_individual(individual, self.generation)
        self.champion_cell.publish(champion)
        elapsed = time.time() - self.start_time if self.start_time is not None else 0.0
        self.history.append((self.generation, elapsed, champion.fitness, champion.members))
        logger.log(f"Generation {self.generation}: new champion with fitness {champion.fitness}",
                   level=logging.DEBUG)
        return True

    def replace_weakest(self, child):
        """Overwrite the first worst member when the child is strictly better."""
        weakest = worst_index(self.population)
        if child.fitness < self.population[weakest].fitness:
            self.population[weakest] = child
            return True
        return False

    def step(self):
        """Run one generation and return the child it produced."""
        if not self.population:
            self.initialize()
        self.generation += 1
        config = self.config

        parent = tournament_select(self.population, self.rng, config.tournament_size)
        child = parent.copy()
        if self.crossover is not None and self.rng.random() < config.crossover_rate:
            other = tournament_select(self.population, self.rng, config.tournament_size)
            child.in_set = self.crossover.crossover(parent.in_set, other.in_set, self.rng)

        self.mutation.mutate(child.in_set, self.rng, config.mutation_prob)
        self.repair_strategy.repair(self.graph, child.in_set, self.rng)
        self.evaluate(child)

        self.replace_weakest(child)
        self._offer(child)

        if self.generation % config.log_every == 0:
            logger.log(f"Generation {self.generation}: population best "
                       f"{best_select(self.population).fitness}, champion {self.champion.fitness}",
                       level=logging.INFO)
        return child

    def run(self, stop_token, max_generations=None):
        """
        Evolve until the stop token is set or max_generations generations
        have run. Returns the champion snapshot.
        """
        if max_generations is None:
            max_generations = self.config.max_generations
        if not self.population:
            self.initialize(stop_token)

        done = 0
        while not stop_token.is_set():
            if max_generations is not None and done >= max_generations:
                break
            self.step()
            done += 1

        elapsed = time.time() - self.start_time
        logger.log(f"Search stopped after {self.generation} generations in {elapsed:.2f}s "
                   f"({stop_token.reason or 'generation limit'}), champion size {self.champion.size}",
                   level=logging.INFO)
        return self.champion
