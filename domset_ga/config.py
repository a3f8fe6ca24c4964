from dataclasses import dataclass, fields
from typing import Optional

from domset_ga.errors import ConfigError
from domset_ga.strategies.repair import REPAIR_STRATEGIES
from domset_ga.strategies.variation import CROSSOVERS, MUTATIONS

POP_SIZE = 20
TOURNAMENT_SIZE = 2
INIT_FLIP_PROB = 0.3
MUTATION_PROB = 0.1
LOG_EVERY = 1000

FITNESS_POLICIES = ("strict", "penalized")


@dataclass
class SolverConfig:
    population_size: int = POP_SIZE
    tournament_size: int = TOURNAMENT_SIZE
    init_flip_prob: float = INIT_FLIP_PROB
    mutation_prob: float = MUTATION_PROB
    mutation: str = "shrink"
    repair: str = "greedy-random"
    local_search: bool = False
    crossover: Optional[str] = None
    crossover_rate: float = 0.0
    fitness: str = "strict"
    seed: Optional[int] = None
    time_limit: Optional[float] = None  # seconds
    max_generations: Optional[int] = None
    log_every: int = LOG_EVERY

    def validate(self):
        if self.population_size < 1:
            raise ConfigError(f"Population size must be at least 1, got {self.population_size}")
        if self.tournament_size < 1:
            raise ConfigError(f"Tournament size must be at least 1, got {self.tournament_size}")
        for name in ("init_flip_prob", "mutation_prob", "crossover_rate"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ConfigError(f"{name} must be within [0, 1], got {value}")
        if self.mutation not in MUTATIONS:
            raise ConfigError(f"Unknown mutation {self.mutation!r}, expected one of {sorted(MUTATIONS)}")
        if self.repair not in REPAIR_STRATEGIES:
            raise ConfigError(f"Unknown repair strategy {self.repair!r}, expected one of {sorted(REPAIR_STRATEGIES)}")
        if self.crossover is not None and self.crossover not in CROSSOVERS:
            raise ConfigError(f"Unknown crossover {self.crossover!r}, expected one of {sorted(CROSSOVERS)}")
        if self.crossover_rate > 0 and self.crossover is None:
            raise ConfigError("crossover_rate is set but no crossover operator was chosen")
        if self.fitness not in FITNESS_POLICIES:
            raise ConfigError(f"Unknown fitness policy {self.fitness!r}, expected one of {list(FITNESS_POLICIES)}")
        if self.time_limit is not None and self.time_limit <= 0:
            raise ConfigError(f"Time limit must be positive, got {self.time_limit}")
        if self.max_generations is not None and self.max_generations < 0:
            raise ConfigError(f"Generation limit must not be negative, got {self.max_generations}")
        if self.log_every < 1:
            raise ConfigError(f"log_every must be at least 1, got {self.log_every}")
        return self

    @classmethod
    def from_args(cls, args):
        """Build a config from an argparse namespace, ignoring options left unset."""
        values = {}
        for field in fields(cls):
            value = getattr(args, field.name, None)
            if value is not None:
                values[field.name] = value
        return cls(**values).validate()
