"""Anytime evolutionary solver for the Minimum Dominating Set problem."""

from domset_ga.config import SolverConfig
from domset_ga.graph import Graph
from domset_ga.solvers.anytime import AnytimeController, Champion, ChampionCell, StopToken
from domset_ga.solvers.ga_solver import GeneticDominatingSetSolver, Individual

__version__ = "0.1.0"

__all__ = [
    "AnytimeController",
    "Champion",
    "ChampionCell",
    "GeneticDominatingSetSolver",
    "Graph",
    "Individual",
    "SolverConfig",
    "StopToken",
]
