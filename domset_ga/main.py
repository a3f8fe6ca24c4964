import argparse
import csv
import logging
import sys

from domset_ga.config import FITNESS_POLICIES, SolverConfig
from domset_ga.errors import DomsetError, ParseError
from domset_ga.logger import logger
from domset_ga.solvers.anytime import AnytimeController, StopToken
from domset_ga.solvers.ga_solver import GeneticDominatingSetSolver
from domset_ga.strategies.repair import REPAIR_STRATEGIES
from domset_ga.strategies.variation import CROSSOVERS, MUTATIONS
from domset_ga.utils.parser import read_graph


def build_parser():
    parser = argparse.ArgumentParser(
        prog="domset-ga",
        description="Anytime evolutionary Dominating Set solver. "
                    "Send SIGTERM (or Ctrl-C) to print the best set found so far.")
    parser.add_argument("graph", help="PACE .gr file, or - for standard input")
    parser.add_argument("--seed", type=int, help="Random seed")
    parser.add_argument("--population", dest="population_size", type=int, help="Population size")
    parser.add_argument("--tournament", dest="tournament_size", type=int, help="Tournament size")
    parser.add_argument("--mutation", choices=sorted(MUTATIONS), help="Mutation used in the main loop")
    parser.add_argument("--mutation-prob", dest="mutation_prob", type=float,
                        help="Per-bit mutation probability in the main loop")
    parser.add_argument("--init-prob", dest="init_flip_prob", type=float,
                        help="Per-bit removal probability when seeding the population")
    parser.add_argument("--repair", choices=sorted(REPAIR_STRATEGIES), help="Repair strategy")
    parser.add_argument("--local-search", dest="local_search", action="store_true",
                        help="Remove redundant vertices after every repair")
    parser.add_argument("--crossover", choices=sorted(CROSSOVERS), help="Crossover operator")
    parser.add_argument("--crossover-rate", dest="crossover_rate", type=float,
                        help="Probability of applying the crossover in a generation")
    parser.add_argument("--fitness", choices=FITNESS_POLICIES, help="Fitness policy")
    parser.add_argument("--timeLimit", dest="time_limit", type=float, help="Time limit in seconds")
    parser.add_argument("--maxGenerations", dest="max_generations", type=int, help="Generation limit")
    parser.add_argument("--log", type=str, help="Log file name")
    parser.add_argument("--logLevel", type=str, help="Logging Level")
    parser.add_argument("--history", type=str, help="Write champion improvements to this CSV file")
    parser.add_argument("--plot", type=str, help="Save a convergence plot (needs --history)")
    parser.add_argument("--draw", type=str, help="Save a drawing of the graph with the champion highlighted")
    return parser


def save_history_csv(csv_path, history):
    """Save every champion improvement: generation, elapsed time, size and the 1-based set."""
    with open(csv_path, "w", newline="") as solOut:
        writer = csv.writer(solOut)
        writer.writerow(["Generation", "Time", "Fitness", "Solution"])
        for generation, elapsed, fitness, members in history:
            writer.writerow([generation, f"{elapsed:.6f}", fitness, " ".join(str(v + 1) for v in members)])


def main(argv=None, out=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    out = out if out is not None else sys.stdout

    if args.log:
        logger.add_file(args.log)
    if args.logLevel:
        try:
            logger.set_level(args.logLevel)
        except ValueError as e:
            parser.error(str(e))
    if args.plot and not args.history:
        parser.error("--plot needs --history")

    try:
        config = SolverConfig.from_args(args)
    except DomsetError as e:
        parser.error(str(e))

    try:
        graph = read_graph(args.graph)
    except (ParseError, OSError) as e:
        logger.log(f"Cannot read graph {args.graph}: {e}", level=logging.ERROR)
        logger.close()
        return 1

    logger.log(f"Starting Dominating Set search on {graph.n} vertices "
               f"(repair={config.repair}, mutation={config.mutation}, fitness={config.fitness})")

    solver = GeneticDominatingSetSolver(graph, config)
    token = StopToken(config.time_limit)
    controller = AnytimeController(solver.champion_cell, token, out)
    controller.install_signal_handlers()
    # Handlers stay installed until the answer is written.
    try:
        solver.run(token)
        champion = controller.emit()
    except DomsetError as e:
        logger.log(f"Search aborted: {e}", level=logging.ERROR)
        logger.close()
        return 1
    finally:
        controller.restore_signal_handlers()

    if champion is not None:
        logger.log(f"Reported dominating set of size {champion.size}")

    if args.history:
        save_history_csv(args.history, solver.history)
    if args.plot or args.draw:
        import matplotlib

        # Files only; no display is needed on the command line.
        matplotlib.use("Agg")
        from domset_ga.utils.visualization import draw_graph, plot_convergence

        if args.plot:
            plot_convergence(args.history, args.plot)
        if args.draw:
            draw_graph(graph, champion.members if champion else [], args.draw, title=args.graph)
    logger.close()
    return 0


def run():
    sys.exit(main())


if __name__ == "__main__":
    run()
