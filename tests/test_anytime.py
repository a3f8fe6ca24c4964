import dataclasses
import io
import signal
import threading
import time

import pytest

from domset_ga.config import SolverConfig
from domset_ga.solvers.anytime import AnytimeController, Champion, ChampionCell, StopToken
from domset_ga.solvers.ga_solver import GeneticDominatingSetSolver, Individual
from domset_ga.utils.validator import is_valid_dominating_set

from conftest import random_graph


def test_emit_writes_size_then_sorted_one_based_ids():
    out = io.StringIO()
    cell = ChampionCell(Champion(fitness=3, members=(0, 3, 7)))
    controller = AnytimeController(cell, out=out)
    champion = controller.emit()
    assert champion.size == 3
    assert out.getvalue() == "3\n1\n4\n8\n"


def test_emit_happens_once():
    out = io.StringIO()
    controller = AnytimeController(ChampionCell(Champion(1, (1,))), out=out)
    controller.emit()
    assert controller.emit() is None
    assert out.getvalue() == "1\n2\n"


def test_emit_without_champion_writes_nothing():
    out = io.StringIO()
    controller = AnytimeController(ChampionCell(), out=out)
    assert controller.emit() is None
    assert out.getvalue() == ""


def test_champion_snapshot_is_immutable():
    champion = Champion.from_individual(Individual([False, True, True], fitness=2, feasible=True), 4)
    assert champion.members == (1, 2)
    assert champion.generation == 4
    with pytest.raises(dataclasses.FrozenInstanceError):
        champion.fitness = 1


def test_cell_only_accepts_snapshots():
    cell = ChampionCell()
    with pytest.raises(TypeError):
        cell.publish(Individual([True], 1, True))
    first = Champion(2, (0, 1))
    cell.publish(first)
    second = Champion(1, (1,))
    cell.publish(second)
    assert cell.snapshot is second
    assert first.members == (0, 1)


def test_stop_token_flag_and_reason():
    token = StopToken()
    assert not token.is_set()
    token.request_stop("SIGTERM")
    token.request_stop("later")
    assert token.is_set()
    assert token.reason == "SIGTERM"
    assert token.wait(0)


def test_stop_token_deadline():
    token = StopToken(time_limit=0.01)
    time.sleep(0.05)
    assert token.is_set()
    assert token.reason == "time limit"


def test_time_limit_stops_an_unbounded_run():
    graph = random_graph(40, 0.1, 9)
    solver = GeneticDominatingSetSolver(graph, SolverConfig(seed=3))
    champion = solver.run(StopToken(time_limit=0.2))
    assert solver.generation > 0
    assert is_valid_dominating_set(graph.adjacency_list, champion.members)


def test_first_signal_requests_stop_second_signal_answers_immediately():
    out = io.StringIO()
    controller = AnytimeController(ChampionCell(Champion(1, (2,))), out=out)
    controller._handle_signal(signal.SIGTERM, None)
    assert controller.token.is_set()
    assert controller.token.reason == "SIGTERM"
    assert out.getvalue() == ""
    with pytest.raises(SystemExit) as exc:
        controller._handle_signal(signal.SIGTERM, None)
    assert exc.value.code == 0
    assert out.getvalue() == "1\n3\n"


@pytest.mark.skipif(not hasattr(signal, "SIGUSR1"), reason="needs SIGUSR1")
def test_installed_handler_sets_the_token():
    controller = AnytimeController(ChampionCell(Champion(0, ())), out=io.StringIO())
    previous = signal.getsignal(signal.SIGUSR1)
    controller.install_signal_handlers(signals=(signal.SIGUSR1,))
    try:
        signal.raise_signal(signal.SIGUSR1)
        for _ in range(100):
            if controller.token.is_set():
                break
            time.sleep(0.01)
        assert controller.token.is_set()
        assert controller.token.reason == "SIGUSR1"
    finally:
        controller.restore_signal_handlers()
    assert signal.getsignal(signal.SIGUSR1) == previous


def test_concurrent_reader_always_sees_a_whole_champion():
    graph = random_graph(80, 0.05, 11)
    solver = GeneticDominatingSetSolver(graph, SolverConfig(seed=5, mutation="flip"))
    solver.initialize()
    token = StopToken()
    seen = []
    reads = [0]

    def reader():
        last = None
        while not token.is_set():
            snapshot = solver.champion_cell.snapshot
            reads[0] += 1
            if snapshot is not last:
                seen.append(snapshot)
                last = snapshot

    thread = threading.Thread(target=reader)
    thread.start()
    try:
        solver.run(StopToken(), max_generations=300)
    finally:
        token.request_stop()
        thread.join()

    assert seen and reads[0] >= len(seen)
    for champion in seen:
        assert champion.fitness == len(champion.members)
        assert is_valid_dominating_set(graph.adjacency_list, champion.members)


def test_second_signal_without_champion_exits_with_failure():
    out = io.StringIO()
    controller = AnytimeController(ChampionCell(), out=out)
    controller._handle_signal(signal.SIGTERM, None)
    with pytest.raises(SystemExit) as exc:
        controller._handle_signal(signal.SIGTERM, None)
    assert exc.value.code == 1
    assert out.getvalue() == ""


def test_signal_after_emit_is_ignored():
    out = io.StringIO()
    controller = AnytimeController(ChampionCell(Champion(1, (0,))), out=out)
    controller.token.request_stop("time limit")
    controller.emit()
    controller._handle_signal(signal.SIGTERM, None)
    assert out.getvalue() == "1\n1\n"


@pytest.mark.skipif(not hasattr(signal, "SIGUSR1"), reason="needs SIGUSR1")
def test_two_signals_during_initialization_report_a_dominating_set():
    graph = random_graph(30, 0.1, 4)
    solver = GeneticDominatingSetSolver(graph, SolverConfig(seed=2))
    out = io.StringIO()
    controller = AnytimeController(solver.champion_cell, out=out)
    repair = solver.repair_strategy.repair

    def interrupted_repair(g, in_set, rng):
        signal.raise_signal(signal.SIGUSR1)
        signal.raise_signal(signal.SIGUSR1)
        return repair(g, in_set, rng)

    solver.repair_strategy.repair = interrupted_repair
    controller.install_signal_handlers(signals=(signal.SIGUSR1,))
    try:
        with pytest.raises(SystemExit) as exc:
            solver.run(controller.token)
    finally:
        controller.restore_signal_handlers()

    assert exc.value.code == 0
    lines = out.getvalue().split()
    assert int(lines[0]) == len(lines) - 1 == graph.n
    members = [int(v) - 1 for v in lines[1:]]
    assert is_valid_dominating_set(graph.adjacency_list, members)
