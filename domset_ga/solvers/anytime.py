"""
Anytime termination.

The search loop and the stop request meet in two objects:

- StopToken, a flag the loop polls before every generation. Signal handlers
  and timers only ever set it.
- ChampionCell, which holds one reference to an immutable Champion. The
  solver publishes a new snapshot by rebinding that reference, so a reader
  sees either the old or the new champion and never a mixture.
"""
import logging
import signal
import sys
import threading
import time
from dataclasses import dataclass
from typing import Tuple

from domset_ga.logger import logger
from domset_ga.utils.parser import write_solution


@dataclass(frozen=True)
class Champion:
    fitness: int
    members: Tuple[int, ...]  # sorted, 0-based
    generation: int = 0

    @classmethod
    def from_individual(cls, individual, generation=0):
        members = tuple(v for v, inside in enumerate(individual.in_set) if inside)
        return cls(fitness=individual.fitness, members=members, generation=generation)

    @property
    def size(self):
        return len(self.members)


class ChampionCell:
    def __init__(self, champion=None):
        self._champion = champion

    @property
    def snapshot(self):
        return self._champion

    def publish(self, champion):
        if not isinstance(champion, Champion):
            raise TypeError(f"Expected a Champion snapshot, got {type(champion).__name__}")
        self._champion = champion


class StopToken:
    """
    Cooperative cancellation flag with an optional wall-clock deadline.
    """

    def __init__(self, time_limit=None):
        self._event = threading.Event()
        self.deadline = None if time_limit is None else time.monotonic() + time_limit
        self.reason = None

    def request_stop(self, reason="requested"):
        if self.reason is None:
            self.reason = reason
        self._event.set()

    def is_set(self):
        if self._event.is_set():
            return True
        if self.deadline is not None and time.monotonic() >= self.deadline:
            self.request_stop("time limit")
            return True
        return False

    def wait(self, timeout=None):
        return self._event.wait(timeout)


class AnytimeController:
    """
    Owns the stop boundary: installs the signal handlers, and prints the
    champion exactly once when the search is over.
    """

    def __init__(self, cell, token=None, out=None):
        self.cell = cell
        self.token = token if token is not None else StopToken()
        self.out = out
        self._emitted = False
        self._previous_handlers = {}

    def install_signal_handlers(self, signals=(signal.SIGTERM, signal.SIGINT)):
        for signum in signals:
            self._previous_handlers[signum] = signal.signal(signum, self._handle_signal)

    def restore_signal_handlers(self):
        for signum, handler in self._previous_handlers.items():
            signal.signal(signum, handler)
        self._previous_handlers.clear()

    def _handle_signal(self, signum, frame):
        if not self.token.is_set():
            self.token.request_stop(signal.Signals(signum).name)
            return
        if self._emitted:
            # The answer is already being written; let the caller finish it.
            return
        # Second request while the loop is still winding down: answer now.
        champion = self.emit()
        raise SystemExit(0 if champion is not None else 1)

    def emit(self):
        """
        Write the current champion (size, then 1-based ids) and return it.
        Later calls do nothing and return None.
        """
        if self._emitted:
            return None
        champion = self.cell.snapshot
        if champion is None:
            logger.log("No champion to report", level=logging.ERROR)
            return None
        self._emitted = True
        write_solution(champion.members, self.out if self.out is not None else sys.stdout)
        return champion
