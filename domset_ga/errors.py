class DomsetError(Exception):
    """Base class for every error raised by domset_ga."""


class ParseError(DomsetError, ValueError):
    """A graph file line could not be turned into adjacency data."""

    def __init__(self, message, line_number=None):
        self.line_number = line_number
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)


class ConfigError(DomsetError, ValueError):
    """Invalid solver settings (unknown strategy, probability out of range, ...)."""


class GraphFrozenError(DomsetError, RuntimeError):
    """Raised when an edge is added to a graph that is already shared."""


class RepairInvariantError(DomsetError, RuntimeError):
    """
    The bucket queue repair lost track of its gains.
    Only a corrupted graph or a bookkeeping bug can get here, so it is fatal.
    """
