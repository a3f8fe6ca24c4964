import logging
import sys
import time

LOGGER_NAME = "domset_ga"
FILE_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


class Logger:
    """
    Thin wrapper around a stdlib logger.

    Console lines go to stderr because stdout carries the solution.
    A log file can be attached with add_file().
    """

    def __init__(self, name=LOGGER_NAME, level=logging.INFO, log_file_name=None):
        self.logger = logging.getLogger(name)
        self.logger.setLevel(logging.DEBUG)
        if not self.logger.handlers:
            self.logger.addHandler(logging.NullHandler())
        self.level = level
        self.handler = None
        if log_file_name:
            self.add_file(log_file_name)

    def add_file(self, log_file_name: str):
        if self.handler is not None:
            self.close()
        self.handler = logging.FileHandler(log_file_name)
        self.handler.setLevel(self.level)
        self.handler.setFormatter(logging.Formatter(FILE_FORMAT))
        self.logger.addHandler(self.handler)

    def set_level(self, level):
        """Accepts a logging constant or its name ("DEBUG", "warning", ...)."""
        if isinstance(level, str):
            resolved = logging.getLevelName(level.upper())
            if not isinstance(resolved, int):
                raise ValueError(f"Unknown logging level: {level}")
            level = resolved
        self.level = level
        if self.handler is not None:
            self.handler.setLevel(level)

    def log(self, message: str, level=logging.INFO):
        self.logger.log(level, message)
        if level >= self.level:
            name = logging.getLevelName(level)
            print(f"[{name}] [{time.strftime('%d-%m %H:%M:%S', time.localtime())}] : {message}",
                  file=sys.stderr)

    def close(self):
        if self.handler is not None:
            self.logger.removeHandler(self.handler)
            self.handler.close()
            self.handler = None


# Shared instance, configured by the command line entry point
logger = Logger()
