"""
Logging for evolutionary regression.

One package-wide ``EvolutionLogger`` wraps the standard ``logging`` module
and filters messages by a ``LogLevel`` verbosity. The default level is
MINIMAL, so stepping an engine prints nothing unless the caller raises it.
Records propagate to the root logger, so an application's own logging setup
receives them; the package only prints on its own when asked for a console
handler.
"""

import logging
import sys
import time
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

LOGGER_NAME = 'evolutionary_regression'


class LogLevel(Enum):
    """Verbosity of the package logger"""
    SILENT = 0      # Nothing at all
    MINIMAL = 1     # Warnings and result summaries
    MODERATE = 2    # Engine construction, milestones, throttled progress
    DETAILED = 3    # One line per generation
    VERBOSE = 4     # Every improvement of the best-ever individual


class EvolutionLogger:
    """Verbosity-filtered front end to the ``evolutionary_regression`` logger"""

    # Minimum seconds between two progress lines
    PROGRESS_INTERVAL = 2.0

    def __init__(self, log_level: LogLevel = LogLevel.MINIMAL,
                 log_to_file: bool = False, log_file_path: Optional[str] = None,
                 console: bool = False):
        self.log_level = log_level
        self.started_at = time.time()
        self._last_progress = 0.0

        self.logger = logging.getLogger(LOGGER_NAME)
        self.logger.setLevel(logging.DEBUG)
        self.logger.handlers.clear()
        for handler in self._build_handlers(log_to_file, log_file_path, console):
            self.logger.addHandler(handler)

    def _build_handlers(self, log_to_file: bool, log_file_path: Optional[str],
                        console: bool) -> List[logging.Handler]:
        formatter = logging.Formatter('%(asctime)s [%(levelname)s] %(message)s', datefmt='%H:%M:%S')
        handlers: List[logging.Handler] = []
        if console and self.log_level != LogLevel.SILENT:
            handlers.append(logging.StreamHandler(sys.stdout))
        if log_to_file:
            if log_file_path is None:
                log_file_path = f"evolution_{datetime.now():%Y%m%d_%H%M%S}.log"
            handlers.append(logging.FileHandler(log_file_path))
        if not handlers:
            handlers.append(logging.NullHandler())
        for handler in handlers:
            handler.setFormatter(formatter)
        return handlers

    def enabled(self, level: LogLevel) -> bool:
        return self.log_level != LogLevel.SILENT and self.log_level.value >= level.value

    def info(self, message: str, required_level: LogLevel = LogLevel.MINIMAL):
        if self.enabled(required_level):
            self.logger.info(message)

    def progress(self, message: str, force: bool = False):
        """Throttled progress line, shown from MODERATE"""
        if not self.enabled(LogLevel.MODERATE):
            return
        now = time.time()
        if force or now - self._last_progress >= self.PROGRESS_INTERVAL:
            self._last_progress = now
            self.logger.info(f"progress: {message}")

    def evolution_step(self, generation: int, best_fitness: float,
                       mean_fitness: float, best_size: int, additional_info: str = ""):
        """Per-generation line, shown from DETAILED"""
        if not self.enabled(LogLevel.DETAILED):
            return
        message = (f"Gen {generation:3d}: best={best_fitness:.6g} mean={mean_fitness:.6g} "
                   f"size={best_size} [{time.time() - self.started_at:.1f}s]")
        if additional_info:
            message = f"{message} {additional_info}"
        self.logger.info(message)

    def milestone(self, message: str):
        if self.enabled(LogLevel.MODERATE):
            self.logger.info(f"milestone: {message}")

    def warning(self, message: str):
        if self.enabled(LogLevel.MINIMAL):
            self.logger.warning(message)

    def debug(self, message: str):
        if self.enabled(LogLevel.VERBOSE):
            self.logger.debug(message)

    def result_summary(self, results: Dict[str, Any]):
        """One aligned line per result entry; lists are reported by length"""
        if not self.enabled(LogLevel.MINIMAL):
            return
        self.logger.info("-" * 48)
        for key, value in results.items():
            if isinstance(value, float):
                shown = f"{value:.6g}"
            elif isinstance(value, list):
                shown = f"<{len(value)} values>"
            else:
                shown = str(value)
            self.logger.info(f"{key:.<28} {shown}")
        self.logger.info("-" * 48)


_logger: Optional[EvolutionLogger] = None


def get_logger() -> EvolutionLogger:
    """Package logger, created at the default level on first use"""
    global _logger
    if _logger is None:
        _logger = EvolutionLogger()
    return _logger


def configure_logging(log_level: LogLevel = LogLevel.MINIMAL, log_to_file: bool = False,
                      log_file_path: Optional[str] = None, console: bool = False) -> EvolutionLogger:
    """Replace the package logger, rebuilding its handlers"""
    global _logger
    _logger = EvolutionLogger(log_level, log_to_file, log_file_path, console)
    return _logger


def set_log_level(level: LogLevel) -> EvolutionLogger:
    current = get_logger()
    current.log_level = level
    return current


def log_info(message: str, level: LogLevel = LogLevel.MINIMAL):
    get_logger().info(message, level)


def log_progress(message: str, force: bool = False):
    get_logger().progress(message, force)


def log_milestone(message: str):
    get_logger().milestone(message)


def log_warning(message: str):
    get_logger().warning(message)


def log_evolution_step(generation: int, best_fitness: float, mean_fitness: float,
                       best_size: int, additional_info: str = ""):
    get_logger().evolution_step(generation, best_fitness, mean_fitness, best_size, additional_info)


def log_debug(message: str):
    get_logger().debug(message)
