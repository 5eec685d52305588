"""
Centralized logging configuration for DAP.

Every subsystem logs under the `dap` root logger (`dap.cosigner`,
`dap.resolver`, `dap.cli`). Pure arithmetic and decay code never logs.

Loggers are handed out before configuration (module import time), so
the first `get_logger` call installs a default console handler and a
later explicit `setup_logging` call replaces it.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import colorlog

ROOT_LOGGER = "dap"
LOG_FILE = "dap.log"

CONSOLE_FORMAT = "%(log_color)s%(asctime)s [%(name)s] %(levelname)-8s%(reset)s %(message)s"
FILE_FORMAT = "%(asctime)s [%(name)s] %(levelname)-8s %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

LOG_COLORS = {
    "DEBUG": "cyan",
    "INFO": "green",
    "WARNING": "yellow",
    "ERROR": "red",
    "CRITICAL": "red,bg_white",
}


class DAPLogger:
    """Centralized logger for DAP components"""

    _configured = False
    _log_dir: Optional[Path] = None

    @classmethod
    def setup(
        cls,
        level: int = logging.INFO,
        log_dir: Optional[str] = None,
        log_to_file: bool = False,
    ):
        """
        (Re)configure the `dap` logger tree.

        Args:
            level: Logging level (DEBUG, INFO, WARNING, ERROR)
            log_dir: Directory for the log file. If None, uses ./logs
            log_to_file: Also write records to <log_dir>/dap.log
        """
        root_logger = logging.getLogger(ROOT_LOGGER)
        root_logger.setLevel(level)
        for handler in list(root_logger.handlers):
            root_logger.removeHandler(handler)
            handler.close()

        # stderr keeps CLI stdout parseable
        console_handler = colorlog.StreamHandler(sys.stderr)
        console_handler.setLevel(level)
        console_handler.setFormatter(
            colorlog.ColoredFormatter(CONSOLE_FORMAT, datefmt=DATE_FORMAT, log_colors=LOG_COLORS)
        )
        root_logger.addHandler(console_handler)

        if log_to_file:
            cls._log_dir = Path(log_dir) if log_dir else Path("logs")
            cls._log_dir.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(cls._log_dir / LOG_FILE)
            file_handler.setLevel(level)
            file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt=DATE_FORMAT))
            root_logger.addHandler(file_handler)

        cls._configured = True

    @classmethod
    def get_logger(cls, name: str) -> logging.Logger:
        """
        Get a logger for a specific subsystem.

        Args:
            name: Subsystem name (e.g., 'cosigner', 'resolver', 'cli')

        Returns:
            Logger instance
        """
        if not cls._configured:
            cls.setup()

        return logging.getLogger(f"{ROOT_LOGGER}.{name}")


# Convenience functions
def get_logger(name: str) -> logging.Logger:
    """Get a logger for a specific subsystem"""
    return DAPLogger.get_logger(name)


def setup_logging(
    level: int = logging.INFO,
    log_dir: Optional[str] = None,
    log_to_file: bool = False,
):
    """Setup logging configuration"""
    DAPLogger.setup(level=level, log_dir=log_dir, log_to_file=log_to_file)
