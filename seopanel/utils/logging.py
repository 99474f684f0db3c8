"""Run logging for seopanel: a per-run file plus warnings on the terminal."""

import logging
from datetime import datetime
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

from seopanel.utils.files import get_logs_path

FILE_HANDLER_NAME = 'seopanel-file'
CONSOLE_HANDLER_NAME = 'seopanel-console'

# HTTP clients used by the generative providers and report fetching
QUIET_LOGGERS = ('httpx', 'httpcore', 'urllib3')


def parse_level(level: str) -> int:
    """Map a level name ('DEBUG', 'info', 'ALL') to its numeric value, defaulting to DEBUG."""
    if level.upper() == 'ALL':
        return logging.NOTSET
    value = logging.getLevelName(level.upper())
    return value if isinstance(value, int) else logging.DEBUG


def setup_local_logging(level: str = 'DEBUG', console: Console | None = None) -> Path:
    """Set up logging for one CLI run.

    Creates a log file in .seopanel/logs/ and attaches it to the root logger.
    When a console is given, WARNING and above are also shown there through
    rich. Calling this again replaces the handlers of the previous call.

    Args:
        level: Logging level (e.g., 'DEBUG', 'INFO'). Defaults to 'DEBUG'.
        console: Rich console for warnings. Defaults to None (file only).

    Returns:
        Path: The path to the created log file.

    """
    logs_dir = get_logs_path()
    logs_dir.mkdir(parents=True, exist_ok=True)

    timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
    log_file = logs_dir / f'run_{timestamp}.log'
    numeric_level = parse_level(level)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    for handler in list(root_logger.handlers):
        if handler.get_name() in (FILE_HANDLER_NAME, CONSOLE_HANDLER_NAME):
            root_logger.removeHandler(handler)
            handler.close()

    file_handler = logging.FileHandler(log_file, encoding='utf-8')
    file_handler.set_name(FILE_HANDLER_NAME)
    file_handler.setLevel(numeric_level)
    file_handler.setFormatter(logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s'))
    root_logger.addHandler(file_handler)

    if console is not None:
        console_handler = RichHandler(console=console, show_path=False, markup=False)
        console_handler.set_name(CONSOLE_HANDLER_NAME)
        console_handler.setLevel(logging.WARNING)
        root_logger.addHandler(console_handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(numeric_level, logging.WARNING))

    return log_file
