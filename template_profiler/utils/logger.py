# template_profiler/utils/logger.py - Logging setup
"""
Logging configuration for the template profiler.
"""

import logging
import sys
from typing import Optional
from colorama import Fore, Style


LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


class ColoredFormatter(logging.Formatter):
    """
    Console formatter that colors the level name.
    """

    LEVEL_COLORS = {
        'DEBUG': Fore.CYAN,
        'INFO': Fore.GREEN,
        'WARNING': Fore.YELLOW,
        'ERROR': Fore.RED,
        'CRITICAL': Fore.RED + Style.BRIGHT,
    }

    def format(self, record):
        """Format a record without leaking the colored level name to other handlers"""
        original = record.levelname
        color = self.LEVEL_COLORS.get(original)
        if color:
            record.levelname = f"{color}{original}{Style.RESET_ALL}"

        try:
            return super().format(record)
        finally:
            record.levelname = original


def setup_logging(level: str = 'INFO', log_file: Optional[str] = None, use_colors: bool = True):
    """
    Configure the root logger.

    Args:
        level: Logging level name ('DEBUG', 'INFO', 'WARNING', 'ERROR')
        log_file: Optional path of a plain-text log file
        use_colors: Whether console output is colored
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    root_logger.handlers = []

    # Logs go to stderr so report output on stdout stays clean
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(numeric_level)
    formatter_cls = ColoredFormatter if use_colors else logging.Formatter
    console_handler.setFormatter(formatter_cls(LOG_FORMAT, datefmt=DATE_FORMAT))
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        root_logger.addHandler(file_handler)

    logging.getLogger(__name__).debug(f"Logging initialized at {level} level")
