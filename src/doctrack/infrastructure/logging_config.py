"""
Logging configuration module.

Provides colored console output and an optional plain-text log file.
The domain layer never configures logging; only entry points call
setup_logging().
"""

import logging
import sys
from pathlib import Path


# ANSI color codes for Windows 10+ and Unix terminals
class Colors:
    """ANSI escape sequences for terminal colors."""
    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    WHITE = "\033[37m"
    CYAN = "\033[36m"
    YELLOW = "\033[33m"
    BRIGHT_RED = "\033[91m"
    BG_RED = "\033[41m"


class ColoredFormatter(logging.Formatter):
    """
    Formatter that colors the level name and dims the logger name.

    Colors:
        DEBUG    - Dim
        INFO     - Cyan
        WARNING  - Yellow (malformed dates, missing config)
        ERROR    - Red
        CRITICAL - White on red
    """

    LEVEL_COLORS = {
        logging.DEBUG: Colors.DIM + Colors.WHITE,
        logging.INFO: Colors.CYAN,
        logging.WARNING: Colors.YELLOW,
        logging.ERROR: Colors.BRIGHT_RED,
        logging.CRITICAL: Colors.BOLD + Colors.WHITE + Colors.BG_RED,
    }

    def __init__(self, fmt: str, datefmt: str | None = None, use_colors: bool = True):
        super().__init__(fmt, datefmt)
        self.use_colors = use_colors

    def format(self, record: logging.LogRecord) -> str:
        if not self.use_colors:
            return super().format(record)

        original_levelname = record.levelname
        original_name = record.name

        color = self.LEVEL_COLORS.get(record.levelno, Colors.WHITE)
        record.levelname = f"{color}{record.levelname:8}{Colors.RESET}"
        record.name = f"{Colors.DIM}{record.name}{Colors.RESET}"

        try:
            return super().format(record)
        finally:
            # Other handlers (the file) must see the plain values
            record.levelname = original_levelname
            record.name = original_name


class PlainFormatter(logging.Formatter):
    """Non-colored formatter for file output."""


def _enable_windows_ansi() -> None:
    """Enable ANSI escape sequences on Windows consoles."""
    if sys.platform != "win32":
        return
    try:
        import ctypes
        kernel32 = ctypes.windll.kernel32
        kernel32.SetConsoleMode(kernel32.GetStdHandle(-11), 7)
    except (AttributeError, OSError) as exc:
        logging.getLogger(__name__).debug("ANSI colors unavailable: %s", exc)


def setup_logging(level: int = logging.INFO, log_file: str | Path | None = None) -> None:
    """
    Configure application-wide logging.

    Args:
        level: Console logging level (logging.DEBUG, logging.INFO, etc.)
        log_file: Optional path to a log file (always written at DEBUG)
    """
    _enable_windows_ansi()

    console_formatter = ColoredFormatter(
        fmt='[%(asctime)s] %(levelname)s [%(name)s] %(message)s',
        datefmt='%H:%M:%S',
        use_colors=sys.stderr.isatty(),
    )
    file_formatter = PlainFormatter(
        fmt='[%(asctime)s] %(levelname)-8s [%(name)s] %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    # stderr keeps stdout clean for tables and JSON
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(console_formatter)
    console_handler.setLevel(level)

    handlers: list[logging.Handler] = [console_handler]

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding='utf-8')
        file_handler.setFormatter(file_formatter)
        file_handler.setLevel(logging.DEBUG)
        handlers.append(file_handler)

    logging.basicConfig(level=logging.DEBUG, handlers=handlers, force=True)

    # Reduce noise from libraries
    logging.getLogger('openpyxl').setLevel(logging.WARNING)

    logger = logging.getLogger(__name__)
    logger.debug("DocTrack logging initialized (level %s)", logging.getLevelName(level))
    if log_file:
        logger.debug("Log file: %s", log_file)
