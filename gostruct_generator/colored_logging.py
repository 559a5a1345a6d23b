"""
Colored console logging for the Go struct generator.

Log records are colored by level, and INFO/DEBUG records are additionally
colored by what they report (a finished step, a step in progress, a
noteworthy finding, or a section header).
"""

import logging
import sys
from typing import Optional, Tuple


class ColoredFormatter(logging.Formatter):
    """
    Logging formatter that adds ANSI color codes to log messages.

    Colors are disabled when stderr is not a TTY.
    """

    # ANSI color codes
    COLORS = {
        'DEBUG': '\033[36m',      # Cyan
        'INFO': '\033[32m',       # Green
        'WARNING': '\033[33m',    # Yellow
        'ERROR': '\033[31m',      # Red
        'CRITICAL': '\033[35m',   # Magenta
    }

    SPECIAL_COLORS = {
        'success': '\033[92m',    # Bright Green
        'progress': '\033[94m',   # Bright Blue
        'highlight': '\033[96m',  # Bright Cyan
    }

    RESET = '\033[0m'
    BOLD = '\033[1m'

    SUCCESS_INDICATORS: Tuple[str, ...] = (
        '✓', 'complete', 'successfully', 'generated file', 'done',
    )
    PROGRESS_INDICATORS: Tuple[str, ...] = (
        '→', 'introspecting', 'configuring', 'loading', 'validating',
        'rendering', 'mapping',
    )
    HIGHLIGHT_INDICATORS: Tuple[str, ...] = (
        '•', 'found', 'skipping', 'excluding', 'left out',
    )

    def __init__(self, fmt: Optional[str] = None, use_colors: bool = True):
        """
        Initialize the colored formatter.

        Args:
            fmt: Log format string (uses "LEVEL: message" if None)
            use_colors: Whether to use colors at all
        """
        super().__init__(fmt or "%(levelname)s: %(message)s")
        self.use_colors = use_colors and hasattr(sys.stderr, 'isatty') and sys.stderr.isatty()

    def format(self, record: logging.LogRecord) -> str:
        formatted_message = super().format(record)
        if not self.use_colors:
            return formatted_message

        color = self._color_for(record)
        if not color:
            return formatted_message
        return f"{color}{formatted_message}{self.RESET}"

    def _color_for(self, record: logging.LogRecord) -> str:
        """Pick the color prefix for a record; empty string leaves it plain."""
        if record.levelname in ('ERROR', 'CRITICAL', 'WARNING'):
            return self.COLORS[record.levelname]

        message = record.getMessage()
        if self._matches(message, self.SUCCESS_INDICATORS):
            return self.SPECIAL_COLORS['success'] + self.BOLD
        if self._matches(message, self.PROGRESS_INDICATORS):
            return self.SPECIAL_COLORS['progress']
        if self._matches(message, self.HIGHLIGHT_INDICATORS):
            return self.SPECIAL_COLORS['highlight']
        if self._is_section_message(message):
            return self.BOLD + self.SPECIAL_COLORS['highlight']
        if record.levelname == 'DEBUG':
            return self.COLORS['DEBUG']
        # Plain INFO messages stay uncolored
        return ''

    @staticmethod
    def _matches(message: str, indicators: Tuple[str, ...]) -> bool:
        message_lower = message.lower()
        return any(indicator in message_lower for indicator in indicators)

    @staticmethod
    def _is_section_message(message: str) -> bool:
        return '=' in message and len(message.strip()) > 20


def setup_colored_logging(level: int = logging.INFO, use_colors: bool = True) -> None:
    """
    Set up colored logging on the root logger.

    Args:
        level: Logging level (default: INFO)
        use_colors: Whether to use colors (default: True)
    """
    formatter = ColoredFormatter(use_colors=use_colors)

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    console_handler.setLevel(level)

    root_logger.addHandler(console_handler)
    root_logger.setLevel(level)


def get_colored_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def log_success(logger: logging.Logger, message: str) -> None:
    """Log a success message with special formatting."""
    logger.info(f"✓ {message}")


def log_progress(logger: logging.Logger, message: str) -> None:
    """Log a progress message with special formatting."""
    logger.info(f"→ {message}")


def log_highlight(logger: logging.Logger, message: str) -> None:
    """Log a highlighted message with special formatting."""
    logger.info(f"• {message}")


def log_section(logger: logging.Logger, section_name: str) -> None:
    """Log a section header with special formatting."""
    separator = "=" * 60
    logger.info(separator)
    logger.info(f"  {section_name.upper()}")
    logger.info(separator)
