"""Console log formatting for Oxygen.

Log lines go to stderr so that stdout only ever carries command output.
Each line reads ``time | LEVEL | component | message``.
"""

import logging
import re
import sys
from datetime import datetime


def _sgr(*codes: int) -> str:
    return "\033[" + ";".join(str(code) for code in codes) + "m"


COLORS = {
    "reset": _sgr(0),
    "dim": _sgr(2),
    "green": _sgr(32),
    "white": _sgr(37),
    "bright_black": _sgr(90),
    "bright_red": _sgr(91),
    "bright_green": _sgr(92),
    "bright_yellow": _sgr(93),
    "bright_blue": _sgr(94),
    "bright_magenta": _sgr(95),
    "bright_cyan": _sgr(96),
    "alert": _sgr(1, 37, 41),
}

LEVEL_COLORS = {
    logging.DEBUG: COLORS["bright_black"],
    logging.INFO: COLORS["bright_green"],
    logging.WARNING: COLORS["bright_yellow"],
    logging.ERROR: COLORS["bright_red"],
    logging.CRITICAL: COLORS["alert"],
}

# longest matching prefix wins
COMPONENT_COLORS = (
    ("oxygen.services.runner", COLORS["bright_magenta"]),
    ("oxygen.commands", COLORS["bright_blue"]),
    ("oxygen.config", COLORS["green"]),
    ("oxygen.cli", COLORS["bright_cyan"]),
)

COMMAND_PATTERN = re.compile(r"(Running command: )(.+)$")
DURATION_PATTERN = re.compile(r"(\d+\.?\d*(?:ms|s))\b")

COMPONENT_WIDTH = 20


class ColorfulFormatter(logging.Formatter):
    """Formatter that colors level, component and command lines."""

    def __init__(self, use_colors: bool = True) -> None:
        super().__init__()
        self.use_colors = use_colors

    def _paint(self, text: str, color: str) -> str:
        return f"{color}{text}{COLORS['reset']}" if self.use_colors else text

    @staticmethod
    def component_color(name: str) -> str:
        """Pick the color for a logger name."""
        matches = [
            (len(prefix), color)
            for prefix, color in COMPONENT_COLORS
            if name.startswith(prefix)
        ]
        return max(matches)[1] if matches else COLORS["white"]

    def format(self, record: logging.LogRecord) -> str:
        """Render one record, appending the traceback when present."""
        stamp = datetime.fromtimestamp(record.created).strftime("%H:%M:%S")
        stamp = f"{stamp}.{int(record.msecs):03d}"

        component = record.name.removeprefix("oxygen.")
        level_color = LEVEL_COLORS.get(record.levelno, COLORS["white"])

        columns = [
            self._paint(stamp, COLORS["dim"]),
            self._paint(f"{record.levelname:<8}", level_color),
            self._paint(f"{component:<{COMPONENT_WIDTH}}", self.component_color(record.name)),
            self.highlight(record.getMessage()),
        ]
        line = f" {self._paint('|', COLORS['dim'])} ".join(columns)

        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line

    def highlight(self, message: str) -> str:
        """Emphasize command lines and durations inside a message."""
        if not self.use_colors:
            return message
        message = COMMAND_PATTERN.sub(
            lambda m: m.group(1) + self._paint(m.group(2), COLORS["bright_cyan"]),
            message,
        )
        return DURATION_PATTERN.sub(
            lambda m: self._paint(m.group(1), COLORS["bright_yellow"]),
            message,
        )


class ConsoleHandler(logging.StreamHandler):
    """The stderr handler installed by configure_logging."""


def configure_logging(level: str = "WARNING", use_colors: bool = True) -> None:
    """Install the console handler on the ``oxygen`` logger.

    Called once at startup. Repeated calls only adjust the level and
    stream, so re-entrant CLI invocations do not stack handlers.

    Args:
        level: Logging level name.
        use_colors: Whether to emit ANSI colors; forced off when stderr
            is not a TTY.
    """
    colors = use_colors and sys.stderr.isatty()
    formatter = ColorfulFormatter(use_colors=colors)

    oxygen_logger = logging.getLogger("oxygen")
    oxygen_logger.setLevel(getattr(logging, level.upper(), logging.WARNING))
    oxygen_logger.propagate = False

    # handlers added by other code, such as pytest log capture, are left alone
    handlers = [h for h in oxygen_logger.handlers if isinstance(h, ConsoleHandler)]
    if not handlers:
        handler = ConsoleHandler(sys.stderr)
        oxygen_logger.addHandler(handler)
        handlers = [handler]

    for handler in handlers:
        handler.setStream(sys.stderr)
        handler.setFormatter(formatter)
