"""
ANSI Colors - Terminal color codes used by the data sources
"""
import re


class Colors:
    RESET = "\x1b[0m"
    BOLD = "\x1b[1m"
    RED = "\x1b[31m"
    GREEN = "\x1b[32m"
    YELLOW = "\x1b[33m"
    BLUE = "\x1b[34m"
    MAGENTA = "\x1b[35m"
    CYAN = "\x1b[36m"
    GRAY = "\x1b[37m"
    BRIGHT_RED = "\x1b[91m"
    BRIGHT_GREEN = "\x1b[92m"
    BRIGHT_YELLOW = "\x1b[93m"
    BRIGHT_BLUE = "\x1b[94m"
    BRIGHT_MAGENTA = "\x1b[95m"
    BRIGHT_CYAN = "\x1b[96m"
    BRIGHT_WHITE = "\x1b[97m"


# Shared status code palette for the HTTP-style sources
STATUS_CODE_COLORS = {
    200: Colors.GREEN,
    201: Colors.GREEN,
    204: Colors.GREEN,
    301: Colors.CYAN,
    302: Colors.CYAN,
    304: Colors.CYAN,
    400: Colors.YELLOW,
    401: Colors.YELLOW,
    403: Colors.YELLOW,
    404: Colors.YELLOW,
    405: Colors.YELLOW,
    422: Colors.YELLOW,
    429: Colors.BRIGHT_YELLOW,
    500: Colors.RED,
    502: Colors.RED,
    503: Colors.RED,
    504: Colors.RED,
}

_ANSI_PATTERN = re.compile(r"\x1b\[[0-9;]*m")


def colorize(text: str, color: str) -> str:
    """Wrap text in a color code followed by a reset"""
    return f"{color}{text}{Colors.RESET}"


def status_color(status: int) -> str:
    return STATUS_CODE_COLORS.get(status, Colors.RED)


def strip_colors(text: str) -> str:
    """Remove ANSI color sequences from text"""
    return _ANSI_PATTERN.sub("", text)
