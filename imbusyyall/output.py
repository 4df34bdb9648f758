"""
Output Handlers - Write generated entries to a terminal or stream
"""
import os
import sys
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, List, Optional, TextIO

from .colors import strip_colors

if TYPE_CHECKING:
    from .config import RunConfig

COLOR_MODES = ("auto", "always", "never")


class OutputHandler(ABC):
    """Base class for output handlers"""

    @abstractmethod
    def write(self, lines: List[str]) -> None:
        """Write the lines of a single log entry"""
        pass

    @abstractmethod
    def write_blank(self) -> None:
        """Write an empty separator line"""
        pass

    @abstractmethod
    def close(self) -> None:
        """Flush and release resources"""
        pass


class StreamHandler(OutputHandler):
    """Write entries to a text stream, stdout by default"""

    def __init__(self, stream: Optional[TextIO] = None, color: bool = True):
        self.stream = stream if stream is not None else sys.stdout
        self.color = color

    def write(self, lines: List[str]) -> None:
        for line in lines:
            if not self.color:
                line = strip_colors(line)
            self.stream.write(line + "\n")
        self.stream.flush()

    def write_blank(self) -> None:
        self.stream.write("\n")
        self.stream.flush()

    def close(self) -> None:
        self.stream.flush()


def resolve_color(mode: str, stream: TextIO) -> bool:
    """Decide whether to emit ANSI colors for a color mode"""
    if mode == "always":
        return True
    if mode == "never":
        return False
    if mode != "auto":
        raise ValueError(f"Unknown color mode: {mode}")

    if os.getenv("NO_COLOR"):
        return False
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


def create_output_handler(config: "RunConfig", stream: Optional[TextIO] = None) -> OutputHandler:
    """Factory function to create an output handler from config"""
    stream = stream if stream is not None else sys.stdout
    color = resolve_color(config.output.color, stream)
    return StreamHandler(stream=stream, color=color)
