"""
Sample - The smallest possible data source
"""
import random
from typing import List

from ..colors import Colors, colorize
from .base import DataSource


class SampleSource(DataSource):
    """Colored foo/bar/baz/qux words, handy as a template for new sources"""

    name = "sample"
    description = "Minimal foo/bar/baz/qux example source"

    WORDS = [
        (range(0, 69), "foo", Colors.GREEN),
        (range(69, 96), "bar", Colors.BLUE),
        (range(96, 99), "baz", Colors.YELLOW),
        (range(99, 100), "qux", Colors.RED),
    ]

    def generate_log_entry(self) -> List[str]:
        roll = random.randrange(100)
        for bucket, word, color in self.WORDS:
            if roll in bucket:
                return [colorize(word, color)]
        return [colorize("foo", Colors.GREEN)]
