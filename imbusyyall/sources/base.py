"""
Data Source Base - Common interface for emulated log styles
"""
import random
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Sequence


class DataSource(ABC):
    """Base class for a log style that can produce entries"""

    name: str = ""
    description: str = ""

    @abstractmethod
    def generate_log_entry(self) -> List[str]:
        """Generate one entry; an entry may span several lines"""

    @staticmethod
    def pick(options: Sequence[Any]) -> Any:
        return random.choice(options)

    @staticmethod
    def fill(template: str, context: Dict[str, Any]) -> str:
        """Fill ``{placeholders}`` in a template from a context dict"""
        try:
            return template.format(**context)
        except (KeyError, IndexError):
            return template

    def __repr__(self) -> str:
        return f"<{type(self).__name__} name={self.name!r}>"
