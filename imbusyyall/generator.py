"""
Log Generator - Print entries from a data source at a paced rate
"""
import logging
import random
import time
from typing import Callable, Generator, List, Optional

from . import utils
from .config import RunConfig
from .output import OutputHandler
from .pacing import Bounded, PacingProfile
from .sources import DataSource, get_source

logger = logging.getLogger(__name__)


class LogGenerator:
    """Main generation loop"""

    def __init__(
        self,
        source: DataSource,
        pacing: PacingProfile,
        blank_line_chance: float = 0.5,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.source = source
        self.pacing = pacing
        self.blank_line_chance = blank_line_chance
        self._sleep = sleep

    @property
    def total(self) -> Optional[int]:
        """Number of entries in the run, or None when it never ends"""
        run_length = self.pacing.run_length
        return run_length.count if isinstance(run_length, Bounded) else None

    def generate_entry(self) -> List[str]:
        """Generate a single entry from the data source"""
        return self.source.generate_log_entry()

    def generate_stream(self) -> Generator[List[str], None, None]:
        """Yield entries until the run length is reached"""
        total = self.total
        count = 0
        while total is None or count < total:
            yield self.generate_entry()
            count += 1

    def delay_for(self, iteration: int) -> float:
        return self.pacing.value_at(iteration)

    def run(self, output_handler: OutputHandler) -> int:
        """Write entries with paced delays; returns how many were written"""
        generated = 0

        try:
            for entry in self.generate_stream():
                output_handler.write(entry)
                if random.random() < self.blank_line_chance:
                    output_handler.write_blank()

                delay = self.delay_for(generated)
                generated += 1
                logger.debug(f"Entry {generated} written, sleeping {delay:.4f}s")
                self._sleep(delay)

        except KeyboardInterrupt:
            logger.info(f"Generation interrupted. Total entries generated: {generated}")
        finally:
            output_handler.close()

        logger.info(f"Generation complete. Total entries generated: {generated}")
        return generated


def create_generator(config: RunConfig, sleep: Callable[[float], None] = time.sleep) -> LogGenerator:
    """Factory function to create a log generator"""
    if config.generator.seed is not None:
        utils.seed(config.generator.seed)

    return LogGenerator(
        source=get_source(config.generator.data_source),
        pacing=config.build_pacing(),
        blank_line_chance=config.generator.blank_line_chance,
        sleep=sleep,
    )
