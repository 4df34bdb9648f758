"""Tests for the paced generation loop."""

import io

import pytest

from imbusyyall.config import RunConfig
from imbusyyall.generator import LogGenerator, create_generator
from imbusyyall.output import StreamHandler
from imbusyyall.pacing import PacingProfile
from imbusyyall.sources.sample import SampleSource


class RecordingHandler(StreamHandler):
    def __init__(self):
        super().__init__(stream=io.StringIO(), color=False)
        self.entries = []
        self.blanks = 0
        self.closed = False

    def write(self, lines):
        self.entries.append(lines)
        super().write(lines)

    def write_blank(self):
        self.blanks += 1
        super().write_blank()

    def close(self):
        self.closed = True
        super().close()


def test_bounded_run_sleeps_along_the_curve():
    """One sleep per entry, each equal to the profile value for that iteration."""
    delays = []
    pacing = PacingProfile.create(0.1, total_iterations=30)
    generator = LogGenerator(SampleSource(), pacing, blank_line_chance=0.0, sleep=delays.append)
    handler = RecordingHandler()

    assert generator.total == 30
    assert generator.run(handler) == 30
    assert len(handler.entries) == 30
    assert handler.closed
    assert delays == [pacing.value_at(i) for i in range(30)]
    assert max(delays) == pytest.approx(delays[15])


def test_blank_line_chance():
    handler = RecordingHandler()
    LogGenerator(SampleSource(), PacingProfile.flat(0, 10), blank_line_chance=0.0, sleep=lambda s: None).run(handler)
    assert handler.blanks == 0

    handler = RecordingHandler()
    LogGenerator(SampleSource(), PacingProfile.flat(0, 10), blank_line_chance=1.0, sleep=lambda s: None).run(handler)
    assert handler.blanks == 10
    assert handler.stream.getvalue().count("\n") == 20


def test_unbounded_stream_keeps_going():
    generator = LogGenerator(SampleSource(), PacingProfile.flat(0), sleep=lambda s: None)
    assert generator.total is None
    stream = generator.generate_stream()
    entries = [next(stream) for _ in range(2500)]
    assert len(entries) == 2500


def test_keyboard_interrupt_stops_cleanly():
    """Ctrl-C ends the run, closes the handler and reports the count."""
    calls = []

    def sleep(seconds):
        calls.append(seconds)
        if len(calls) == 4:
            raise KeyboardInterrupt

    generator = LogGenerator(SampleSource(), PacingProfile.flat(0.01), blank_line_chance=0.0, sleep=sleep)
    handler = RecordingHandler()
    assert generator.run(handler) == 4
    assert handler.closed
    assert len(handler.entries) == 4


def test_create_generator_from_config():
    config = RunConfig.from_dict({
        "generator": {"lines": 5, "sleep": 0.2, "data_source": "nginx", "seed": 3, "blank_line_chance": 0.25},
        "pacing": {"enabled": False},
    })
    generator = create_generator(config, sleep=lambda s: None)
    assert generator.source.name == "nginx"
    assert generator.total == 5
    assert generator.blank_line_chance == 0.25
    assert generator.delay_for(2) == pytest.approx(0.2)


def test_seeded_generators_repeat():
    config = RunConfig.from_dict({"generator": {"lines": 10, "data_source": "sample", "seed": 42}})

    first = RecordingHandler()
    create_generator(config, sleep=lambda s: None).run(first)
    second = RecordingHandler()
    create_generator(config, sleep=lambda s: None).run(second)

    assert first.stream.getvalue() == second.stream.getvalue()
