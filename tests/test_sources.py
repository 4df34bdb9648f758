"""Tests for the emulated log styles."""

import logging
import re

import pytest

from imbusyyall import utils
from imbusyyall.colors import Colors, colorize, status_color, strip_colors
from imbusyyall.sources import DEFAULT_SOURCE, SOURCES, available_sources, get_source
from imbusyyall.sources.base import DataSource
from imbusyyall.sources.rails import RailsSource
from imbusyyall.sources.rfc5424 import structured_data
from imbusyyall.sources.sample import SampleSource
from imbusyyall.sources.syslog import FACILITIES, SyslogSource, priority

ALL_SOURCES = sorted(SOURCES)


@pytest.fixture(autouse=True)
def seeded():
    utils.seed(1234)


def test_available_sources():
    assert available_sources() == [
        "apache", "django", "nginx", "node", "rails", "rfc3164", "rfc5424", "sample",
    ]
    assert DEFAULT_SOURCE == "rails"


@pytest.mark.parametrize("name", ALL_SOURCES)
def test_source_generates_lines(name):
    """Every source yields a non-empty list of non-empty strings."""
    source = get_source(name)
    assert isinstance(source, DataSource)
    assert source.name == name
    assert source.description

    for _ in range(200):
        entry = source.generate_log_entry()
        assert isinstance(entry, list)
        assert entry
        for line in entry:
            assert isinstance(line, str)
            assert strip_colors(line).strip()


@pytest.mark.parametrize("name", ALL_SOURCES)
def test_source_fills_every_placeholder(name):
    """No template placeholder should survive into the output."""
    source = get_source(name)
    for _ in range(300):
        for line in source.generate_log_entry():
            plain = strip_colors(line)
            assert not re.search(r"\{[a-z_0-9]+\}", plain), plain


def test_get_source_normalizes_name():
    assert isinstance(get_source("  RAILS "), RailsSource)
    assert isinstance(get_source("Sample"), SampleSource)


def test_unknown_source_falls_back_to_rails(caplog):
    with caplog.at_level(logging.WARNING):
        source = get_source("cobol")
    assert isinstance(source, RailsSource)
    assert "Unknown data source: cobol" in caplog.text


def test_seed_makes_output_repeatable():
    """Reseeding replays the same entries."""
    def sample_entries():
        source = get_source("sample")
        return [strip_colors(source.generate_log_entry()[0]) for _ in range(20)]

    utils.seed(99)
    first = sample_entries()
    utils.seed(99)
    assert sample_entries() == first


def test_sample_words():
    seen = set()
    for _ in range(2000):
        (line,) = SampleSource().generate_log_entry()
        seen.add(strip_colors(line))
    assert seen <= {"foo", "bar", "baz", "qux"}
    assert "foo" in seen and "bar" in seen


def test_priority():
    assert priority(0, 0) == 0
    assert priority(4, 2) == 34
    assert priority(23, 7) == 191


def test_rfc3164_format():
    source = get_source("rfc3164")
    for _ in range(100):
        line = strip_colors(source.generate_log_entry()[0])
        match = re.match(r"^<(\d{1,3})>([A-Z][a-z]{2} [ 1-3]\d \d{2}:\d{2}:\d{2}) (\S+) (\S+)\[(\d+)\]: .+", line)
        assert match, line
        pri = int(match.group(1))
        assert pri // 8 in FACILITIES
        assert 0 <= pri % 8 <= 7


def test_rfc5424_format():
    source = get_source("rfc5424")
    for _ in range(100):
        line = strip_colors(source.generate_log_entry()[0])
        match = re.match(r"^<(\d{1,3})>1 (\S+) (\S+) (\S+) (\d+) (\S+) (-|\[.+\]) .+", line)
        assert match, line
        assert "T" in match.group(2)


def test_structured_data():
    utils.seed(5)
    assert structured_data(empty_chance=1.0) == "-"
    for _ in range(50):
        sd = structured_data(max_elements=2, empty_chance=0.0)
        elements = re.findall(r"\[[^\]]+\]", sd)
        assert 1 <= len(elements) <= 2
        assert "".join(elements) == sd
        for element in elements:
            assert re.match(r'^\[\S+( \S+="[^"]*")+\]$', element), element


def test_fill_keeps_template_on_missing_key():
    assert DataSource.fill("hello {name}", {"name": "world"}) == "hello world"
    assert DataSource.fill("hello {name}", {}) == "hello {name}"


def test_colors():
    assert colorize("x", Colors.RED) == "\x1b[31mx\x1b[0m"
    assert strip_colors(colorize("x", Colors.BRIGHT_GREEN) + " y") == "x y"
    assert status_color(200) == Colors.GREEN
    assert status_color(999) == Colors.RED


def test_syslog_base_is_abstract():
    with pytest.raises(TypeError):
        SyslogSource()
