"""Tests for the command line entry point."""

from imbusyyall.__main__ import main
from imbusyyall.colors import strip_colors


def test_main_prints_requested_lines(capsys):
    assert main(["-l", "3", "-s", "0", "--color", "never", "-d", "sample", "--seed", "1"]) == 0

    out = capsys.readouterr().out
    lines = [line for line in out.splitlines() if line]
    assert len(lines) == 3
    assert set(lines) <= {"foo", "bar", "baz", "qux"}
    assert "\x1b[" not in out


def test_main_legacy_line_count(capsys):
    assert main(["4", "-s", "0", "--color", "never", "-d", "rfc3164"]) == 0
    lines = [line for line in capsys.readouterr().out.splitlines() if line]
    assert len(lines) == 4
    assert all(line.startswith("<") for line in lines)


def test_main_always_color(capsys):
    assert main(["-l", "2", "-s", "0", "--color", "always", "-d", "nginx"]) == 0
    out = capsys.readouterr().out
    assert "\x1b[" in out
    assert strip_colors(out) != out


def test_main_logs_to_stderr(capsys):
    """Diagnostics never mix into the generated stream."""
    main(["-l", "1", "-s", "0", "--color", "never", "-d", "sample"])
    captured = capsys.readouterr()
    assert "Starting log generation" not in captured.out


def test_list_sources(capsys):
    assert main(["--list-sources"]) == 0
    out = capsys.readouterr().out
    for name in ("apache", "django", "nginx", "node", "rails", "rfc3164", "rfc5424", "sample"):
        assert name in out


def test_invalid_options_exit_with_error(capsys):
    assert main(["-l", "0", "-s", "0"]) == 1
    assert main(["-l", "10", "--min-factor", "3", "--max-factor", "1"]) == 1
    assert capsys.readouterr().out == ""


def test_missing_config_file(tmp_path):
    assert main(["-c", str(tmp_path / "missing.yaml"), "-l", "1"]) == 1


def test_custom_config_file(tmp_path, capsys):
    path = tmp_path / "busy.yaml"
    path.write_text(
        "generator:\n"
        "  lines: 2\n"
        "  sleep: 0\n"
        "  data_source: sample\n"
        "  blank_line_chance: 0\n"
        "output:\n"
        "  color: never\n"
    )
    assert main(["-c", str(path)]) == 0
    assert capsys.readouterr().out.count("\n") == 2
