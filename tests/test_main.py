"""Tests for the command line entry point."""

import sys
from importlib.metadata import PackageNotFoundError
from unittest.mock import Mock, patch

import pytest

from linemark import __main__ as cli
from linemark.formatter_collection import FormatterCollection
from linemark.settings_persistence import SettingsPersistence


def run_main(args, persistence):
    with patch.object(sys, "argv", ["linemark"] + args), \
            patch("linemark.__main__.get_persistence", return_value=persistence), \
            patch("linemark.console.blessed.Terminal", return_value=Mock(width=72)):
        with pytest.raises(SystemExit) as excinfo:
            cli.main()
    return excinfo.value.code


def test_version(capsys):
    with patch.object(sys, "argv", ["linemark", "--version"]), \
            patch("linemark.__main__.version", return_value="1.2.3"):
        cli.main()
    assert capsys.readouterr().out == "linemark 1.2.3\n"


def test_version_when_not_installed():
    with patch("linemark.__main__.version", side_effect=PackageNotFoundError("linemark")):
        assert cli.get_version_string() == "linemark (not installed)"


def test_usage_without_command(tmp_path, capsys):
    assert run_main([], SettingsPersistence(tmp_path)) == 2
    assert "usage: linemark" in capsys.readouterr().err


def test_demo_output(tmp_path, capsys):
    """The demo prints a marquee, a table and the timer report."""
    assert run_main(["demo", "--width", "60"], SettingsPersistence(tmp_path)) == 0
    out = capsys.readouterr().out
    assert "Line Composition Demonstration" in out
    assert "Widgets" in out and "1,200" in out and "12.25" in out
    assert "Elapsed Time:" in out
    assert "Total Elapsed Nanoseconds:" in out
    assert "Number of Events: 2" in out
    composed = out.split("Start Time")[0]
    assert all(len(line) <= 60 for line in composed.splitlines())


def test_demo_uses_terminal_width(tmp_path, capsys):
    assert run_main(["demo"], SettingsPersistence(tmp_path)) == 0
    out = capsys.readouterr().out
    composed = out.split("Start Time")[0]
    assert all(len(line) <= 72 for line in composed.splitlines())


def test_demo_writes_pdf(tmp_path):
    pdf_path = tmp_path / "demo.pdf"
    code = run_main(["demo", "--pdf", str(pdf_path), "--page", "elite"],
                    SettingsPersistence(tmp_path))
    assert code == 0
    assert pdf_path.read_bytes().startswith(b"%PDF")


def test_demo_rejects_bad_arguments(tmp_path, capsys):
    persistence = SettingsPersistence(tmp_path)
    assert run_main(["demo", "--bogus"], persistence) == 2
    assert run_main(["demo", "--width"], persistence) == 2
    assert run_main(["demo", "--width", "wide"], persistence) == 2
    assert run_main(["demo", "--width", "0"], persistence) == 2
    assert run_main(["demo", "--page", "broadsheet"], persistence) == 2
    assert "Unknown page layout: broadsheet" in capsys.readouterr().err


def test_demo_saves_and_loads_profile(tmp_path):
    persistence = SettingsPersistence(tmp_path)
    assert run_main(["demo", "--width", "50", "--save-profile", "narrow"], persistence) == 0
    assert persistence.list_profiles() == ["narrow"]

    formatter = FormatterCollection()
    assert persistence.load_collection_params("narrow", formatter)
    assert formatter.get_std_params("Line1Column").max_line_length == 50

    assert run_main(["demo", "--profile", "narrow"], persistence) == 0


def test_default_std_params():
    formatter = FormatterCollection()
    cli.default_std_params(formatter, 64)
    assert formatter.std_params_length() == 2
    assert formatter.get_std_params("Line3Column").max_line_length == 64
