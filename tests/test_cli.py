"""Tests for the command-line interface."""
from click.testing import CliRunner

from cook_mode.cli import ConsoleStatusSink, main
from cook_mode.wakelock.types import StatusKind


def test_probe_unsupported():
    result = CliRunner().invoke(main, ["probe", "--command", "cook-mode-no-such-inhibitor"])

    assert result.exit_code == 1
    assert "not supported" in result.output


def test_hold_unsupported_exits():
    result = CliRunner().invoke(main, ["hold", "--command", "cook-mode-no-such-inhibitor"])

    assert result.exit_code == 1


def test_settings_lists_defaults():
    result = CliRunner().invoke(main, ["settings"])

    assert result.exit_code == 0
    assert "toggle_color" in result.output
    assert "#2271b1" in result.output


def test_console_sink_skips_hidden():
    printed = []

    class FakeConsole:
        def print(self, text):
            printed.append(text)

    sink = ConsoleStatusSink(FakeConsole())
    sink.set_status(StatusKind.HIDDEN, "")
    sink.set_status(StatusKind.ACTIVE, "Cook Mode Active")

    assert printed == ["[green]Cook Mode Active[/]"]
