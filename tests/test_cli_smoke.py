"""Smoke tests for CLI commands.

Tests that CLI commands parse correctly and don't crash. Uses Click's
CliRunner with a fake transport so no board is needed.
"""

import json

import pytest
from click.testing import CliRunner

from ledbridge.cli.main import cli

from conftest import FakeTransportFactory


@pytest.fixture
def runner():
    """Create a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def base_args(tmp_path):
    """Keep logs and config inside the test's temp dir."""
    return [
        '--log-file', str(tmp_path / "ledbridge.log"),
        '--config', str(tmp_path / "config.json"),
    ]


@pytest.mark.integration
class TestCLIHelp:
    """Test that all commands have working help text."""

    def test_main_help(self, runner):
        result = runner.invoke(cli, ['--help'])
        assert result.exit_code == 0
        assert 'LED board bridge' in result.output
        assert '--url' in result.output

    def test_version_flag(self, runner):
        result = runner.invoke(cli, ['--version'])
        assert result.exit_code == 0
        assert '0.1.0' in result.output

    @pytest.mark.parametrize("command", ["status", "test-pattern", "effect", "index"])
    def test_command_help(self, runner, base_args, command):
        result = runner.invoke(cli, base_args + [command, '--help'])
        assert result.exit_code == 0


@pytest.mark.integration
class TestStatusCommand:
    """Test the status command."""

    def test_status_defaults(self, runner, base_args):
        result = runner.invoke(cli, base_args + ['status'])
        assert result.exit_code == 0
        assert 'ws://192.168.1.100:8080' in result.output
        assert '16x11' in result.output
        assert 'closed' in result.output

    def test_url_option(self, runner, base_args):
        result = runner.invoke(cli, base_args + ['--url', 'ws://10.1.1.1:9000', 'status'])
        assert result.exit_code == 0
        assert 'ws://10.1.1.1:9000' in result.output

    def test_environment_url(self, runner, base_args, monkeypatch):
        monkeypatch.setenv("LED_BOARD_URL", "ws://env-board:8080")
        result = runner.invoke(cli, base_args + ['status'])
        assert 'ws://env-board:8080' in result.output

    def test_bad_url_option(self, runner, base_args):
        result = runner.invoke(cli, base_args + ['--url', 'http://nope', 'status'])
        assert result.exit_code == 1
        assert 'ERROR' in result.output

    def test_bad_config_file(self, runner, tmp_path):
        config_path = tmp_path / "config.json"
        config_path.write_text('{"brightness": 999}')

        result = runner.invoke(cli, [
            '--log-file', str(tmp_path / "ledbridge.log"),
            '--config', str(config_path),
            'status',
        ])
        assert result.exit_code == 1
        assert 'brightness' in result.output


@pytest.mark.integration
class TestIndexCommand:
    """Test the index command."""

    def test_serpentine_index(self, runner, base_args):
        result = runner.invoke(cli, base_args + ['index', '15', '1'])
        assert result.exit_code == 0
        assert '-> 16' in result.output
        assert 'secondary' in result.output

    def test_primary_pixel(self, runner, base_args):
        result = runner.invoke(cli, base_args + ['index', '6', '6'])
        assert result.exit_code == 0
        assert 'primary' in result.output

    def test_off_matrix(self, runner, base_args):
        result = runner.invoke(cli, base_args + ['index', '0', '11'])
        assert result.exit_code == 1
        assert 'not on the 16x11 matrix' in result.output


@pytest.mark.integration
class TestBoardCommands:
    """Test commands that talk to a (fake) board."""

    def test_test_pattern(self, runner, base_args):
        factory = FakeTransportFactory(auto_open=True)

        result = runner.invoke(
            cli, base_args + ['test-pattern', '--duration', '0'],
            obj={"transport_factory": factory},
        )

        assert result.exit_code == 0, result.output
        assert '[OK] Connected' in result.output
        sent = [json.loads(m) for m in factory.last.sent]
        pixels = [m for m in sent if m["cmd"] == "set_pixel"]
        assert {(p["x"], p["y"]) for p in pixels} == {(0, 0), (2, 0), (4, 0), (0, 2), (2, 2), (4, 2)}
        assert all((p["r"], p["g"], p["b"]) == (0, 255, 255) for p in pixels)
        assert sent[-2:] == [{"cmd": "clear"}, {"cmd": "update"}]
        assert factory.last.closed

    def test_test_pattern_no_board(self, runner, base_args):
        factory = FakeTransportFactory()

        result = runner.invoke(
            cli, base_args + ['test-pattern', '--timeout', '0.05'],
            obj={"transport_factory": factory},
        )

        assert result.exit_code == 1
        assert '[FAIL]' in result.output

    def test_effect(self, runner, base_args):
        factory = FakeTransportFactory(auto_open=True)

        result = runner.invoke(
            cli, base_args + ['effect', 'memory_spark', '--x', '3', '--y', '2', '--duration', '0.1'],
            obj={"transport_factory": factory},
        )

        assert result.exit_code == 0, result.output
        effects = [json.loads(m) for m in factory.last.sent if '"effect"' in m]
        assert effects == [{
            "cmd": "effect", "name": "memory_spark", "duration": 0.1,
            "x": 6, "y": 4, "r": 0, "g": 255, "b": 255,
        }]

    def test_effect_needs_both_coordinates(self, runner, base_args):
        result = runner.invoke(cli, base_args + ['effect', 'memory_spark', '--x', '3'])
        assert result.exit_code == 2

    def test_effect_missing_position(self, runner, base_args):
        factory = FakeTransportFactory(auto_open=True)

        result = runner.invoke(
            cli, base_args + ['effect', 'memory_spark'],
            obj={"transport_factory": factory},
        )

        assert result.exit_code == 1
        assert 'rejected' in result.output
