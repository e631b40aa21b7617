"""Fixtures for CLI tests: a throwaway config file and state DB per test."""

import os
from unittest.mock import patch

import pytest
import yaml
from click.testing import CliRunner


@pytest.fixture(autouse=True)
def isolated_home(tmp_path):
    with patch.dict(os.environ, {"HABITCOACH_HOME": str(tmp_path / "home")}):
        yield


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        yaml.safe_dump(
            {
                "paths": {"state_db": str(tmp_path / "state.db")},
                "retry": {"max_attempts": 1},
                "web": {"host": "0.0.0.0", "port": 9000},
            }
        )
    )
    return path


@pytest.fixture
def invoke(runner, config_file):
    """Run the CLI against the per-test config file."""
    from cli.main import cli

    def _invoke(*args):
        return runner.invoke(cli, ["-c", str(config_file), *args])

    return _invoke
