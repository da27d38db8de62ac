"""Tests for the git-dirupdate command line."""

from pathlib import Path
from unittest import mock

import pytest
from click.testing import CliRunner

from git_dirupdate.cli import main
from git_dirupdate.exceptions import DiscoveryError
from git_dirupdate.models import OutcomeStatus, UpdateOutcome


@pytest.fixture
def runner():
    return CliRunner()


def test_cli_help(runner):
    """The help text lists the options."""
    result = runner.invoke(main, ["--help"])
    assert result.exit_code == 0
    assert "--stash-changes" in result.output
    assert "--all-branches" in result.output


@mock.patch("git_dirupdate.cli.update_repositories")
@mock.patch("git_dirupdate.cli.find_repositories", return_value=[])
def test_no_repositories_found(mock_find, mock_update, runner):
    """An empty tree is reported and nothing is updated."""
    result = runner.invoke(main, ["--root", "/srv/code"])

    assert result.exit_code == 0
    assert "No repositories found in /srv/code" in result.output
    mock_update.assert_not_called()


@mock.patch("git_dirupdate.cli.update_repositories")
@mock.patch("git_dirupdate.cli.find_repositories", side_effect=DiscoveryError("Root directory /nope does not exist"))
def test_discovery_error_aborts(mock_find, mock_update, runner):
    """A discovery error exits with status 1."""
    result = runner.invoke(main, ["--root", "/nope"])

    assert result.exit_code == 1
    assert "/nope does not exist" in result.output
    mock_update.assert_not_called()


@mock.patch("git_dirupdate.cli.confirm_update", return_value=False)
@mock.patch("git_dirupdate.cli.update_repositories")
@mock.patch("git_dirupdate.cli.find_repositories")
def test_declined_confirmation_cancels(mock_find, mock_update, mock_confirm, runner):
    """Declining the confirmation updates nothing."""
    mock_find.return_value = [Path(f"/srv/code/r{i}") for i in range(3)]

    result = runner.invoke(main, ["--warn-threshold", "2"])

    assert result.exit_code == 0
    assert "Cancelled." in result.output
    mock_confirm.assert_called_once_with(3, 2, False)
    mock_update.assert_not_called()


@mock.patch("git_dirupdate.cli.update_repositories")
@mock.patch("git_dirupdate.cli.find_repositories")
def test_options_are_passed_to_the_orchestrator(mock_find, mock_update, runner):
    """Command line options end up in UpdateOptions."""
    repos = [Path("/srv/code/a"), Path("/srv/code/b")]
    mock_find.return_value = repos
    mock_update.return_value = [
        UpdateOutcome(path=repos[0], status=OutcomeStatus.SUCCESS, succeeded=["main"]),
        UpdateOutcome(path=repos[1], status=OutcomeStatus.FAILED),
    ]

    result = runner.invoke(main, ["-r", "/srv/code", "-b", "main,develop", "-b", "release", "-s"])

    assert result.exit_code == 0
    assert "Summary" in result.output
    mock_find.assert_called_once_with("/srv/code")
    paths, options, _reporter = mock_update.call_args[0]
    assert paths == repos
    assert options.branches == ("main", "develop", "release")
    assert options.stash_changes is True
    assert options.all_branches is False


@mock.patch("git_dirupdate.cli.update_repositories", return_value=[])
@mock.patch("git_dirupdate.cli.find_repositories", return_value=[Path("/srv/code/a")])
def test_root_from_environment(mock_find, mock_update, runner):
    """The root defaults to GIT_DIRUPDATE_ROOT_DIR."""
    result = runner.invoke(main, [], env={"GIT_DIRUPDATE_ROOT_DIR": "/from/env"})

    assert result.exit_code == 0
    mock_find.assert_called_once_with("/from/env")
    options = mock_update.call_args[0][1]
    assert options.branches == ("main", "master")
