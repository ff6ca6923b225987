import sys
import logging

import pytest

from issue2jira import command_line

from . import constants, mocks


def monkey_patch_args(monkeypatch, args):
    monkeypatch.setattr(sys, "argv", args)


@pytest.fixture(autouse=True)
def restore_logging():
    root_handlers = list(logging.getLogger().handlers)
    level = logging.getLogger("issue2jira").level

    yield

    logging.getLogger().handlers = root_handlers
    logging.getLogger("issue2jira").setLevel(level)


def test_main(monkeypatch, setup_environment, capsys):
    monkey_patch_args(monkeypatch, ["issue2jira"])
    assert command_line.main() == 0

    comments = mocks.MockGithub.get_comments(constants.TEST_GITHUB_ISSUE_NUMBER)
    assert len(comments) == 1

    out = capsys.readouterr().out
    assert "=== Parsed Issue Form Fields (by ID) ===" in out
    assert "Created Jira issue: SDK-1" in out
    assert "Commented Jira link back on GitHub issue." in out


def test_main_verbose(monkeypatch, setup_environment):
    monkey_patch_args(monkeypatch, ["issue2jira", "-v"])
    assert command_line.main() == 0
    assert logging.getLogger("issue2jira").level == logging.DEBUG


def test_main_dry_run(monkeypatch, setup_environment, capsys):
    monkey_patch_args(monkeypatch, ["issue2jira", "--dry-run"])
    assert command_line.main() == 0

    assert mocks.MockGithub.get_comments(constants.TEST_GITHUB_ISSUE_NUMBER) == []
    assert "Dry run" in capsys.readouterr().out


@pytest.mark.parametrize("name", ["ISSUE_TEMPLATE_PATH", "JIRA_API_TOKEN", "GITHUB_REPOSITORY"])
def test_main_missing_environment(monkeypatch, setup_environment, capsys, name):
    monkeypatch.delenv(name)
    monkey_patch_args(monkeypatch, ["issue2jira"])

    assert command_line.main() == 1
    assert f"Missing required env var: {name}" in capsys.readouterr().err


def test_main_ticket_failure(monkeypatch, setup_environment, capsys):
    mocks.MockJIRA.create_error = (400, "Bad request")
    monkey_patch_args(monkeypatch, ["issue2jira"])

    assert command_line.main() == 1
    assert mocks.MockGithub.get_comments(constants.TEST_GITHUB_ISSUE_NUMBER) == []
    assert "Fatal error" in capsys.readouterr().out


def test_main_comment_failure(monkeypatch, setup_environment):
    mocks.MockGithub.comment_error = (500, "Server Error")
    monkey_patch_args(monkeypatch, ["issue2jira"])

    assert command_line.main() == 1
