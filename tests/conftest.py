import json
from pathlib import Path

import pytest

from issue2jira.config import load_config
from issue2jira.entities import GithubIssue
import issue2jira.jira
import issue2jira.github

from . import constants
from . import mocks


DATA_PATH = Path(__file__).parent / "data"
TEMPLATE_PATH = DATA_PATH / "bug_report.yml"
ISSUE_BODY_PATH = DATA_PATH / "issue_body.md"


@pytest.fixture(autouse=True)
def mock_raw_clients(monkeypatch):
    monkeypatch.setattr(issue2jira.jira, "JIRA", mocks.MockJIRA)
    monkeypatch.setattr(issue2jira.github, "Github", mocks.MockGithub)


@pytest.fixture(autouse=True)
def reset_mocks():
    mocks.reset()


@pytest.fixture
def template_path():
    return TEMPLATE_PATH


@pytest.fixture
def template(template_path):
    with template_path.open("r") as file:
        return file.read()


@pytest.fixture
def issue_body():
    with ISSUE_BODY_PATH.open("r") as file:
        return file.read()


@pytest.fixture
def raw_issue(issue_body):
    return {
        "number": constants.TEST_GITHUB_ISSUE_NUMBER,
        "title": constants.TEST_GITHUB_ISSUE_TITLE,
        "body": issue_body,
        "html_url": f"https://github.com/{constants.TEST_GITHUB_REPOSITORY}/issues/{constants.TEST_GITHUB_ISSUE_NUMBER}",
        "user": {"login": constants.TEST_GITHUB_USER_LOGIN},
        "labels": [{"name": "bug"}, {"name": "Needs Triage"}],
        "state": "open",
    }


@pytest.fixture
def event_path(tmp_path, raw_issue):
    path = tmp_path / "event.json"
    with path.open("w") as file:
        file.write(json.dumps({"action": "opened", "issue": raw_issue}))
    return path


@pytest.fixture
def environ(event_path, template_path):
    return {
        "ISSUE_TEMPLATE_PATH": str(template_path),
        "JIRA_BASE_URL": constants.TEST_JIRA_SERVER,
        "JIRA_EMAIL": constants.TEST_JIRA_EMAIL,
        "JIRA_API_TOKEN": constants.TEST_JIRA_API_TOKEN,
        "GITHUB_TOKEN": constants.TEST_GITHUB_TOKEN,
        "GITHUB_EVENT_PATH": str(event_path),
        "GITHUB_REPOSITORY": constants.TEST_GITHUB_REPOSITORY,
    }


@pytest.fixture
def setup_environment(monkeypatch, environ):
    for name in ["JIRA_PROJECT_KEY", "JIRA_ISSUE_TYPE", "GITHUB_API_URL"]:
        monkeypatch.delenv(name, raising=False)

    for name, value in environ.items():
        monkeypatch.setenv(name, value)


@pytest.fixture
def config(environ):
    return load_config(environ)


@pytest.fixture
def create_issue():
    def _create_issue(**kwargs):
        fields = {
            "number": constants.TEST_GITHUB_ISSUE_NUMBER,
            "title": constants.TEST_GITHUB_ISSUE_TITLE,
            "body": "",
            "url": f"https://github.com/{constants.TEST_GITHUB_REPOSITORY}/issues/{constants.TEST_GITHUB_ISSUE_NUMBER}",
            "author": constants.TEST_GITHUB_USER_LOGIN,
            "labels": (),
        }

        fields.update(kwargs)

        return GithubIssue(**fields)

    return _create_issue


@pytest.fixture
def form():
    return {
        "severity": ["Major functionality not working"],
        "sdk-version": ["2.3.0"],
        "android-version": "14",
        "device": "Pixel 8 Pro",
        "steps-to-reproduce": "1. Launch the app",
        "logs": "stacktrace...",
        "confirmations": {"selected": ["I searched existing issues"], "unselected": []},
    }
