import logging
import os
from dataclasses import dataclass, field

from .exceptions import ConfigurationError


__all__ = ["load_config", "validate_config"]


logger = logging.getLogger(__name__)


_DEFAULT_GITHUB_API_URL = "https://api.github.com"


@dataclass
class JiraConfig:
    base_url: str = None
    email: str = None
    api_token: str = None
    project_key: str = "SDK"
    issue_type: str = "Bug"

    def get_browse_url(self, key):
        return f"{self.base_url}/browse/{key}"


@dataclass
class GithubConfig:
    token: str = None
    repository: str = None
    event_path: str = None
    api_url: str = _DEFAULT_GITHUB_API_URL

    @property
    def owner(self):
        return self.repository.split("/")[0]

    @property
    def repo(self):
        return self.repository.split("/")[1]


@dataclass
class Issue2JiraConfig:
    issue_template_path: str = None
    jira: JiraConfig = field(default_factory=JiraConfig)
    github: GithubConfig = field(default_factory=GithubConfig)


# (config attribute, environment variable)
_REQUIRED_PARAMETERS = [
    ("issue_template_path", "ISSUE_TEMPLATE_PATH"),
    ("jira.base_url", "JIRA_BASE_URL"),
    ("jira.email", "JIRA_EMAIL"),
    ("jira.api_token", "JIRA_API_TOKEN"),
    ("github.token", "GITHUB_TOKEN"),
    ("github.event_path", "GITHUB_EVENT_PATH"),
    ("github.repository", "GITHUB_REPOSITORY"),
]

_OPTIONAL_PARAMETERS = [
    ("jira.project_key", "JIRA_PROJECT_KEY"),
    ("jira.issue_type", "JIRA_ISSUE_TYPE"),
    ("github.api_url", "GITHUB_API_URL"),
]


def load_config(environ=None):
    if environ is None:
        environ = os.environ

    config = Issue2JiraConfig()

    for param, variable in _REQUIRED_PARAMETERS + _OPTIONAL_PARAMETERS:
        value = environ.get(variable)
        if value:
            _set_param(config, param, value)

    validate_config(config)

    config.jira.base_url = config.jira.base_url.rstrip("/")
    config.github.api_url = config.github.api_url.rstrip("/")

    logger.debug("Loaded configuration for repository %s", config.github.repository)

    return config


def validate_config(config):
    for param, variable in _REQUIRED_PARAMETERS:
        if not _get_param(config, param):
            raise ConfigurationError(f"Missing required env var: {variable}")

    parts = config.github.repository.split("/")
    if len(parts) != 2 or not all(parts):
        raise ConfigurationError(
            f"Invalid GITHUB_REPOSITORY {config.github.repository!r}, expected the form owner/repo"
        )


def _get_param(config, param):
    value = config
    for part in param.split("."):
        value = getattr(value, part)
    return value


def _set_param(config, param, value):
    *path, name = param.split(".")
    target = config
    for part in path:
        target = getattr(target, part)
    setattr(target, name, value)
