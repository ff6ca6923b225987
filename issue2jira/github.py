import json
import logging

from github import Auth, Github, GithubException

from .entities import GithubIssue
from .exceptions import CommentPostError, PayloadError


__all__ = ["Client", "read_event_issue", "get_issue", "make_ticket_link_comment", "ACKNOWLEDGEMENT_COMMENT"]


logger = logging.getLogger(__name__)


ACKNOWLEDGEMENT_COMMENT = (
    "Thanks for the report — we’ve received it and will triage it internally.\n\n"
    "Our SDK engineering team has been notified and will follow this issue for updates.\n\n"
    "Please keep updates here (repro steps, logs, screenshots, or a minimal repro repo) so we can move faster."
)


def make_ticket_link_comment(ticket):
    return f"✅ Created internal Jira ticket: **{ticket.key}**\n\n{ticket.url}\n\n<!-- jira-key:{ticket.key} -->"


def read_event_issue(path):
    with open(path, "r", encoding="utf-8") as file:
        event = json.load(file)

    if not isinstance(event, dict):
        raise PayloadError("Event payload is not a JSON object.")

    raw_issue = event.get("issue")
    if not raw_issue:
        raise PayloadError("No issue in event payload.")

    return get_issue(raw_issue)


def get_issue(raw_issue):
    """
    Map the "issue" object of a GitHub webhook event to a GithubIssue.
    """
    user = raw_issue.get("user") or {}
    labels = tuple(l.get("name") for l in raw_issue.get("labels") or [] if l.get("name"))

    return GithubIssue(
        number=raw_issue["number"],
        title=raw_issue.get("title") or "",
        body=raw_issue.get("body") or "",
        url=raw_issue.get("html_url") or "",
        author=user.get("login") or "unknown",
        labels=labels,
    )


def _format_error_data(data):
    if data is None:
        return ""
    elif isinstance(data, str):
        return data
    else:
        return json.dumps(data)


class Client:
    @classmethod
    def from_config(cls, config):
        github = Github(auth=Auth.Token(config.github.token), base_url=config.github.api_url, retry=None, lazy=True)

        return cls(config, github)

    def __init__(self, config, github):
        self._config = config
        self._github = github
        self._repo = github.get_repo(config.github.repository)

    def create_comment(self, issue_number, body):
        try:
            raw_issue = self._repo.get_issue(issue_number)
            raw_comment = raw_issue.create_comment(body)
        except GithubException as e:
            raise CommentPostError(e.status, _format_error_data(e.data)) from e

        logger.debug("Created comment %s on GitHub issue #%s", raw_comment.id, issue_number)

        return raw_comment.id
