import json
import logging

from jira import JIRA
from jira.exceptions import JIRAError

from .entities import CreatedTicket
from .exceptions import TicketCreationError
from .fields import LOGS_FIELD_ID, FIELD_IDS, is_missing, make_labels, get_priority, normalize_fields


__all__ = ["Client", "make_summary", "make_description", "make_payload"]


logger = logging.getLogger(__name__)


_REST_API_VERSION = "3"

_SUMMARY_PREFIX = "[Android SDK]"

_LOGS_LANGUAGE = "shell"


def adf_text(text):
    return {"type": "text", "text": str(text)}


def adf_paragraph(text):
    return {"type": "paragraph", "content": [adf_text(text)]}


def adf_heading(text, level=3):
    return {"type": "heading", "attrs": {"level": level}, "content": [adf_text(text)]}


def adf_code_block(code, language=_LOGS_LANGUAGE):
    if code is None:
        code = ""
    return {"type": "codeBlock", "attrs": {"language": language}, "content": [adf_text(code)]}


def adf_document(content):
    return {"type": "doc", "version": 1, "content": content}


def _format_field_value(value):
    if isinstance(value, str):
        return value
    else:
        return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def make_summary(issue):
    return f"{_SUMMARY_PREFIX} {issue.title}".strip()


def make_description(issue, form, fields):
    content = [
        adf_heading("GitHub Issue", 2),
        adf_paragraph(f"#{issue.number} by {issue.author}"),
        adf_paragraph(issue.url),
        adf_heading("Form Fields", 2),
    ]

    for field_id in FIELD_IDS:
        if field_id == LOGS_FIELD_ID:
            continue
        content.append(adf_paragraph(f"{field_id}: {_format_field_value(fields[field_id])}"))

    content.append(adf_heading(LOGS_FIELD_ID, 2))

    logs = fields[LOGS_FIELD_ID]
    if is_missing(form.get(LOGS_FIELD_ID)):
        content.append(adf_paragraph(logs))
    elif isinstance(logs, str):
        content.append(adf_code_block(logs))
    else:
        content.append(adf_code_block(json.dumps(logs, indent=2, ensure_ascii=False)))

    return adf_document(content)


def make_payload(config, issue, form, fields=None):
    """
    Build the body of a JIRA "create issue" request for a GitHub issue.

    Parameters
    ----------
    config : issue2jira.config.Issue2JiraConfig
    issue : issue2jira.entities.GithubIssue
    form : dict
        Raw values returned by the form parser.
    fields : dict, optional
        Output of `normalize_fields`, computed from ``form`` if omitted.

    Returns
    -------
    dict
    """
    if fields is None:
        fields = normalize_fields(form)

    return {
        "fields": {
            "project": {"key": config.jira.project_key},
            "issuetype": {"name": config.jira.issue_type},
            "summary": make_summary(issue),
            "priority": {"name": get_priority(form)},
            "labels": make_labels(issue, form),
            "description": make_description(issue, form, fields),
        },
        "properties": [
            {"key": "github.issue.url", "value": issue.url},
            {"key": "github.issue.number", "value": int(issue.number)},
            {"key": "github.repo", "value": config.github.repository},
        ],
    }


class Client:
    @classmethod
    def from_config(cls, config):
        jira = JIRA(
            config.jira.base_url,
            basic_auth=(config.jira.email, config.jira.api_token),
            options={"rest_api_version": _REST_API_VERSION},
            max_retries=0,
            get_server_info=False,
        )

        return cls(config, jira)

    def __init__(self, config, jira):
        self._config = config
        self._jira = jira

    def create_ticket(self, payload):
        # JIRA.create_issue only sends "fields"; the properties must go in the same request.
        # Relies on the private JIRA._get_url and JIRA._session (a ResilientSession raising
        # JIRAError on non-2xx), checked against jira 3.x.
        url = self._jira._get_url("issue")

        try:
            response = self._jira._session.post(url, data=json.dumps(payload))
        except JIRAError as e:
            if e.response is not None:
                body = e.response.text
            else:
                body = e.text
            raise TicketCreationError(e.status_code, body) from e

        key = response.json()["key"]
        ticket = CreatedTicket(key=key, url=self._config.jira.get_browse_url(key))

        logger.debug("Created %s", ticket)

        return ticket
