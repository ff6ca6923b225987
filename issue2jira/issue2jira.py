import json
import logging

from . import jira, github, forms
from .fields import normalize_fields


__all__ = ["IssueToJira"]


logger = logging.getLogger(__name__)


class IssueToJira:
    @classmethod
    def from_config(cls, config, form_parser=forms.parse_issue_form, dry_run=False):
        jira_client = jira.Client.from_config(config)
        github_client = github.Client.from_config(config)

        return cls(
            config=config,
            jira_client=jira_client,
            github_client=github_client,
            form_parser=form_parser,
            dry_run=dry_run,
        )

    def __init__(self, config, jira_client, github_client, form_parser=forms.parse_issue_form, dry_run=False):
        self._config = config
        self._jira_client = jira_client
        self._github_client = github_client
        self._form_parser = form_parser
        self.dry_run = dry_run

    def read_issue(self):
        return github.read_event_issue(self._config.github.event_path)

    def parse_form(self, issue):
        template = forms.load_template(self._config.issue_template_path)
        return self._form_parser(issue.body, template)

    def build_payload(self, issue, form):
        fields = normalize_fields(form)

        logger.info("=== Parsed Issue Form Fields (by ID) ===\n%s", json.dumps(fields, indent=2, ensure_ascii=False))

        return jira.make_payload(self._config, issue, form, fields)

    def run(self):
        """
        Create a JIRA ticket for the issue in the configured event, then
        comment on the GitHub issue.

        Returns the created ticket, or None on a dry run.
        """
        issue = self.read_issue()
        logger.debug("Read %s from %s", issue, self._config.github.event_path)

        form = self.parse_form(issue)
        payload = self.build_payload(issue, form)

        if self.dry_run:
            logger.info("Dry run, not creating JIRA issue:\n%s", json.dumps(payload, indent=2, ensure_ascii=False))
            return None

        ticket = self._jira_client.create_ticket(payload)
        logger.info("Created Jira issue: %s (%s)", ticket.key, ticket.url)
        logger.info("%s", github.make_ticket_link_comment(ticket))

        self._github_client.create_comment(issue.number, github.ACKNOWLEDGEMENT_COMMENT)
        logger.info("Commented Jira link back on GitHub issue.")

        return ticket
