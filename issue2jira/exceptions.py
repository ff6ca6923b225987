__all__ = ["Issue2JiraError", "ConfigurationError", "PayloadError", "TicketCreationError", "CommentPostError"]


class Issue2JiraError(Exception):
    pass


class ConfigurationError(Issue2JiraError):
    pass


class PayloadError(Issue2JiraError):
    pass


class _HttpError(Issue2JiraError):
    _DESCRIPTION = None

    def __init__(self, status_code, body):
        super().__init__(f"{self._DESCRIPTION} ({status_code}): {body}")
        self.status_code = status_code
        self.body = body


class TicketCreationError(_HttpError):
    _DESCRIPTION = "Jira create issue failed"


class CommentPostError(_HttpError):
    _DESCRIPTION = "GitHub comment failed"
