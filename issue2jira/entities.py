from dataclasses import dataclass
from typing import Tuple


__all__ = ["GithubIssue", "CreatedTicket"]


@dataclass(frozen=True)
class GithubIssue:
    number: int
    title: str = ""
    body: str = ""
    url: str = ""
    author: str = "unknown"
    labels: Tuple[str, ...] = ()

    def __str__(self):
        return f"GitHub issue #{self.number}"


@dataclass(frozen=True)
class CreatedTicket:
    key: str
    url: str

    def __str__(self):
        return f"JIRA issue {self.key}"
