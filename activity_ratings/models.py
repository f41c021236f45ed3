"""Data models for repository activity records and derived statistics."""

from collections.abc import Sequence
from dataclasses import dataclass

from .errors import MalformedRecord


class EventType:
    """Event type names found in the events table."""

    COMMIT_COMMENT = "CommitCommentEvent"
    CREATE = "CreateEvent"
    DELETE = "DeleteEvent"
    FORK = "ForkEvent"
    GOLLUM = "GollumEvent"
    ISSUE_COMMENT = "IssueCommentEvent"
    ISSUES = "IssuesEvent"
    MEMBER = "MemberEvent"
    PUBLIC = "PublicEvent"
    PULL_REQUEST_REVIEW_COMMENT = "PullRequestReviewCommentEvent"
    PUSH = "PushEvent"
    RELEASE = "ReleaseEvent"
    WATCH = "WatchEvent"
    PULL_REQUEST = "PullRequestEvent"


def _check_arity(table: str, fields: Sequence[str], expected: int) -> None:
    if len(fields) != expected:
        raise MalformedRecord(table, expected, list(fields))


@dataclass(frozen=True)
class Event:
    """A single recorded activity of one actor in one repository."""

    id: str
    type: str
    actor_id: str
    repo_id: str

    @classmethod
    def from_fields(cls, fields: Sequence[str]) -> "Event":
        _check_arity("event", fields, 4)
        return cls(id=fields[0], type=fields[1], actor_id=fields[2], repo_id=fields[3])


@dataclass(frozen=True)
class User:
    """A user (actor) and their display name."""

    id: str
    username: str

    @classmethod
    def from_fields(cls, fields: Sequence[str]) -> "User":
        _check_arity("user", fields, 2)
        return cls(id=fields[0], username=fields[1])


@dataclass(frozen=True)
class Commit:
    """A commit pushed as part of a push event."""

    hash: str
    message: str
    event_id: str

    @classmethod
    def from_fields(cls, fields: Sequence[str]) -> "Commit":
        _check_arity("commit", fields, 3)
        return cls(hash=fields[0], message=fields[1], event_id=fields[2])


@dataclass(frozen=True)
class Repo:
    """A repository and its display name."""

    id: str
    name: str

    @classmethod
    def from_fields(cls, fields: Sequence[str]) -> "Repo":
        _check_arity("repo", fields, 2)
        return cls(id=fields[0], name=fields[1])


@dataclass
class UserStats:
    """Accumulated activity for a single user."""

    id: str
    username: str = ""
    commits: int = 0
    pull_request_events: int = 0

    @property
    def score(self) -> int:
        return self.commits + self.pull_request_events


@dataclass
class RepoStats:
    """Accumulated activity for a single repository."""

    id: str
    name: str = ""
    commits: int = 0
    watch_events: int = 0
