"""Adapters that turn accumulated stats into leaderboard candidates."""

from dataclasses import dataclass

from .models import RepoStats, UserStats


@dataclass(frozen=True)
class RatableUser:
    """A user scored by commits plus pull request events."""

    id: str
    username: str
    commits: int
    pull_request_events: int

    @property
    def score(self) -> int:
        return self.commits + self.pull_request_events

    def pretty(self) -> str:
        return (
            f"ID: {self.id}; Username: {self.username}; "
            f"Commits: {self.commits}; PREvents: {self.pull_request_events};"
        )


@dataclass(frozen=True)
class CommitRatableRepo:
    """A repository scored by commits pushed to it."""

    id: str
    name: str
    commits: int

    @property
    def score(self) -> int:
        return self.commits

    def pretty(self) -> str:
        return f"ID: {self.id}; Name: {self.name}; Commits: {self.commits};"


@dataclass(frozen=True)
class WatchRatableRepo:
    """A repository scored by watch events."""

    id: str
    name: str
    watch_events: int

    @property
    def score(self) -> int:
        return self.watch_events

    def pretty(self) -> str:
        return f"ID: {self.id}; Name: {self.name}; WatchEvents: {self.watch_events};"


def rate_user(stats: UserStats) -> RatableUser:
    return RatableUser(
        id=stats.id,
        username=stats.username,
        commits=stats.commits,
        pull_request_events=stats.pull_request_events,
    )


def rate_repo_commits(stats: RepoStats) -> CommitRatableRepo:
    return CommitRatableRepo(id=stats.id, name=stats.name, commits=stats.commits)


def rate_repo_watches(stats: RepoStats) -> WatchRatableRepo:
    return WatchRatableRepo(id=stats.id, name=stats.name, watch_events=stats.watch_events)
