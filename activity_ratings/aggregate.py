"""Aggregation of activity tables into per-user and per-repository stats."""

import logging
from dataclasses import dataclass

from .models import EventType, RepoStats, UserStats
from .rating import Rating
from .scoring import rate_repo_commits, rate_repo_watches, rate_user
from .tables import TableSource

logger = logging.getLogger(__name__)

DEFAULT_RATING_SIZE = 10

STRATEGY_PERFORMANCE = "performance"
STRATEGY_SPACE = "space"
STRATEGIES = (STRATEGY_PERFORMANCE, STRATEGY_SPACE)


@dataclass
class Ratings:
    """The three leaderboards produced from one data set."""

    users: Rating
    repo_commits: Rating
    repo_watches: Rating


def _count_user_activity(tables: TableSource, user_id: str) -> tuple[int | None, int, int]:
    first_seen = None
    commits = 0
    pull_request_events = 0
    for position, event in enumerate(tables.events()):
        if event.actor_id != user_id:
            continue
        if event.type == EventType.PUSH:
            commits += tables.count_commits(event.id)
        elif event.type == EventType.PULL_REQUEST:
            pull_request_events += 1
        else:
            continue
        if first_seen is None:
            first_seen = position
    return first_seen, commits, pull_request_events


def _count_repo_activity(tables: TableSource, repo_id: str) -> tuple[int | None, int, int]:
    first_seen = None
    commits = 0
    watch_events = 0
    for position, event in enumerate(tables.events()):
        if event.repo_id != repo_id:
            continue
        if event.type == EventType.PUSH:
            commits += tables.count_commits(event.id)
        elif event.type == EventType.WATCH:
            watch_events += 1
        else:
            continue
        if first_seen is None:
            first_seen = position
    return first_seen, commits, watch_events


def _by_first_event(stats: dict, first_seen: dict[str, int]) -> dict:
    return dict(sorted(stats.items(), key=lambda entry: first_seen[entry[0]]))


def space_optimized_stats(
    tables: TableSource,
) -> tuple[dict[str, UserStats], dict[str, RepoStats]]:
    """Compute stats by rescanning the events table for every user and repo.

    Only the stats of the entity being counted are kept in flight while the
    events table is scanned, at the price of one events scan per user and per
    repository. Users and repos without any push, pull request or watch event
    get no entry, and entries are ordered by their first such event, so the
    result equals the one of ``performance_optimized_stats`` whenever every
    id referenced by an event has a row in the actors or repos table.

    Args:
        tables: Source of the activity tables

    Returns:
        Tuple of (user stats by user ID, repo stats by repo ID)
    """
    logger.info("Starting a space optimized aggregation")
    users: dict[str, UserStats] = {}
    repos: dict[str, RepoStats] = {}
    user_first_seen: dict[str, int] = {}
    repo_first_seen: dict[str, int] = {}

    for user in tables.users():
        logger.debug(f"Rating user {user.username} (ID: {user.id})")
        first_seen, commits, pull_request_events = _count_user_activity(tables, user.id)
        if first_seen is None:
            logger.debug(f"User {user.username} (ID: {user.id}) has no activity")
            continue
        user_first_seen[user.id] = first_seen
        users[user.id] = UserStats(
            id=user.id,
            username=user.username,
            commits=commits,
            pull_request_events=pull_request_events,
        )
        logger.debug(
            f"User {user.username} (ID: {user.id}) rated; "
            f"Commits: {commits}; PR events: {pull_request_events}"
        )

    for repo in tables.repos():
        logger.debug(f"Rating repo {repo.name} (ID: {repo.id})")
        first_seen, commits, watch_events = _count_repo_activity(tables, repo.id)
        if first_seen is None:
            logger.debug(f"Repo {repo.name} (ID: {repo.id}) has no activity")
            continue
        repo_first_seen[repo.id] = first_seen
        repos[repo.id] = RepoStats(
            id=repo.id, name=repo.name, commits=commits, watch_events=watch_events
        )
        logger.debug(
            f"Repo {repo.name} (ID: {repo.id}) rated; "
            f"Commits: {commits}; Watches: {watch_events}"
        )

    logger.info(f"Aggregated {len(users)} users and {len(repos)} repos")
    return _by_first_event(users, user_first_seen), _by_first_event(repos, repo_first_seen)


def performance_optimized_stats(
    tables: TableSource,
) -> tuple[dict[str, UserStats], dict[str, RepoStats]]:
    """Compute stats with a single scan of the events table.

    Stats records are created the first time an event refers to a user or
    repository. Display names are filled in afterwards with one scan of the
    actors table and one of the repos table.

    Args:
        tables: Source of the activity tables

    Returns:
        Tuple of (user stats by user ID, repo stats by repo ID), with one entry
        for every user or repo referenced by a push, pull request or watch event
    """
    logger.info("Starting a performance optimized aggregation")
    users: dict[str, UserStats] = {}
    repos: dict[str, RepoStats] = {}

    for event in tables.events():
        if event.type == EventType.PUSH:
            logger.debug(f"Processing event {event.id}")
            commits = tables.count_commits(event.id)
            user = users.setdefault(event.actor_id, UserStats(id=event.actor_id))
            user.commits += commits
            repo = repos.setdefault(event.repo_id, RepoStats(id=event.repo_id))
            repo.commits += commits
        elif event.type == EventType.PULL_REQUEST:
            logger.debug(f"Processing event {event.id}")
            user = users.setdefault(event.actor_id, UserStats(id=event.actor_id))
            user.pull_request_events += 1
        elif event.type == EventType.WATCH:
            logger.debug(f"Processing event {event.id}")
            repo = repos.setdefault(event.repo_id, RepoStats(id=event.repo_id))
            repo.watch_events += 1

    _fill_usernames(tables, users)
    _fill_repo_names(tables, repos)

    logger.info(f"Aggregated {len(users)} users and {len(repos)} repos")
    return users, repos


def _fill_usernames(tables: TableSource, users: dict[str, UserStats]) -> None:
    for user in tables.users():
        stats = users.get(user.id)
        if stats is not None:
            stats.username = user.username


def _fill_repo_names(tables: TableSource, repos: dict[str, RepoStats]) -> None:
    for repo in tables.repos():
        stats = repos.get(repo.id)
        if stats is not None:
            stats.name = repo.name


def build_ratings(
    users: dict[str, UserStats],
    repos: dict[str, RepoStats],
    size: int = DEFAULT_RATING_SIZE,
) -> Ratings:
    """Rank accumulated stats into the three leaderboards.

    Candidates are offered in the dictionaries' iteration order, which decides
    the rank among equal scores. Both aggregation strategies order their stats
    by the first push, pull request or watch event of every user and repo.
    """
    ratings = Ratings(users=Rating(size), repo_commits=Rating(size), repo_watches=Rating(size))

    for stats in users.values():
        ratings.users.offer(rate_user(stats))

    for stats in repos.values():
        ratings.repo_commits.offer(rate_repo_commits(stats))
        ratings.repo_watches.offer(rate_repo_watches(stats))

    return ratings


def compute_ratings(
    tables: TableSource,
    strategy: str = STRATEGY_PERFORMANCE,
    size: int = DEFAULT_RATING_SIZE,
) -> Ratings:
    """Aggregate the tables with the given strategy and build the leaderboards.

    Args:
        tables: Source of the activity tables
        strategy: "performance" (single events scan) or "space" (one events
            scan per user and repo)
        size: Capacity of every leaderboard

    Returns:
        Ratings for users, repo commits and repo watches

    Raises:
        ValueError: If the strategy is unknown
    """
    if strategy == STRATEGY_PERFORMANCE:
        users, repos = performance_optimized_stats(tables)
    elif strategy == STRATEGY_SPACE:
        users, repos = space_optimized_stats(tables)
    else:
        raise ValueError(f"Unknown strategy: {strategy}")

    return build_ratings(users, repos, size)
