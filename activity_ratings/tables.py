"""Sources of decoded activity tables."""

import csv
import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator, Sequence
from pathlib import Path

from .models import Commit, Event, Repo, User

logger = logging.getLogger(__name__)

ACTORS_FILENAME = "actors.csv"
COMMITS_FILENAME = "commits.csv"
EVENTS_FILENAME = "events.csv"
REPOS_FILENAME = "repos.csv"


class TableSource(ABC):
    """Abstract base class for the four activity tables.

    Every accessor returns a fresh iterator that scans its table from the
    beginning, so callers may rescan a table as often as they need.
    """

    @abstractmethod
    def rows(self, filename: str) -> Iterator[list[str]]:
        """Yield the raw field lists of a table, header excluded.

        Args:
            filename: Table file name (e.g., "events.csv")

        Returns:
            Iterator over field lists
        """
        pass

    def events(self) -> Iterator[Event]:
        for fields in self.rows(EVENTS_FILENAME):
            yield Event.from_fields(fields)

    def users(self) -> Iterator[User]:
        for fields in self.rows(ACTORS_FILENAME):
            yield User.from_fields(fields)

    def commits(self) -> Iterator[Commit]:
        for fields in self.rows(COMMITS_FILENAME):
            yield Commit.from_fields(fields)

    def repos(self) -> Iterator[Repo]:
        for fields in self.rows(REPOS_FILENAME):
            yield Repo.from_fields(fields)

    def count_commits(self, event_id: str) -> int:
        """Count the commits that belong to a push event.

        Args:
            event_id: ID of the push event

        Returns:
            Number of commit rows referencing the event
        """
        total = 0
        for commit in self.commits():
            if commit.event_id == event_id:
                total += 1
        return total


class DataTables(TableSource):
    """CSV tables stored in a directory, read from disk on every scan."""

    def __init__(self, directory: str | Path):
        """Initialize the table reader.

        Args:
            directory: Directory holding actors.csv, commits.csv, events.csv
                and repos.csv
        """
        self.directory = Path(directory)

    def rows(self, filename: str) -> Iterator[list[str]]:
        path = self.directory / filename
        logger.debug(f"Scanning {path}")
        with open(path, newline="", encoding="utf-8") as f:
            reader = csv.reader(f)
            # skip the header
            next(reader, None)
            yield from reader


class MemoryTables(TableSource):
    """Tables held in memory as raw field lists without header rows."""

    def __init__(
        self,
        events: Iterable[Sequence[str]] = (),
        users: Iterable[Sequence[str]] = (),
        commits: Iterable[Sequence[str]] = (),
        repos: Iterable[Sequence[str]] = (),
    ):
        self._tables = {
            EVENTS_FILENAME: [list(row) for row in events],
            ACTORS_FILENAME: [list(row) for row in users],
            COMMITS_FILENAME: [list(row) for row in commits],
            REPOS_FILENAME: [list(row) for row in repos],
        }

    def rows(self, filename: str) -> Iterator[list[str]]:
        for row in self._tables[filename]:
            yield list(row)
