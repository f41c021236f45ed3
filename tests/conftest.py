import csv
import io
import tarfile

import pytest

from activity_ratings.tables import (
    ACTORS_FILENAME,
    COMMITS_FILENAME,
    EVENTS_FILENAME,
    REPOS_FILENAME,
)

HEADERS = {
    EVENTS_FILENAME: ["id", "type", "actor_id", "repo_id"],
    ACTORS_FILENAME: ["id", "username"],
    COMMITS_FILENAME: ["sha", "message", "event_id"],
    REPOS_FILENAME: ["id", "name"],
}

EVENTS = [
    ["e1", "PushEvent", "u1", "r1"],
    ["e2", "PullRequestEvent", "u2", "r1"],
    ["e3", "WatchEvent", "u2", "r2"],
    ["e4", "PushEvent", "u2", "r2"],
    ["e5", "ForkEvent", "u1", "r2"],
    ["e6", "WatchEvent", "u1", "r2"],
    ["e7", "PullRequestEvent", "u1", "r2"],
    ["e8", "IssuesEvent", "u3", "r3"],
]
USERS = [["u1", "alice"], ["u2", "bob"], ["u3", "carol"]]
COMMITS = [
    ["h1", "first", "e1"],
    ["h2", "second, with a comma", "e1"],
    ["h3", "third", "e1"],
    ["h4", "fourth", "e4"],
]
REPOS = [["r1", "alice/tools"], ["r2", "bob/site"], ["r3", "carol/empty"]]


def _csv_bytes(header, rows):
    buffer = io.StringIO()
    writer = csv.writer(buffer)
    writer.writerow(header)
    writer.writerows(rows)
    return buffer.getvalue().encode("utf-8")


def write_tables(directory, events=EVENTS, users=USERS, commits=COMMITS, repos=REPOS):
    directory.mkdir(parents=True, exist_ok=True)
    tables = {
        EVENTS_FILENAME: events,
        ACTORS_FILENAME: users,
        COMMITS_FILENAME: commits,
        REPOS_FILENAME: repos,
    }
    for filename, rows in tables.items():
        (directory / filename).write_bytes(_csv_bytes(HEADERS[filename], rows))
    return directory


def build_archive(path=None):
    """Build a tar.gz with the sample tables under data/; return its bytes."""
    buffer = io.BytesIO()
    with tarfile.open(fileobj=buffer, mode="w:gz") as tar:
        directory = tarfile.TarInfo("data")
        directory.type = tarfile.DIRTYPE
        directory.mode = 0o755
        tar.addfile(directory)
        for filename, rows in (
            (EVENTS_FILENAME, EVENTS),
            (ACTORS_FILENAME, USERS),
            (COMMITS_FILENAME, COMMITS),
            (REPOS_FILENAME, REPOS),
        ):
            content = _csv_bytes(HEADERS[filename], rows)
            info = tarfile.TarInfo(f"data/{filename}")
            info.size = len(content)
            tar.addfile(info, io.BytesIO(content))
    data = buffer.getvalue()
    if path is not None:
        path.write_bytes(data)
    return data


@pytest.fixture
def data_dir(tmp_path):
    return write_tables(tmp_path / "data")


@pytest.fixture
def archive_bytes():
    return build_archive()
