"""Fetching and unpacking the tar.gz archive with the activity tables."""

import logging
import shutil
import tarfile
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO

import httpx

from .errors import ArchiveDownloadError, UnsupportedArchiveEntry
from .tables import EVENTS_FILENAME

logger = logging.getLogger(__name__)

DEFAULT_TAR_LINK = (
    "https://github.com/adjust/analytics-software-engineer-assignment/"
    "blob/master/data.tar.gz?raw=true"
)
TEMP_DIR_PREFIX = "activity-ratings-"
ARCHIVE_FILENAME = "data.tar.gz"
DATA_DIRNAME = "data"


@contextmanager
def temporary_workspace(prefix: str = TEMP_DIR_PREFIX) -> Iterator[Path]:
    """Create a temporary directory that is removed when the block exits."""
    with tempfile.TemporaryDirectory(prefix=prefix) as temp_dir:
        logger.debug(f"Created temporary directory {temp_dir}")
        yield Path(temp_dir)
    logger.debug(f"Removed temporary directory {temp_dir}")


def _target_path(destination: Path, name: str) -> Path:
    root = destination.resolve()
    target = (root / name).resolve()
    if target != root and root not in target.parents:
        raise UnsupportedArchiveEntry(f"archive entry escapes the destination: {name}")
    return target


def extract_archive(fileobj: BinaryIO, destination: str | Path) -> None:
    """Extract a gzip-compressed tar stream into a directory.

    Only directories and regular files are supported.

    Args:
        fileobj: Readable binary stream with the compressed archive
        destination: Directory to extract into

    Raises:
        UnsupportedArchiveEntry: If the archive holds links, devices or other
            special entries, or an entry would land outside the destination
    """
    destination = Path(destination)

    with tarfile.open(fileobj=fileobj, mode="r|gz") as tar:
        for member in tar:
            target = _target_path(destination, member.name)
            if member.isdir():
                target.mkdir(parents=True, exist_ok=True)
            elif member.isreg():
                target.parent.mkdir(parents=True, exist_ok=True)
                source = tar.extractfile(member)
                with source, open(target, "wb") as out:
                    shutil.copyfileobj(source, out)
            else:
                raise UnsupportedArchiveEntry(
                    f"unhandled entry type inside the tar archive: {member.name}"
                )
            logger.debug(f"Extracted {member.name}")


def extract_local_archive(path: str | Path, destination: str | Path) -> None:
    """Extract a tar.gz file from disk into a directory."""
    with open(path, "rb") as f:
        extract_archive(f, destination)


def download_archive(
    url: str,
    destination: str | Path,
    timeout: float | None = None,
    transport: httpx.BaseTransport | None = None,
) -> None:
    """Download a tar.gz archive and extract it into a directory.

    Args:
        url: Archive URL; redirects are followed
        destination: Directory to extract into
        timeout: Request timeout in seconds, None for no timeout
        transport: Optional httpx transport (used to stub the network)

    Raises:
        ArchiveDownloadError: If the server does not answer with 200 OK
    """
    destination = Path(destination)
    archive_path = destination / ARCHIVE_FILENAME

    logger.debug(f"Downloading archive: GET {url}")
    with httpx.Client(timeout=timeout, follow_redirects=True, transport=transport) as client:
        with client.stream("GET", url) as response:
            if response.status_code != httpx.codes.OK:
                raise ArchiveDownloadError(
                    f"couldn't download the archive: {url} answered {response.status_code}"
                )
            with open(archive_path, "wb") as out:
                for chunk in response.iter_bytes():
                    out.write(chunk)

    try:
        extract_local_archive(archive_path, destination)
    finally:
        archive_path.unlink()


def locate_tables(root: str | Path) -> Path:
    """Return the directory holding the CSV tables below an extraction root.

    Archives conventionally wrap the tables in a ``data/`` directory; a root
    that already holds the tables is returned unchanged.
    """
    root = Path(root)
    nested = root / DATA_DIRNAME
    if not (root / EVENTS_FILENAME).exists() and nested.is_dir():
        return nested
    return root
