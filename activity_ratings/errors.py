"""Exceptions raised while building activity ratings."""


class RatingsError(Exception):
    """Base class for all activity-ratings errors."""


class MalformedRecord(RatingsError):
    """A CSV row does not have the number of fields its table requires."""

    def __init__(self, table: str, expected: int, fields: list[str]):
        self.table = table
        self.expected = expected
        self.fields = list(fields)
        super().__init__(
            f"invalid {table} csv: expected {expected} fields, got {len(self.fields)}"
        )


class ArchiveDownloadError(RatingsError):
    """The data archive could not be downloaded."""


class UnsupportedArchiveEntry(RatingsError):
    """The data archive contains an entry that cannot be extracted."""
