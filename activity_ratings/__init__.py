"""Top-N leaderboards of users and repositories from repository activity tables."""

__version__ = "0.1.0"
