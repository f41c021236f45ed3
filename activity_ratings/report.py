"""Text and Markdown rendering of the leaderboards."""

from datetime import datetime
from pathlib import Path

from .aggregate import Ratings
from .rating import Rating

SECTIONS = (
    ("users", "Users"),
    ("repo_commits", "Repo commits"),
    ("repo_watches", "Repo watches"),
)


def render_ratings(ratings: Ratings) -> str:
    """Render the three leaderboards as plain text."""
    lines = []
    for attribute, title in SECTIONS:
        lines.append(f"{title}:")
        lines.append(getattr(ratings, attribute).pretty())
    return "\n".join(lines)


def generate_markdown_report(
    ratings: Ratings,
    output_path: str | Path,
    timings: dict[str, float] | None = None,
) -> None:
    """Generate a Markdown report and write it to a file.

    Args:
        ratings: Leaderboards to render
        output_path: Path where the report should be written
        timings: Optional mapping of strategy name to seconds taken
    """
    output_path = Path(output_path)

    md_content = _build_markdown(ratings, timings)

    with open(output_path, "w") as f:
        f.write(md_content)


def _build_markdown(ratings: Ratings, timings: dict[str, float] | None) -> str:
    lines = []

    lines.append("# Activity Ratings")
    lines.append("")

    for attribute, title in SECTIONS:
        lines.append(f"## {title}")
        lines.append("")
        lines.extend(_build_rating_table(getattr(ratings, attribute)))
        lines.append("")

    if timings:
        lines.append("## Timings")
        lines.append("")
        lines.append("| Strategy | Seconds |")
        lines.append("|----------|---------|")
        for strategy, seconds in timings.items():
            lines.append(f"| {strategy} | {seconds:.3f} |")
        lines.append("")

    lines.append("---")
    lines.append("")
    lines.append(
        f"*Report generated on {datetime.now().strftime('%B %d, %Y at %I:%M %p')}*"
    )

    return "\n".join(lines)


def _escape_cell(text: str) -> str:
    return text.replace("|", "\\|")


def _build_rating_table(rating: Rating) -> list[str]:
    """Build a ranked table for one leaderboard.

    Args:
        rating: Leaderboard to render

    Returns:
        List of Markdown table lines
    """
    if not len(rating):
        return ["*No entries.*"]

    lines = []
    lines.append("| Rank | Rating | Details |")
    lines.append("|------|--------|---------|")
    for rank, item in enumerate(rating, start=1):
        lines.append(f"| {rank} | {item.score} | {_escape_cell(item.pretty())} |")

    return lines
