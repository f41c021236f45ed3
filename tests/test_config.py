"""Tests for configuration loading."""

import pytest

from activity_ratings.archive import DEFAULT_TAR_LINK
from activity_ratings.config import Config, load_config


def test_load_config(tmp_path, monkeypatch):
    monkeypatch.setenv("DATA_URL", "https://example.com/data.tar.gz")
    path = tmp_path / "config.yaml"
    path.write_text(
        "tar_link: ${DATA_URL}\n"
        "strategy: both\n"
        "size: 5\n"
        "output: report.md\n"
    )

    config = load_config(path)

    assert config == Config(
        tar_link="https://example.com/data.tar.gz",
        strategy="both",
        size=5,
        output="report.md",
    )


def test_empty_config_uses_defaults(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("")

    config = load_config(path)

    assert config.tar_link == DEFAULT_TAR_LINK
    assert config.strategy == "performance"
    assert config.size == 10


def test_unset_env_var_is_kept(tmp_path, monkeypatch):
    monkeypatch.delenv("NOT_SET_ANYWHERE", raising=False)
    path = tmp_path / "config.yaml"
    path.write_text("tar_link: ${NOT_SET_ANYWHERE}\n")

    assert load_config(path).tar_link == "${NOT_SET_ANYWHERE}"


def test_missing_config(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "nope.yaml")


@pytest.mark.parametrize(
    "content",
    [
        "strategy: fastest\n",
        "size: -1\n",
        "size: ten\n",
        "colour: blue\n",
        "archive: a.tar.gz\ndata_dir: data\n",
        "- just\n- a list\n",
    ],
)
def test_invalid_config(tmp_path, content):
    path = tmp_path / "config.yaml"
    path.write_text(content)

    with pytest.raises(ValueError):
        load_config(path)


def test_size_from_env_var(tmp_path, monkeypatch):
    monkeypatch.setenv("RATING_SIZE", "3")
    path = tmp_path / "config.yaml"
    path.write_text("size: ${RATING_SIZE}\n")

    assert load_config(path).size == 3


def test_unset_size_env_var_is_invalid(tmp_path, monkeypatch):
    monkeypatch.delenv("RATING_SIZE", raising=False)
    path = tmp_path / "config.yaml"
    path.write_text("size: ${RATING_SIZE}\n")

    with pytest.raises(ValueError):
        load_config(path)
