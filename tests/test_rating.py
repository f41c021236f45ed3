"""Tests for the bounded leaderboard."""

import random
from dataclasses import dataclass

import pytest

from activity_ratings.rating import Rating


@dataclass(frozen=True)
class Item:
    name: str
    score: int

    def pretty(self) -> str:
        return f"Name: {self.name};"


def offer_all(rating, scores):
    items = [Item(f"item{i}", score) for i, score in enumerate(scores)]
    accepted = [rating.offer(item) for item in items]
    return items, accepted


def test_keeps_top_scores_in_descending_order():
    rating = Rating(3)
    items, _ = offer_all(rating, [5, 3, 3, 8, 1])

    assert [item.score for item in rating.items] == [8, 5, 3]
    # the first 3 offered wins the tie
    assert rating.items[2] is items[1]


def test_offer_reports_acceptance():
    rating = Rating(3)
    _, accepted = offer_all(rating, [5, 3, 3, 8, 1])

    assert accepted == [True, True, True, True, False]


def test_equal_scores_keep_offer_order():
    rating = Rating(4)
    items, _ = offer_all(rating, [7, 7, 7, 7, 7, 7])

    assert rating.items == items[:4]


def test_lower_score_appended_while_below_capacity():
    rating = Rating(10)
    offer_all(rating, [5, 3, 1])

    assert [item.score for item in rating.items] == [5, 3, 1]
    assert len(rating) == 3


def test_full_rating_rejects_equal_score():
    rating = Rating(2)
    offer_all(rating, [4, 2])

    assert rating.offer(Item("late", 2)) is False
    assert [item.name for item in rating.items] == ["item0", "item1"]


def test_bumped_item_is_dropped():
    rating = Rating(2)
    offer_all(rating, [4, 2])

    assert rating.offer(Item("new", 3)) is True
    assert [item.name for item in rating.items] == ["item0", "new"]


def test_zero_capacity_rejects_everything():
    rating = Rating(0)
    _, accepted = offer_all(rating, [1, 2, 3])

    assert accepted == [False, False, False]
    assert rating.items == []


def test_empty_rating_accepts_first_item():
    rating = Rating(1)

    assert rating.offer(Item("only", 0)) is True
    assert len(rating) == 1


def test_items_returns_a_copy():
    rating = Rating(2)
    offer_all(rating, [1])

    rating.items.clear()

    assert len(rating) == 1


@pytest.mark.parametrize("seed", range(20))
def test_matches_stable_sort_of_all_candidates(seed):
    rng = random.Random(seed)
    size = rng.randint(0, 6)
    scores = [rng.randint(0, 5) for _ in range(rng.randint(0, 30))]
    rating = Rating(size)

    items = []
    for i, score in enumerate(scores):
        item = Item(f"item{i}", score)
        items.append(item)
        rating.offer(item)
        held = [held.score for held in rating.items]
        assert len(held) <= size
        assert held == sorted(held, reverse=True)

    expected = sorted(items, key=lambda item: -item.score)[:size]
    assert rating.items == expected


def test_pretty_lists_ranked_lines():
    rating = Rating(3)
    offer_all(rating, [2, 9])

    assert rating.pretty() == (
        "1 (Rating: 9): Name: item1;\n"
        "2 (Rating: 2): Name: item0;\n"
    )


def test_pretty_of_empty_rating_is_empty():
    assert Rating(3).pretty() == ""
