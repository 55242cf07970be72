"""Tests for the pure menu-state and vote-transition types."""

from dataclasses import FrozenInstanceError
from datetime import date, datetime, timezone

import pytest

from mealboard.domain import DraftMenu, PublishedMenu, resolve_vote
from mealboard.models.base.enums import MealSlot, MenuStatus, VoteType


def _draft(**overrides):
    values = dict(
        id="m-1",
        city_id="pune",
        menu_date=date(2026, 3, 1),
        meal_slot=MealSlot.BREAKFAST,
        items=("Poha", "Tea"),
        total_calories=350,
    )
    values.update(overrides)
    return DraftMenu(**values)


@pytest.mark.parametrize(
    "existing, requested, result, like_delta, dislike_delta",
    [
        (None, VoteType.LIKE, VoteType.LIKE, 1, 0),
        (None, VoteType.DISLIKE, VoteType.DISLIKE, 0, 1),
        (VoteType.LIKE, VoteType.LIKE, None, -1, 0),
        (VoteType.DISLIKE, VoteType.DISLIKE, None, 0, -1),
        (VoteType.DISLIKE, VoteType.LIKE, VoteType.LIKE, 1, -1),
        (VoteType.LIKE, VoteType.DISLIKE, VoteType.DISLIKE, -1, 1),
    ],
)
def test_resolve_vote_covers_every_transition(existing, requested, result, like_delta, dislike_delta):
    transition = resolve_vote(existing, requested)

    assert transition.previous is existing
    assert transition.result is result
    assert transition.like_delta == like_delta
    assert transition.dislike_delta == dislike_delta


def test_resolve_vote_flags_retraction_and_switch():
    assert resolve_vote(VoteType.LIKE, VoteType.LIKE).is_retraction
    assert resolve_vote(VoteType.LIKE, VoteType.DISLIKE).is_switch
    assert not resolve_vote(None, VoteType.LIKE).is_switch


def test_draft_revise_replaces_only_given_fields():
    draft = _draft()

    revised = draft.revise(total_calories=400)

    assert revised.items == ("Poha", "Tea")
    assert revised.total_calories == 400
    assert draft.total_calories == 350


def test_draft_revise_trims_and_rejects_empty_items():
    assert _draft().revise(items=[" Upma ", ""]).items == ("Upma",)

    with pytest.raises(ValueError):
        _draft().revise(items=["  "])


def test_draft_revise_rejects_negative_calories():
    with pytest.raises(ValueError):
        _draft().revise(total_calories=-1)


def test_publish_produces_frozen_published_menu():
    stamp = datetime(2026, 3, 1, 6, 0, tzinfo=timezone.utc)

    published = _draft().publish(stamp)

    assert isinstance(published, PublishedMenu)
    assert published.status is MenuStatus.PUBLISHED
    assert published.published_at == stamp
    assert published.items == ("Poha", "Tea")
    assert not hasattr(published, "revise")
    assert not hasattr(published, "publish")
    with pytest.raises(FrozenInstanceError):
        published.items = ("Bread",)
