# tests/services/test_ledger_lifecycle.py
"""Conversation and post lifecycle on the ledger service."""

import pytest

from teacup_ledger.models import PostCategory
from teacup_ledger.services.errors import (
    AlreadyShared,
    Forbidden,
    InvalidCategory,
    InvalidContent,
    NotFound,
)
from tests.conftest import CID_V0, CID_V0_ALT, CID_V1, USER1, USER2


def test_log_conversation_returns_fresh_record(ledger) -> None:
    conversation = ledger.log_conversation(USER1, CID_V0)

    assert conversation.id == 1
    assert conversation.owner == USER1
    assert conversation.content_ref == CID_V0
    assert conversation.is_shared is False
    assert conversation.like_count == 0
    assert conversation.is_reward_winner is False
    assert conversation.reward_token_id is None


def test_log_conversation_accepts_cid_v1(ledger) -> None:
    assert ledger.log_conversation(USER1, CID_V1).content_ref == CID_V1


@pytest.mark.parametrize("content_ref", ["", "invalid", CID_V0 + "x", CID_V1[:-1]])
def test_log_conversation_rejects_bad_content(ledger, content_ref) -> None:
    with pytest.raises(InvalidContent):
        ledger.log_conversation(USER1, content_ref)
    assert ledger.get_total_conversations() == 0


def test_empty_content_has_dedicated_message(ledger) -> None:
    with pytest.raises(InvalidContent, match="must not be empty"):
        ledger.create_post(USER1, "", PostCategory.GENERAL)


def test_ids_are_monotonic_across_failures(ledger) -> None:
    first = ledger.log_conversation(USER1, CID_V0)
    with pytest.raises(InvalidContent):
        ledger.log_conversation(USER1, "invalid")
    second = ledger.log_conversation(USER2, CID_V0_ALT)

    post_a = ledger.create_post(USER1, CID_V0, PostCategory.TEA_CULTURE)
    with pytest.raises(InvalidCategory):
        ledger.create_post(USER1, CID_V0, 10)
    post_b = ledger.create_post(USER1, CID_V1, PostCategory.BREWING)

    assert (first.id, second.id) == (1, 2)
    # Posts use their own sequence.
    assert (post_a.id, post_b.id) == (1, 2)


def test_user_indexes_keep_append_order(ledger) -> None:
    ledger.log_conversation(USER1, CID_V0)
    ledger.log_conversation(USER2, CID_V0)
    ledger.log_conversation(USER1, CID_V0_ALT)
    ledger.create_post(USER2, CID_V1, PostCategory.HEALTH)

    assert ledger.get_user_conversations(USER1) == [1, 3]
    assert ledger.get_user_conversations(USER2) == [2]
    assert ledger.get_user_posts(USER2) == [1]
    assert ledger.get_user_posts(USER1) == []
    assert ledger.get_user_conversations("0xnobody") == []


def test_create_post(ledger) -> None:
    post = ledger.create_post(USER1, CID_V0_ALT, PostCategory.TEA_CULTURE)

    assert post.id == 1
    assert post.owner == USER1
    assert post.category == PostCategory.TEA_CULTURE
    assert post.like_count == 0
    assert post.source_conversation_id is None
    assert ledger.get_post(1).content_ref == CID_V0_ALT


@pytest.mark.parametrize("category", [-1, 5, 10, True])
def test_create_post_rejects_unknown_category(ledger, category) -> None:
    with pytest.raises(InvalidCategory):
        ledger.create_post(USER1, CID_V0, category)
    assert ledger.get_total_posts() == 0


def test_share_conversation_creates_post(ledger) -> None:
    conversation = ledger.log_conversation(USER1, CID_V0)

    post = ledger.share_conversation(USER1, conversation.id, PostCategory.BREWING)

    assert post.id == 1
    assert post.owner == USER1
    assert post.content_ref == CID_V0
    assert post.category == PostCategory.BREWING
    assert post.source_conversation_id == conversation.id
    assert ledger.get_conversation(conversation.id).is_shared is True


def test_share_conversation_only_once(ledger) -> None:
    ledger.log_conversation(USER1, CID_V0)
    ledger.share_conversation(USER1, 1, PostCategory.TEA_CULTURE)

    with pytest.raises(AlreadyShared):
        ledger.share_conversation(USER1, 1, PostCategory.BREWING)
    assert ledger.get_total_posts() == 1


def test_share_missing_conversation(ledger) -> None:
    with pytest.raises(NotFound):
        ledger.share_conversation(USER1, 999, PostCategory.TEA_CULTURE)


def test_share_by_non_owner_is_forbidden(ledger) -> None:
    ledger.log_conversation(USER1, CID_V0)

    with pytest.raises(Forbidden):
        ledger.share_conversation(USER2, 1, PostCategory.TEA_CULTURE)
    assert ledger.get_conversation(1).is_shared is False


def test_share_with_bad_category_changes_nothing(ledger) -> None:
    ledger.log_conversation(USER1, CID_V0)

    with pytest.raises(InvalidCategory):
        ledger.share_conversation(USER1, 1, 10)

    assert ledger.get_conversation(1).is_shared is False
    assert ledger.get_total_posts() == 0
    # The post sequence was not consumed.
    assert ledger.create_post(USER1, CID_V0, PostCategory.GENERAL).id == 1


def test_getters_raise_not_found(ledger) -> None:
    with pytest.raises(NotFound):
        ledger.get_conversation(1)
    with pytest.raises(NotFound):
        ledger.get_post(1)


def test_totals(ledger) -> None:
    ledger.log_conversation(USER1, CID_V0)
    ledger.create_post(USER1, CID_V0, PostCategory.TEA_CULTURE)

    assert ledger.get_total_conversations() == 1
    assert ledger.get_total_posts() == 1
    assert ledger.get_total_rewarded_items() == 0


def test_state_survives_a_new_service_instance(ledger, make_ledger) -> None:
    ledger.log_conversation(USER1, CID_V0)
    next_at = ledger.get_next_distribution_at()

    reopened = make_ledger()

    assert reopened.log_conversation(USER1, CID_V0_ALT).id == 2
    assert reopened.get_next_distribution_at() == next_at
