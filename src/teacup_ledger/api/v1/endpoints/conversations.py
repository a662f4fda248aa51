# src/teacup_ledger/api/v1/endpoints/conversations.py
"""Conversation endpoints: logging, sharing and likes."""

from fastapi import APIRouter, status

from teacup_ledger.api.v1.dependencies import CurrentAccountDep, LedgerDep
from teacup_ledger.models import Conversation, Post
from teacup_ledger.schemas.conversation import (
    ConversationCreate,
    ConversationResponse,
    ConversationShare,
)
from teacup_ledger.schemas.post import LikeResponse, LikeStatus, PostResponse

router = APIRouter(prefix="/conversations", tags=["conversations"])


@router.post("/", response_model=ConversationResponse, status_code=status.HTTP_201_CREATED)
def log_conversation(
    payload: ConversationCreate,
    account: CurrentAccountDep,
    ledger: LedgerDep,
) -> Conversation:
    """Log a conversation whose content was already uploaded."""
    return ledger.log_conversation(account, payload.content_ref)


@router.get("/{conversation_id}", response_model=ConversationResponse)
def get_conversation(conversation_id: int, ledger: LedgerDep) -> Conversation:
    """Get a conversation by id."""
    return ledger.get_conversation(conversation_id)


@router.post(
    "/{conversation_id}/share",
    response_model=PostResponse,
    status_code=status.HTTP_201_CREATED,
)
def share_conversation(
    conversation_id: int,
    payload: ConversationShare,
    account: CurrentAccountDep,
    ledger: LedgerDep,
) -> Post:
    """Share one of the caller's conversations to the community."""
    return ledger.share_conversation(account, conversation_id, payload.category)


@router.post("/{conversation_id}/like", response_model=LikeResponse)
def like_conversation(
    conversation_id: int,
    account: CurrentAccountDep,
    ledger: LedgerDep,
) -> LikeResponse:
    likes = ledger.like_conversation(account, conversation_id)
    return LikeResponse(id=conversation_id, like_count=likes, liked=True)


@router.delete("/{conversation_id}/like", response_model=LikeResponse)
def unlike_conversation(
    conversation_id: int,
    account: CurrentAccountDep,
    ledger: LedgerDep,
) -> LikeResponse:
    likes = ledger.unlike_conversation(account, conversation_id)
    return LikeResponse(id=conversation_id, like_count=likes, liked=False)


@router.get("/{conversation_id}/liked/{account}", response_model=LikeStatus)
def is_conversation_liked(conversation_id: int, account: str, ledger: LedgerDep) -> LikeStatus:
    """Check whether ``account`` likes the conversation."""
    return LikeStatus(
        id=conversation_id,
        account=account,
        liked=ledger.is_conversation_liked(conversation_id, account),
    )
