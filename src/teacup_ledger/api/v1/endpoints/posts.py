# src/teacup_ledger/api/v1/endpoints/posts.py
"""Community post endpoints for the TeaCup API."""

from typing import Literal

from fastapi import APIRouter, Query, status

from teacup_ledger.api.v1.dependencies import CurrentAccountDep, LedgerDep
from teacup_ledger.models import Post
from teacup_ledger.schemas.post import LikeResponse, LikeStatus, PostCreate, PostResponse

router = APIRouter(prefix="/posts", tags=["posts"])


@router.post("/", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
def create_post(
    payload: PostCreate,
    account: CurrentAccountDep,
    ledger: LedgerDep,
) -> Post:
    """Publish a post referencing already uploaded content."""
    return ledger.create_post(account, payload.content_ref, payload.category)


@router.get("/", response_model=list[PostResponse])
def list_posts(
    ledger: LedgerDep,
    category: int | None = Query(None, description="Filter by category"),
    order: Literal["likes", "time"] = Query("likes", description="Sort by likes or recency"),
    limit: int = Query(50, ge=1, le=100, description="Maximum number of posts to return"),
) -> list[Post]:
    """List the community feed."""
    return ledger.list_posts(category=category, order=order, limit=limit)


@router.get("/top", response_model=list[int])
def get_top_posts(
    ledger: LedgerDep,
    count: int = Query(10, ge=0, le=100, description="Number of post ids to return"),
) -> list[int]:
    """Return post ids ranked by likes, ties broken by lower id."""
    return ledger.get_top_posts(count)


@router.get("/winners", response_model=list[PostResponse])
def get_reward_winners(ledger: LedgerDep) -> list[Post]:
    """Return posts that have won a reward."""
    return ledger.get_reward_winners()


@router.get("/{post_id}", response_model=PostResponse)
def get_post(post_id: int, ledger: LedgerDep) -> Post:
    """Get a post by id."""
    return ledger.get_post(post_id)


@router.post("/{post_id}/like", response_model=LikeResponse)
def like_post(post_id: int, account: CurrentAccountDep, ledger: LedgerDep) -> LikeResponse:
    likes = ledger.like_post(account, post_id)
    return LikeResponse(id=post_id, like_count=likes, liked=True)


@router.delete("/{post_id}/like", response_model=LikeResponse)
def unlike_post(post_id: int, account: CurrentAccountDep, ledger: LedgerDep) -> LikeResponse:
    likes = ledger.unlike_post(account, post_id)
    return LikeResponse(id=post_id, like_count=likes, liked=False)


@router.get("/{post_id}/liked/{account}", response_model=LikeStatus)
def is_post_liked(post_id: int, account: str, ledger: LedgerDep) -> LikeStatus:
    """Check whether ``account`` likes the post."""
    return LikeStatus(id=post_id, account=account, liked=ledger.is_post_liked(post_id, account))
