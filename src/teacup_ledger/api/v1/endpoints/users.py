# src/teacup_ledger/api/v1/endpoints/users.py
"""Per-account index endpoints."""

from fastapi import APIRouter

from teacup_ledger.api.v1.dependencies import LedgerDep

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/{account}/posts", response_model=list[int])
def get_user_posts(account: str, ledger: LedgerDep) -> list[int]:
    """Post ids created by ``account``, oldest first."""
    return ledger.get_user_posts(account)


@router.get("/{account}/conversations", response_model=list[int])
def get_user_conversations(account: str, ledger: LedgerDep) -> list[int]:
    """Conversation ids logged by ``account``, oldest first."""
    return ledger.get_user_conversations(account)
