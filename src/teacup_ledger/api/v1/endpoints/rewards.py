# src/teacup_ledger/api/v1/endpoints/rewards.py
"""Reward distribution endpoints."""

from fastapi import APIRouter

from teacup_ledger.api.v1.dependencies import CurrentAccountDep, LedgerDep
from teacup_ledger.schemas.reward import (
    DistributionResponse,
    NextDistributionResponse,
    RewardTokenResponse,
    RewardWinnerResponse,
)

router = APIRouter(prefix="/rewards", tags=["rewards"])


@router.get("/next", response_model=NextDistributionResponse)
def get_next_distribution(ledger: LedgerDep) -> NextDistributionResponse:
    """Return when the next distribution window opens."""
    return NextDistributionResponse(
        next_distribution_at=ledger.get_next_distribution_at(),
        interval_seconds=ledger.distribution_interval,
    )


@router.post("/distribute", response_model=DistributionResponse)
def distribute_rewards(account: CurrentAccountDep, ledger: LedgerDep) -> DistributionResponse:
    """Reward the current top posts. Administrator only."""
    result = ledger.distribute_rewards(account)
    return DistributionResponse(
        distributed_at=result.distributed_at,
        next_distribution_at=result.next_distribution_at,
        count=result.count,
        winners=[RewardWinnerResponse.model_validate(w) for w in result.winners],
    )


@router.get("/tokens/{token_id}", response_model=RewardTokenResponse)
def get_reward_token(token_id: int, ledger: LedgerDep) -> RewardTokenResponse:
    """Return a minted reward token and its metadata URI."""
    token = ledger.get_reward_token(token_id)
    return RewardTokenResponse(
        token_id=token.token_id,
        post_id=token.post_id,
        owner=token.owner,
        minted_at=token.minted_at,
        token_uri=ledger.get_token_uri(token_id),
        name=ledger.name,
        symbol=ledger.symbol,
    )
