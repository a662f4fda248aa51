# src/teacup_ledger/schemas/reward.py
"""Reward distribution schemas."""

from pydantic import BaseModel, ConfigDict


class RewardWinnerResponse(BaseModel):
    """A post rewarded in a distribution window."""

    post_id: int
    token_id: int
    owner: str

    model_config = ConfigDict(from_attributes=True)


class DistributionResponse(BaseModel):
    """Result of a completed distribution."""

    distributed_at: int
    next_distribution_at: int
    count: int
    winners: list[RewardWinnerResponse]


class NextDistributionResponse(BaseModel):
    """When the next distribution window opens."""

    next_distribution_at: int
    interval_seconds: int


class RewardTokenResponse(BaseModel):
    """Minted reward token with its metadata URI."""

    token_id: int
    post_id: int
    owner: str
    minted_at: int
    token_uri: str
    name: str
    symbol: str
