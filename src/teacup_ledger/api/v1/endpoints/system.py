"""System, transparency and administration endpoints for the TeaCup API."""

from __future__ import annotations

from fastapi import APIRouter, Query

from teacup_ledger.api.v1.dependencies import (
    CurrentAccountDep,
    EventLogDep,
    LedgerDep,
    SettingsDep,
)
from teacup_ledger.models import PostCategory
from teacup_ledger.schemas.system import EventResponse, LedgerStats, MetadataUpdate, MetadataValue

router = APIRouter(prefix="/system", tags=["system", "transparency"])


@router.get("/stats", response_model=LedgerStats)
def get_stats(ledger: LedgerDep) -> LedgerStats:
    """Return current ledger cardinalities."""
    return LedgerStats(
        total_conversations=ledger.get_total_conversations(),
        total_posts=ledger.get_total_posts(),
        total_rewarded_items=ledger.get_total_rewarded_items(),
    )


@router.get("/config")
def get_public_config(config: SettingsDep, ledger: LedgerDep) -> dict[str, object]:
    """Return a sanitized snapshot of public runtime configuration.

    Excludes secrets and connection strings; suitable for transparency UIs.
    """
    return {
        "app": {
            "name": config.app_name,
            "version": config.app_version,
            "debug": config.debug,
        },
        "token": {
            "name": ledger.name,
            "symbol": ledger.symbol,
        },
        "rewards": {
            "interval_seconds": ledger.distribution_interval,
            "top_k": ledger.reward_top_k,
            "min_likes": ledger.reward_min_likes,
        },
        "categories": {category.name.lower(): int(category) for category in PostCategory},
        "admin_account": ledger.admin_account,
    }


@router.get("/events", response_model=list[EventResponse])
def get_recent_events(
    event_log: EventLogDep,
    limit: int = Query(50, ge=1, le=500),
    name: str | None = Query(None, description="Only events with this name"),
) -> list[EventResponse]:
    """Return recently committed ledger events, oldest first."""
    return [
        EventResponse(name=event.name, timestamp=event.timestamp, payload=event.payload)
        for event in event_log.recent(limit, name=name)
    ]


@router.get("/ipfs-gateway", response_model=MetadataValue)
def get_ipfs_gateway(ledger: LedgerDep) -> MetadataValue:
    return MetadataValue(value=ledger.get_ipfs_gateway())


@router.put("/ipfs-gateway", response_model=MetadataValue)
def set_ipfs_gateway(
    payload: MetadataUpdate,
    account: CurrentAccountDep,
    ledger: LedgerDep,
) -> MetadataValue:
    """Replace the IPFS gateway prefix. Administrator only."""
    ledger.set_ipfs_gateway(account, payload.value)
    return MetadataValue(value=ledger.get_ipfs_gateway())


@router.get("/base-token-uri", response_model=MetadataValue)
def get_base_token_uri(ledger: LedgerDep) -> MetadataValue:
    return MetadataValue(value=ledger.get_base_token_uri())


@router.put("/base-token-uri", response_model=MetadataValue)
def set_base_token_uri(
    payload: MetadataUpdate,
    account: CurrentAccountDep,
    ledger: LedgerDep,
) -> MetadataValue:
    """Replace the token metadata prefix. Administrator only."""
    ledger.set_base_token_uri(account, payload.value)
    return MetadataValue(value=ledger.get_base_token_uri())


@router.get("/ipfs-url/{content_ref}", response_model=MetadataValue)
def get_ipfs_url(content_ref: str, ledger: LedgerDep) -> MetadataValue:
    """Resolve a content reference against the current gateway."""
    return MetadataValue(value=ledger.get_ipfs_url(content_ref))
