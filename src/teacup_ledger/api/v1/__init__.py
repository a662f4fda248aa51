# src/teacup_ledger/api/v1/__init__.py
"""Version 1 API endpoints."""

from .endpoints import (
    conversations_router,
    posts_router,
    rewards_router,
    system_router,
    users_router,
)

__all__ = [
    "conversations_router",
    "posts_router",
    "rewards_router",
    "system_router",
    "users_router",
]
