# src/teacup_ledger/api/v1/endpoints/__init__.py
"""API endpoint modules for version 1."""

from .conversations import router as conversations_router
from .posts import router as posts_router
from .rewards import router as rewards_router
from .system import router as system_router
from .users import router as users_router

__all__ = [
    "conversations_router",
    "posts_router",
    "rewards_router",
    "system_router",
    "users_router",
]
