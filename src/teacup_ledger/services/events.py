# src/teacup_ledger/services/events.py
"""Ledger event records and post-commit delivery."""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from threading import Lock
from typing import Any

logger = logging.getLogger(__name__)

CONVERSATION_LOGGED = "ConversationLogged"
CONVERSATION_LIKED = "ConversationLiked"
CONVERSATION_UNLIKED = "ConversationUnliked"
POST_SHARED = "PostShared"
POST_LIKED = "PostLiked"
POST_UNLIKED = "PostUnliked"
REWARD_MINTED = "RewardMinted"
REWARD_DISTRIBUTION_COMPLETED = "RewardDistributionCompleted"
IPFS_GATEWAY_UPDATED = "IPFSGatewayUpdated"
BASE_TOKEN_URI_UPDATED = "BaseTokenURIUpdated"


@dataclass(frozen=True)
class LedgerEvent:
    """Notification describing one committed mutation."""

    name: str
    timestamp: int
    payload: dict[str, Any] = field(default_factory=dict)


EventSubscriber = Callable[[LedgerEvent], None]


class EventLog:
    """Thread-safe, append-only log of recent events.

    Only the newest ``maxlen`` events are retained; ``sequence`` keeps
    counting so readers can tell how many were dropped.
    """

    def __init__(self, maxlen: int = 1000) -> None:
        self._events: deque[LedgerEvent] = deque(maxlen=maxlen)
        self._lock = Lock()
        self.sequence = 0

    def __call__(self, event: LedgerEvent) -> None:
        self.append(event)

    def append(self, event: LedgerEvent) -> None:
        with self._lock:
            self._events.append(event)
            self.sequence += 1

    def recent(self, limit: int | None = None, name: str | None = None) -> list[LedgerEvent]:
        """Return retained events oldest first, optionally filtered by name."""
        with self._lock:
            events = [e for e in self._events if name is None or e.name == name]
        if limit is not None:
            events = events[-limit:] if limit > 0 else []
        return events

    def __len__(self) -> int:
        with self._lock:
            return len(self._events)


class EventDispatcher:
    """Fan committed events out to subscribers."""

    def __init__(self, subscribers: Iterable[EventSubscriber] = ()) -> None:
        self._subscribers: list[EventSubscriber] = list(subscribers)

    def subscribe(self, subscriber: EventSubscriber) -> None:
        self._subscribers.append(subscriber)

    def unsubscribe(self, subscriber: EventSubscriber) -> None:
        self._subscribers.remove(subscriber)

    def dispatch(self, events: Iterable[LedgerEvent]) -> None:
        """Deliver ``events`` in order to every subscriber.

        The mutation that produced the events is already committed, so a
        failing subscriber is logged and the remaining ones still run.
        """
        for event in events:
            logger.debug("Dispatching %s %s", event.name, event.payload)
            for subscriber in list(self._subscribers):
                try:
                    subscriber(event)
                except Exception:
                    logger.exception("Event subscriber %r failed on %s", subscriber, event.name)
