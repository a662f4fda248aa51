# src/teacup_ledger/services/ledger.py
"""Ledger of conversations, community posts, likes and reward distributions."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from threading import Lock
from typing import Literal

from sqlalchemy import Select, delete, func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import InstrumentedAttribute, Session, sessionmaker

from teacup_ledger.core.settings import THREE_DAYS_SECONDS, Settings
from teacup_ledger.db.time import unix_now
from teacup_ledger.models import (
    Conversation,
    ConversationLike,
    LedgerState,
    Post,
    PostCategory,
    PostLike,
    RewardToken,
)
from teacup_ledger.models.ledger_state import LEDGER_STATE_ID
from teacup_ledger.services import events as ev
from teacup_ledger.services.content_ref import (
    build_ipfs_url,
    validate_category,
    validate_content_ref,
)
from teacup_ledger.services.errors import (
    AlreadyLiked,
    AlreadyShared,
    Forbidden,
    InvalidContent,
    NotFound,
    NotLiked,
    TooEarly,
)
from teacup_ledger.services.events import EventDispatcher, LedgerEvent

logger = logging.getLogger(__name__)

Clock = Callable[[], int]
FeedOrder = Literal["likes", "time"]


@dataclass(frozen=True)
class RewardWinner:
    """A post rewarded in one distribution window."""

    post_id: int
    token_id: int
    owner: str


@dataclass(frozen=True)
class DistributionResult:
    """Outcome of a completed distribution cycle."""

    distributed_at: int
    next_distribution_at: int
    winners: tuple[RewardWinner, ...]

    @property
    def count(self) -> int:
        return len(self.winners)


class LedgerService:
    """Single source of truth for the social ledger.

    Every mutation runs under one lock and inside one database transaction.
    Counters, id sequences and the distribution window are advanced with
    single SQL ``UPDATE`` statements, so several instances sharing a database
    (API workers, the distribution cron) stay consistent. Events are handed to
    the dispatcher only after commit.
    """

    def __init__(
        self,
        session_factory: sessionmaker[Session],
        *,
        admin_account: str,
        distribution_interval: int = THREE_DAYS_SECONDS,
        reward_top_k: int = 10,
        reward_min_likes: int = 0,
        ipfs_gateway: str = "https://ipfs.io/ipfs/",
        base_token_uri: str = "",
        name: str = "TeaCupAI NFT",
        symbol: str = "TCAI",
        clock: Clock = unix_now,
        dispatcher: EventDispatcher | None = None,
    ) -> None:
        if distribution_interval <= 0:
            raise ValueError("distribution_interval must be positive")
        if reward_top_k < 0 or reward_min_likes < 0:
            raise ValueError("reward_top_k and reward_min_likes must not be negative")
        self._session_factory = session_factory
        self._lock = Lock()
        self._clock = clock
        self.admin_account = admin_account
        self.distribution_interval = distribution_interval
        self.reward_top_k = reward_top_k
        self.reward_min_likes = reward_min_likes
        self.name = name
        self.symbol = symbol
        self.dispatcher = dispatcher or EventDispatcher()
        self._bootstrap(ipfs_gateway, base_token_uri)

    @classmethod
    def from_settings(
        cls,
        session_factory: sessionmaker[Session],
        config: Settings,
        **overrides: object,
    ) -> LedgerService:
        """Build a service configured from ``config``; ``overrides`` win."""
        options: dict[str, object] = {
            "admin_account": config.admin_account,
            "distribution_interval": config.distribution_interval_seconds,
            "reward_top_k": config.reward_top_k,
            "reward_min_likes": config.reward_min_likes,
            "ipfs_gateway": config.ipfs_gateway,
            "base_token_uri": config.base_token_uri,
            "name": config.nft_name,
            "symbol": config.nft_symbol,
        }
        options.update(overrides)
        return cls(session_factory, **options)  # type: ignore[arg-type]

    # --- Transaction helpers --------------------------------------------------------
    @contextmanager
    def _transaction(self) -> Iterator[tuple[Session, list[LedgerEvent]]]:
        """Run a block atomically, then publish the events it collected."""
        pending: list[LedgerEvent] = []
        with self._lock:
            with self._session_factory(expire_on_commit=False) as session:
                with session.begin():
                    yield session, pending
        self.dispatcher.dispatch(pending)

    @contextmanager
    def _reading(self) -> Iterator[Session]:
        with self._lock:
            with self._session_factory(expire_on_commit=False) as session:
                yield session

    def _bootstrap(self, ipfs_gateway: str, base_token_uri: str) -> None:
        try:
            with self._transaction() as (session, _):
                if session.get(LedgerState, LEDGER_STATE_ID) is not None:
                    return
                session.add(
                    LedgerState(
                        id=LEDGER_STATE_ID,
                        next_conversation_id=1,
                        next_post_id=1,
                        next_token_id=1,
                        last_distribution_at=self._clock(),
                        ipfs_gateway=ipfs_gateway,
                        base_token_uri=base_token_uri,
                    )
                )
        except IntegrityError:
            # Another instance created the row first.
            logger.debug("Ledger state already initialized")
            return
        logger.info("Initialized ledger state (admin=%s)", self.admin_account)

    @staticmethod
    def _state(session: Session, *, for_update: bool = False) -> LedgerState:
        state = session.get(LedgerState, LEDGER_STATE_ID, with_for_update=for_update)
        if state is None:  # pragma: no cover - created in __init__
            raise RuntimeError("ledger state row is missing")
        return state

    @staticmethod
    def _allocate(session: Session, sequence: InstrumentedAttribute[int]) -> int:
        """Reserve the next value of a ``LedgerState`` sequence column."""
        session.execute(
            update(LedgerState)
            .where(LedgerState.id == LEDGER_STATE_ID)
            .values({sequence: sequence + 1})
            .execution_options(synchronize_session=False)
        )
        reserved = session.scalar(select(sequence).where(LedgerState.id == LEDGER_STATE_ID))
        if reserved is None:  # pragma: no cover - created in __init__
            raise RuntimeError("ledger state row is missing")
        return reserved - 1

    def is_admin(self, caller: str) -> bool:
        return caller == self.admin_account

    def _require_admin(self, caller: str, action: str) -> None:
        if not self.is_admin(caller):
            logger.warning("Rejected %s by non-admin %s", action, caller)
            raise Forbidden("caller is not the administrator")

    # --- Conversations and posts ----------------------------------------------------
    def log_conversation(self, owner: str, content_ref: str) -> Conversation:
        """Record a conversation whose content lives at ``content_ref``."""
        validate_content_ref(content_ref)
        with self._transaction() as (session, pending):
            now = self._clock()
            conversation = Conversation(
                id=self._allocate(session, LedgerState.next_conversation_id),
                owner=owner,
                content_ref=content_ref,
                created_at=now,
                is_shared=False,
                like_count=0,
                is_reward_winner=False,
                reward_token_id=None,
            )
            session.add(conversation)
            pending.append(
                LedgerEvent(
                    ev.CONVERSATION_LOGGED,
                    now,
                    {
                        "conversation_id": conversation.id,
                        "owner": owner,
                        "content_ref": content_ref,
                    },
                )
            )
        logger.info("Logged conversation %d for %s", conversation.id, owner)
        return conversation

    def create_post(self, owner: str, content_ref: str, category: int) -> Post:
        """Publish a community post directly."""
        validate_content_ref(content_ref)
        post_category = validate_category(category)
        with self._transaction() as (session, pending):
            post = self._insert_post(session, pending, owner, content_ref, post_category)
        logger.info("Created post %d for %s", post.id, owner)
        return post

    def share_conversation(self, owner: str, conversation_id: int, category: int) -> Post:
        """Promote a conversation to a community post, exactly once."""
        with self._transaction() as (session, pending):
            conversation = session.get(Conversation, conversation_id)
            if conversation is None:
                raise NotFound("conversation not found")
            if conversation.owner != owner:
                raise Forbidden("only the owner can share a conversation")
            if conversation.is_shared:
                raise AlreadyShared("conversation already shared")
            post_category = validate_category(category)
            post = self._insert_post(
                session,
                pending,
                owner,
                conversation.content_ref,
                post_category,
                source_conversation_id=conversation.id,
            )
            conversation.is_shared = True
        logger.info("Shared conversation %d as post %d", conversation_id, post.id)
        return post

    def _insert_post(
        self,
        session: Session,
        pending: list[LedgerEvent],
        owner: str,
        content_ref: str,
        category: PostCategory,
        *,
        source_conversation_id: int | None = None,
    ) -> Post:
        now = self._clock()
        post = Post(
            id=self._allocate(session, LedgerState.next_post_id),
            owner=owner,
            content_ref=content_ref,
            category=int(category),
            created_at=now,
            like_count=0,
            source_conversation_id=source_conversation_id,
            is_reward_winner=False,
            reward_token_id=None,
        )
        session.add(post)
        pending.append(
            LedgerEvent(
                ev.POST_SHARED,
                now,
                {
                    "post_id": post.id,
                    "owner": owner,
                    "content_ref": content_ref,
                    "category": int(category),
                },
            )
        )
        return post

    def get_conversation(self, conversation_id: int) -> Conversation:
        with self._reading() as session:
            conversation = session.get(Conversation, conversation_id)
        if conversation is None:
            raise NotFound("conversation not found")
        return conversation

    def get_post(self, post_id: int) -> Post:
        with self._reading() as session:
            post = session.get(Post, post_id)
        if post is None:
            raise NotFound("post not found")
        return post

    # --- Likes ----------------------------------------------------------------------
    def like_post(self, liker: str, post_id: int) -> int:
        """Like a post; returns the new like count."""
        return self._like(Post, PostLike, post_id, liker, ev.POST_LIKED, "post")

    def unlike_post(self, liker: str, post_id: int) -> int:
        """Withdraw a like from a post; returns the new like count."""
        return self._unlike(Post, PostLike, post_id, liker, ev.POST_UNLIKED, "post")

    def like_conversation(self, liker: str, conversation_id: int) -> int:
        """Like a conversation; returns the new like count."""
        return self._like(
            Conversation,
            ConversationLike,
            conversation_id,
            liker,
            ev.CONVERSATION_LIKED,
            "conversation",
        )

    def unlike_conversation(self, liker: str, conversation_id: int) -> int:
        """Withdraw a like from a conversation; returns the new like count."""
        return self._unlike(
            Conversation,
            ConversationLike,
            conversation_id,
            liker,
            ev.CONVERSATION_UNLIKED,
            "conversation",
        )

    def _like(
        self,
        subject_cls: type[Post] | type[Conversation],
        like_cls: type[PostLike] | type[ConversationLike],
        subject_id: int,
        liker: str,
        event_name: str,
        label: str,
    ) -> int:
        with self._transaction() as (session, pending):
            if session.get(subject_cls, subject_id) is None:
                raise NotFound(f"{label} not found")
            if session.get(like_cls, (subject_id, liker)) is not None:
                raise AlreadyLiked(f"{label} already liked")
            session.add(like_cls.for_subject(subject_id, liker))
            try:
                session.flush()
            except IntegrityError as err:
                raise AlreadyLiked(f"{label} already liked") from err
            likes = self._shift_likes(session, subject_cls, subject_id, 1)
            pending.append(
                LedgerEvent(
                    event_name,
                    self._clock(),
                    {f"{label}_id": subject_id, "liker": liker, "likes": likes},
                )
            )
        logger.debug("%s %d liked by %s (%d likes)", label, subject_id, liker, likes)
        return likes

    def _unlike(
        self,
        subject_cls: type[Post] | type[Conversation],
        like_cls: type[PostLike] | type[ConversationLike],
        subject_id: int,
        liker: str,
        event_name: str,
        label: str,
    ) -> int:
        with self._transaction() as (session, pending):
            if session.get(subject_cls, subject_id) is None:
                raise NotFound(f"{label} not found")
            removed = session.execute(
                delete(like_cls)
                .where(like_cls.matching(subject_id, liker))
                .execution_options(synchronize_session=False)
            )
            if removed.rowcount == 0:
                raise NotLiked(f"{label} not liked")
            likes = self._shift_likes(session, subject_cls, subject_id, -1)
            pending.append(
                LedgerEvent(
                    event_name,
                    self._clock(),
                    {f"{label}_id": subject_id, "liker": liker, "likes": likes},
                )
            )
        logger.debug("%s %d unliked by %s (%d likes)", label, subject_id, liker, likes)
        return likes

    @staticmethod
    def _shift_likes(
        session: Session,
        subject_cls: type[Post] | type[Conversation],
        subject_id: int,
        delta: int,
    ) -> int:
        """Apply ``delta`` to the stored like count in SQL and return the result."""
        session.execute(
            update(subject_cls)
            .where(subject_cls.id == subject_id)
            .values(like_count=subject_cls.like_count + delta)
            .execution_options(synchronize_session=False)
        )
        likes = session.scalar(select(subject_cls.like_count).where(subject_cls.id == subject_id))
        return int(likes or 0)

    def is_post_liked(self, post_id: int, who: str) -> bool:
        with self._reading() as session:
            return session.get(PostLike, (post_id, who)) is not None

    def is_conversation_liked(self, conversation_id: int, who: str) -> bool:
        with self._reading() as session:
            return session.get(ConversationLike, (conversation_id, who)) is not None

    # --- Ranking and queries --------------------------------------------------------
    @staticmethod
    def _ranked(limit: int, min_likes: int = 0) -> Select[tuple[Post]]:
        return (
            select(Post)
            .where(Post.like_count >= min_likes)
            .order_by(Post.like_count.desc(), Post.id.asc())
            .limit(limit)
        )

    def get_top_posts(self, count: int) -> list[int]:
        """Return up to ``count`` post ids, most liked first, ties by lower id."""
        if count <= 0:
            return []
        with self._reading() as session:
            return [post.id for post in session.scalars(self._ranked(count))]

    def list_posts(
        self,
        *,
        category: int | None = None,
        order: FeedOrder = "likes",
        limit: int = 50,
    ) -> list[Post]:
        """Return the community feed, optionally filtered by category."""
        if limit <= 0:
            return []
        stmt = select(Post)
        if category is not None:
            stmt = stmt.where(Post.category == int(validate_category(category)))
        if order == "time":
            stmt = stmt.order_by(Post.created_at.desc(), Post.id.desc())
        else:
            stmt = stmt.order_by(Post.like_count.desc(), Post.id.asc())
        with self._reading() as session:
            return list(session.scalars(stmt.limit(limit)))

    def get_reward_winners(self) -> list[Post]:
        """Return every post that has won at least once, by id."""
        with self._reading() as session:
            stmt = select(Post).where(Post.is_reward_winner.is_(True)).order_by(Post.id)
            return list(session.scalars(stmt))

    def get_user_posts(self, owner: str) -> list[int]:
        with self._reading() as session:
            return list(session.scalars(select(Post.id).where(Post.owner == owner).order_by(Post.id)))

    def get_user_conversations(self, owner: str) -> list[int]:
        with self._reading() as session:
            return list(
                session.scalars(
                    select(Conversation.id)
                    .where(Conversation.owner == owner)
                    .order_by(Conversation.id)
                )
            )

    def _count(self, model: type[object]) -> int:
        with self._reading() as session:
            return int(session.scalar(select(func.count()).select_from(model)) or 0)

    def get_total_posts(self) -> int:
        return self._count(Post)

    def get_total_conversations(self) -> int:
        return self._count(Conversation)

    def get_total_rewarded_items(self) -> int:
        """Number of reward tokens minted so far."""
        return self._count(RewardToken)

    # --- Reward distribution --------------------------------------------------------
    def get_next_distribution_at(self) -> int:
        with self._reading() as session:
            state = self._state(session)
            return state.last_distribution_at + self.distribution_interval

    def distribute_rewards(self, caller: str) -> DistributionResult:
        """Reward the top-ranked posts and open the next distribution window.

        The window is claimed with a conditional update of
        ``last_distribution_at``, so concurrent callers sharing the database
        see exactly one success; the others get ``TooEarly``.

        Raises:
            Forbidden: If ``caller`` is not the administrator.
            TooEarly: If the current window has not elapsed yet.
        """
        self._require_admin(caller, "reward distribution")
        with self._transaction() as (session, pending):
            now = self._clock()
            claimed = session.execute(
                update(LedgerState)
                .where(
                    LedgerState.id == LEDGER_STATE_ID,
                    LedgerState.last_distribution_at + self.distribution_interval <= now,
                )
                .values(last_distribution_at=now)
                .execution_options(synchronize_session=False)
            )
            if claimed.rowcount == 0:
                last = session.scalar(
                    select(LedgerState.last_distribution_at).where(
                        LedgerState.id == LEDGER_STATE_ID
                    )
                )
                raise TooEarly(f"next distribution opens at {last + self.distribution_interval}")

            winners: list[RewardWinner] = []
            if self.reward_top_k:
                ranked = session.scalars(self._ranked(self.reward_top_k, self.reward_min_likes))
                for post in ranked.all():
                    token_id = self._allocate(session, LedgerState.next_token_id)
                    post.is_reward_winner = True
                    post.reward_token_id = token_id
                    session.add(
                        RewardToken(
                            token_id=token_id,
                            post_id=post.id,
                            owner=post.owner,
                            minted_at=now,
                        )
                    )
                    winners.append(RewardWinner(post.id, token_id, post.owner))
                    pending.append(
                        LedgerEvent(
                            ev.REWARD_MINTED,
                            now,
                            {"token_id": token_id, "post_id": post.id, "owner": post.owner},
                        )
                    )

            pending.append(
                LedgerEvent(
                    ev.REWARD_DISTRIBUTION_COMPLETED,
                    now,
                    {"timestamp": now, "count": len(winners)},
                )
            )
            result = DistributionResult(
                distributed_at=now,
                next_distribution_at=now + self.distribution_interval,
                winners=tuple(winners),
            )
        logger.info("Distributed %d rewards at %d", result.count, now)
        return result

    def get_reward_token(self, token_id: int) -> RewardToken:
        with self._reading() as session:
            token = session.get(RewardToken, token_id)
        if token is None:
            raise NotFound("reward token not found")
        return token

    def get_token_uri(self, token_id: int) -> str:
        token = self.get_reward_token(token_id)
        return f"{self.get_base_token_uri()}{token.token_id}"

    # --- Administration -------------------------------------------------------------
    def get_ipfs_gateway(self) -> str:
        with self._reading() as session:
            return self._state(session).ipfs_gateway

    def set_ipfs_gateway(self, caller: str, gateway: str) -> str:
        """Replace the gateway prefix; returns the previous one."""
        self._require_admin(caller, "gateway update")
        if not gateway:
            raise InvalidContent("gateway must not be empty")
        with self._transaction() as (session, pending):
            state = self._state(session, for_update=True)
            previous = state.ipfs_gateway
            state.ipfs_gateway = gateway
            pending.append(
                LedgerEvent(
                    ev.IPFS_GATEWAY_UPDATED,
                    self._clock(),
                    {"old_gateway": previous, "new_gateway": gateway},
                )
            )
        logger.info("IPFS gateway changed from %s to %s", previous, gateway)
        return previous

    def get_ipfs_url(self, content_ref: str) -> str:
        return build_ipfs_url(self.get_ipfs_gateway(), content_ref)

    def get_base_token_uri(self) -> str:
        with self._reading() as session:
            return self._state(session).base_token_uri

    def set_base_token_uri(self, caller: str, uri: str) -> str:
        """Replace the token metadata prefix; returns the previous one."""
        self._require_admin(caller, "base token URI update")
        with self._transaction() as (session, pending):
            state = self._state(session, for_update=True)
            previous = state.base_token_uri
            state.base_token_uri = uri
            pending.append(
                LedgerEvent(
                    ev.BASE_TOKEN_URI_UPDATED,
                    self._clock(),
                    {"old_uri": previous, "new_uri": uri},
                )
            )
        logger.info("Base token URI changed from %s to %s", previous, uri)
        return previous
