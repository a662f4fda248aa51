"""initial ledger schema

Revision ID: 3f1c2a9d7b10
Revises:
Create Date: 2026-10-19 09:12:41.204117

"""
from __future__ import annotations

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "3f1c2a9d7b10"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create conversation, post, like, reward and state tables."""
    op.create_table(
        "ledger_state",
        sa.Column("id", sa.BigInteger(), nullable=False),
        sa.Column("next_conversation_id", sa.BigInteger(), nullable=False),
        sa.Column("next_post_id", sa.BigInteger(), nullable=False),
        sa.Column("next_token_id", sa.BigInteger(), nullable=False),
        sa.Column("last_distribution_at", sa.BigInteger(), nullable=False),
        sa.Column("ipfs_gateway", sa.Text(), nullable=False),
        sa.Column("base_token_uri", sa.Text(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_table(
        "conversation",
        sa.Column("id", sa.BigInteger(), autoincrement=False, nullable=False),
        sa.Column("owner", sa.Text(), nullable=False),
        sa.Column("content_ref", sa.Text(), nullable=False),
        sa.Column("created_at", sa.BigInteger(), nullable=False),
        sa.Column("is_shared", sa.Boolean(), nullable=False),
        sa.Column("like_count", sa.Integer(), nullable=False),
        sa.Column("is_reward_winner", sa.Boolean(), nullable=False),
        sa.Column("reward_token_id", sa.BigInteger(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_conversation_owner", "conversation", ["owner"])
    op.create_table(
        "post",
        sa.Column("id", sa.BigInteger(), autoincrement=False, nullable=False),
        sa.Column("owner", sa.Text(), nullable=False),
        sa.Column("content_ref", sa.Text(), nullable=False),
        sa.Column("category", sa.SmallInteger(), nullable=False),
        sa.Column("created_at", sa.BigInteger(), nullable=False),
        sa.Column("like_count", sa.Integer(), nullable=False),
        sa.Column("source_conversation_id", sa.BigInteger(), nullable=True),
        sa.Column("is_reward_winner", sa.Boolean(), nullable=False),
        sa.Column("reward_token_id", sa.BigInteger(), nullable=True),
        sa.ForeignKeyConstraint(["source_conversation_id"], ["conversation.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_post_owner", "post", ["owner"])
    op.create_index("ix_post_ranking", "post", ["like_count", "id"])
    op.create_table(
        "post_like",
        sa.Column("post_id", sa.BigInteger(), nullable=False),
        sa.Column("liker", sa.Text(), nullable=False),
        sa.ForeignKeyConstraint(["post_id"], ["post.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("post_id", "liker"),
    )
    op.create_table(
        "conversation_like",
        sa.Column("conversation_id", sa.BigInteger(), nullable=False),
        sa.Column("liker", sa.Text(), nullable=False),
        sa.ForeignKeyConstraint(["conversation_id"], ["conversation.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("conversation_id", "liker"),
    )
    op.create_table(
        "reward_token",
        sa.Column("token_id", sa.BigInteger(), autoincrement=False, nullable=False),
        sa.Column("post_id", sa.BigInteger(), nullable=False),
        sa.Column("owner", sa.Text(), nullable=False),
        sa.Column("minted_at", sa.BigInteger(), nullable=False),
        sa.ForeignKeyConstraint(["post_id"], ["post.id"]),
        sa.PrimaryKeyConstraint("token_id"),
    )
    op.create_index("ix_reward_token_post_id", "reward_token", ["post_id"])


def downgrade() -> None:
    """Drop every ledger table."""
    op.drop_index("ix_reward_token_post_id", table_name="reward_token")
    op.drop_table("reward_token")
    op.drop_table("conversation_like")
    op.drop_table("post_like")
    op.drop_index("ix_post_ranking", table_name="post")
    op.drop_index("ix_post_owner", table_name="post")
    op.drop_table("post")
    op.drop_index("ix_conversation_owner", table_name="conversation")
    op.drop_table("conversation")
    op.drop_table("ledger_state")
