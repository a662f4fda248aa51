# src/teacup_ledger/models/ledger_state.py
"""Ledger-wide bookkeeping row."""

from sqlalchemy import BigInteger, Text
from sqlalchemy.orm import Mapped, mapped_column

from teacup_ledger.db.session import Base

LEDGER_STATE_ID = 1


class LedgerState(Base):
    """Identifier sequences, distribution clock and token metadata.

    A single row (id = 1) exists per ledger.
    """

    __tablename__ = "ledger_state"

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True, default=LEDGER_STATE_ID)
    next_conversation_id: Mapped[int] = mapped_column(BigInteger, nullable=False, default=1)
    next_post_id: Mapped[int] = mapped_column(BigInteger, nullable=False, default=1)
    next_token_id: Mapped[int] = mapped_column(BigInteger, nullable=False, default=1)
    last_distribution_at: Mapped[int] = mapped_column(BigInteger, nullable=False)
    ipfs_gateway: Mapped[str] = mapped_column(Text, nullable=False)
    base_token_uri: Mapped[str] = mapped_column(Text, nullable=False)
