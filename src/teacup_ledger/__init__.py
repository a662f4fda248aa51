"""TeaCup ledger: conversations, community posts, likes and reward cycles."""

__version__ = "0.1.0"
