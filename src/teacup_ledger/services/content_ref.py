# src/teacup_ledger/services/content_ref.py
"""Shape checks for externally stored content references."""

from __future__ import annotations

from typing import Final

from teacup_ledger.models.post import PostCategory
from teacup_ledger.services.errors import InvalidCategory, InvalidContent

# CIDv0 ("Qm...") and CIDv1 ("bafy...") lengths.
CID_V0_LENGTH: Final[int] = 46
CID_V1_LENGTH: Final[int] = 59
VALID_CONTENT_REF_LENGTHS: Final[frozenset[int]] = frozenset({CID_V0_LENGTH, CID_V1_LENGTH})

_VALID_CATEGORIES: Final[frozenset[int]] = frozenset(int(c) for c in PostCategory)


def is_valid_content_ref(content_ref: str) -> bool:
    """Return True if ``content_ref`` has one of the accepted CID shapes."""
    return isinstance(content_ref, str) and len(content_ref) in VALID_CONTENT_REF_LENGTHS


def validate_content_ref(content_ref: str) -> str:
    """Return ``content_ref`` unchanged or raise ``InvalidContent``.

    The reference is opaque: only emptiness and length are checked.
    """
    if not content_ref:
        raise InvalidContent("content reference must not be empty")
    if not is_valid_content_ref(content_ref):
        raise InvalidContent("invalid content reference format")
    return content_ref


def validate_category(category: int) -> PostCategory:
    """Return the matching ``PostCategory`` or raise ``InvalidCategory``."""
    # bool is an int subclass; True must not pass as BREWING.
    if isinstance(category, bool) or not isinstance(category, int):
        raise InvalidCategory("invalid category")
    if category not in _VALID_CATEGORIES:
        raise InvalidCategory("invalid category")
    return PostCategory(category)


def build_ipfs_url(gateway: str, content_ref: str) -> str:
    """Join a gateway prefix and a content reference."""
    return f"{gateway}{content_ref}"
