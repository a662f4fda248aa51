# src/teacup_ledger/scripts/distribute.py
"""
Cron job running the periodic reward distribution.

This script should be run at least once per distribution interval. It acts as
the administrator account, skips quietly while the current window is still
open, and prints the winners when a distribution happens.
"""

from __future__ import annotations

import argparse
import logging
import sys

from teacup_ledger.core.settings import settings
from teacup_ledger.db.session import SessionLocal, create_tables
from teacup_ledger.services.errors import TooEarly
from teacup_ledger.services.ledger import DistributionResult, LedgerService

logger = logging.getLogger(__name__)


def run_distribution(ledger: LedgerService, *, strict: bool = False) -> DistributionResult | None:
    """Distribute rewards as the administrator if the window has elapsed.

    Args:
        ledger: Ledger service to act on
        strict: Re-raise ``TooEarly`` instead of returning None

    Returns:
        The distribution result, or None when it is not time yet
    """
    try:
        return ledger.distribute_rewards(ledger.admin_account)
    except TooEarly:
        if strict:
            raise
        logger.info("Distribution not due until %d", ledger.get_next_distribution_at())
        return None


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Run the periodic reward distribution")
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Exit with status 1 if the distribution window has not elapsed yet.",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(level=settings.log_level.upper())
    create_tables()
    ledger = LedgerService.from_settings(SessionLocal, settings)
    try:
        result = run_distribution(ledger, strict=args.strict)
    except TooEarly as exc:
        print(f"[distribute] {exc.message}", file=sys.stderr)
        return 1

    if result is None:
        print(f"[distribute] next distribution at {ledger.get_next_distribution_at()}")
        return 0

    print(f"[distribute] rewarded {result.count} posts at {result.distributed_at}")
    for winner in result.winners:
        print(f"  post {winner.post_id} -> token {winner.token_id} ({winner.owner})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
