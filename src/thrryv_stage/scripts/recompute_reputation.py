"""
Cron job to recompute every user's reputation.

Flag-driven recomputes only touch the author of a flagged post; likes,
replies and follows never trigger one. Run this periodically so every score
reflects current activity.
"""

import argparse
import logging

from thrryv_stage.core.settings import settings
from thrryv_stage.db.session import SessionLocal
from thrryv_stage.services.reputation import ReputationEngine, recompute_all

logger = logging.getLogger(__name__)


def main() -> None:
    parser = argparse.ArgumentParser(description="Recompute user reputation scores")
    parser.add_argument(
        "--user",
        action="append",
        default=None,
        help="Recompute only this user id (repeatable). Defaults to every user.",
    )
    parser.add_argument("--batch-size", type=int, default=500)
    args = parser.parse_args()

    logging.basicConfig(level=settings.log_level.upper())

    db = SessionLocal()
    try:
        if args.user:
            engine = ReputationEngine(db)
            for user_id in args.user:
                result = engine.recompute(user_id)
                print(f"{user_id}: {result.old_score:.2f} -> {result.new_score:.2f}")
        else:
            updated = recompute_all(db, batch_size=args.batch_size)
            print(f"Recomputed reputation for {updated} users")
    finally:
        db.close()


if __name__ == "__main__":
    main()
