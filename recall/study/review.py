"""
Review recorder.

Produces the next version of a capsule after a study session: the review is
appended to history, ``last_reviewed`` moves to the review time and the stage
advances by one. The input capsule is left untouched.
"""

from __future__ import annotations

from datetime import datetime

from loguru import logger

from recall.core.clock import resolve_now
from recall.core.models import Capsule, ReviewLog, ReviewType


def record_review(
    capsule: Capsule,
    score: float = 100,
    review_type: ReviewType | str = ReviewType.MANUAL,
    now: datetime | None = None,
) -> Capsule:
    """
    Record a completed review.

    Args:
        capsule: Capsule that was reviewed
        score: Session score, clamped to 0-100
        review_type: Review modality
        now: Review time (defaults to UTC now)

    Returns:
        New Capsule with the review applied
    """
    now = resolve_now(now)
    entry = ReviewLog(
        date=now,
        review_type=ReviewType(review_type),
        score=max(0.0, min(100.0, float(score))),
    )

    updated = capsule.model_copy(
        update={
            "last_reviewed": now,
            "review_stage": capsule.review_stage + 1,
            "history": (*capsule.history, entry),
        }
    )

    logger.debug(
        f"Recorded {entry.review_type.value} review for {capsule.id}: "
        f"score={entry.score:.0f}, stage {capsule.review_stage} -> {updated.review_stage}"
    )

    return updated
