"""
Study-Time Estimator.

Heuristic cost of studying one capsule:

    minutes = base + content_weight x mastery_factor
    content_weight = 3 x concepts + 1 x flashcards + 2 x quiz questions
    mastery_factor = 1 + (100 - mastery) / 100     (1.0 mastered .. 2.0 unknown)

More content or weaker mastery never lowers the estimate.
"""

from __future__ import annotations

from datetime import datetime

from recall.core.mastery import calculate_mastery_score
from recall.core.models import Capsule
from recall.core.policy import SchedulingPolicy, resolve_policy


def content_weight(capsule: Capsule, policy: SchedulingPolicy | None = None) -> float:
    """Minutes of content in the capsule before the mastery adjustment."""
    policy = resolve_policy(policy)
    return (
        capsule.concept_count * policy.study_minutes_per_concept
        + capsule.flashcard_count * policy.study_minutes_per_flashcard
        + capsule.quiz_count * policy.study_minutes_per_quiz_question
    )


def mastery_factor(mastery: float) -> float:
    clamped = max(0.0, min(100.0, mastery))
    return 1 + (100 - clamped) / 100


def estimate_study_time(
    capsule: Capsule,
    now: datetime | None = None,
    policy: SchedulingPolicy | None = None,
    mastery: float | None = None,
) -> int:
    """
    Estimate minutes needed to study a capsule.

    Args:
        capsule: Capsule to estimate
        now: Evaluation time for the mastery score
        policy: Policy table override
        mastery: Precomputed mastery score (skips recomputation)

    Returns:
        Whole minutes, at least 1
    """
    policy = resolve_policy(policy)
    if mastery is None:
        mastery = calculate_mastery_score(capsule, now, policy)

    minutes = policy.study_base_minutes + content_weight(capsule, policy) * mastery_factor(mastery)
    return max(1, round(minutes))
