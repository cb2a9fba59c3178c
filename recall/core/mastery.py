"""
Core Mastery Module.

Scores how well a learner currently retains a capsule.

Design:
- MasteryLevel: Enum for categorizing 0-100 mastery scores
- Forgetting curve: R = e^(-k * t / I), where t is time since the last review
  and I is the interval of the capsule's current stage
- Mastery: (consistency + performance) x forgetting-curve decay, where
  consistency rewards review stage progress and performance is a
  recency-weighted average of review scores
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from datetime import datetime
from enum import Enum

from recall.core.clock import days_between, resolve_now
from recall.core.intervals import review_interval_days
from recall.core.models import Capsule
from recall.core.policy import SchedulingPolicy, resolve_policy


class MasteryLevel(str, Enum):
    """
    Mastery level categorization.

    Aligned with learning science research on skill acquisition stages.
    """

    NOT_STARTED = "not_started"  # 0
    NOVICE = "novice"  # 1-39
    DEVELOPING = "developing"  # 40-69
    PROFICIENT = "proficient"  # 70-89
    MASTERED = "mastered"  # 90-100

    @classmethod
    def from_score(cls, score: float) -> MasteryLevel:
        """
        Convert a 0-100 mastery score to a level.

        Args:
            score: Mastery score between 0 and 100

        Returns:
            Corresponding MasteryLevel
        """
        if score <= 0:
            return cls.NOT_STARTED
        elif score < 40:
            return cls.NOVICE
        elif score < 70:
            return cls.DEVELOPING
        elif score < 90:
            return cls.PROFICIENT
        else:
            return cls.MASTERED

    @property
    def display_name(self) -> str:
        """Human-readable name."""
        return self.value.replace("_", " ").title()


# ============================================================================
# Forgetting Curve
# ============================================================================


def calculate_days_since(last_review: datetime | None, now: datetime | None = None) -> float:
    """
    Calculate days elapsed since a review.

    Args:
        last_review: Timestamp of last review (can be naive or aware)
        now: Current time (defaults to UTC now)

    Returns:
        Days elapsed as float, never negative (0.0 when never reviewed)
    """
    if last_review is None:
        return 0.0
    return max(0.0, days_between(last_review, resolve_now(now)))


def decay_fraction(days_elapsed: float, interval_days: float, decay_rate: float) -> float:
    """
    Forgetting-curve term e^(-k * t / I) in [0, 1].

    Returns 0.0 for a non-positive interval (no stability information).
    """
    if interval_days <= 0:
        return 0.0
    return math.exp(-decay_rate * max(0.0, days_elapsed) / interval_days)


def calculate_retention_probability(
    capsule: Capsule,
    now: datetime | None = None,
    policy: SchedulingPolicy | None = None,
) -> int:
    """
    Estimated probability (0-100) that the capsule is still remembered.

    100 right after a review, ~86 on the due date with the default rate.
    A capsule that was never reviewed has unknown retention and scores 0.
    """
    if capsule.last_reviewed is None:
        return 0

    policy = resolve_policy(policy)
    interval = review_interval_days(capsule.review_stage, policy)
    elapsed = calculate_days_since(capsule.last_reviewed, now)
    probability = 100 * decay_fraction(elapsed, interval, policy.retention_decay_rate)
    return max(0, min(100, round(probability)))


# ============================================================================
# Mastery
# ============================================================================


def recency_weighted_average(
    scores: Sequence[float],
    window: int = 3,
    decay: float = 0.5,
) -> float:
    """
    Weighted mean of the last ``window`` scores, most recent weighted highest.

    The k-th most recent score gets weight decay**k (1, 0.5, 0.25, ...).

    Args:
        scores: Scores in chronological order
        window: Number of most recent scores considered
        decay: Weight multiplier per step back in time

    Returns:
        Weighted mean, 0.0 for no scores
    """
    recent = list(scores[-window:]) if window > 0 else []
    if not recent:
        return 0.0

    total_weight = 0.0
    weighted_sum = 0.0
    for age, score in enumerate(reversed(recent)):
        weight = decay**age
        weighted_sum += score * weight
        total_weight += weight
    return weighted_sum / total_weight


def calculate_mastery_score(
    capsule: Capsule,
    now: datetime | None = None,
    policy: SchedulingPolicy | None = None,
) -> int:
    """
    Calculate the mastery score (0-100) for a capsule.

    Formula:
        consistency = min(stage, max_stage) / max_stage x 60
        performance = recency-weighted recent score / 100 x 40
        mastery     = (consistency + performance) x e^(-k * t / I)

    The decay reference is ``last_reviewed`` (falling back to the latest
    history entry) and I is the interval of the current stage, at least one
    stage's worth so a stage-0 record with history still decays.

    Args:
        capsule: Capsule to score
        now: Evaluation time (defaults to UTC now)
        policy: Policy table override

    Returns:
        Integer score clamped to [0, 100]; 0 for an empty history
    """
    if not capsule.history:
        return 0

    policy = resolve_policy(policy)

    stage_ratio = min(capsule.review_stage, policy.max_stage) / policy.max_stage
    consistency = stage_ratio * policy.mastery_consistency_weight

    average = recency_weighted_average(
        [log.score for log in capsule.history],
        window=policy.mastery_recent_window,
        decay=policy.mastery_recency_decay,
    )
    performance = average / 100 * policy.mastery_performance_weight

    reference = capsule.last_reviewed or capsule.history[-1].date
    interval = review_interval_days(max(capsule.review_stage, 1), policy)
    elapsed = calculate_days_since(reference, now)
    decay = decay_fraction(elapsed, interval, policy.retention_decay_rate)

    return max(0, min(100, round((consistency + performance) * decay)))


def get_mastery_level(
    capsule: Capsule,
    now: datetime | None = None,
    policy: SchedulingPolicy | None = None,
) -> MasteryLevel:
    return MasteryLevel.from_score(calculate_mastery_score(capsule, now, policy))
