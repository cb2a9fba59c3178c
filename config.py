"""
Configuration settings for the recall planner engine.

Uses Pydantic Settings for environment variable management with .env file support.
Every scheduling constant the engine relies on lives here so the policy can be
tuned without touching the algorithms.
"""
from __future__ import annotations

from functools import lru_cache
from typing import TYPE_CHECKING, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

if TYPE_CHECKING:
    from recall.core.policy import SchedulingPolicy


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="RECALL_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ========================================
    # Interval Model
    # ========================================
    review_intervals_days: list[int] = Field(
        default=[1, 3, 7, 14, 30, 60, 90, 120],
        description="Days until the next review for review stages 1, 2, 3, ... (last step is the cap)",
    )

    # ========================================
    # Forgetting Curve / Mastery
    # ========================================
    retention_decay_rate: float = Field(
        default=0.15,
        gt=0,
        description="k in R = e^(-k * elapsed/interval); ~86% retention on the due date",
    )
    mastery_recent_window: int = Field(
        default=3,
        ge=1,
        description="Number of most recent reviews considered for the performance signal",
    )
    mastery_recency_decay: float = Field(
        default=0.5,
        gt=0,
        le=1,
        description="Weight multiplier applied per step back in review history",
    )
    mastery_consistency_weight: float = Field(
        default=60.0,
        ge=0,
        description="Points awarded for reaching the last review stage",
    )
    mastery_performance_weight: float = Field(
        default=40.0,
        ge=0,
        description="Points awarded for perfect recent review scores",
    )

    # ========================================
    # Due / Overdue
    # ========================================
    overdue_grace_days: float = Field(
        default=3.0,
        ge=0,
        description="Days past the due date before a capsule counts as overdue",
    )

    # ========================================
    # Study-Time Estimation
    # ========================================
    study_base_minutes: int = Field(
        default=15,
        ge=0,
        description="Fixed minutes per study task regardless of content",
    )
    study_minutes_per_concept: float = Field(
        default=3.0,
        ge=0,
        description="Minutes per key concept",
    )
    study_minutes_per_flashcard: float = Field(
        default=1.0,
        ge=0,
        description="Minutes per flashcard",
    )
    study_minutes_per_quiz_question: float = Field(
        default=2.0,
        ge=0,
        description="Minutes per quiz question",
    )

    # ========================================
    # Logging
    # ========================================
    log_level: Literal["TRACE", "DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Level used by configure_logging() when no level is passed",
    )

    @field_validator("review_intervals_days")
    @classmethod
    def _check_intervals(cls, value: list[int]) -> list[int]:
        if not value:
            raise ValueError("review_intervals_days must not be empty")
        if any(days <= 0 for days in value):
            raise ValueError("review intervals must be positive")
        if any(later < earlier for earlier, later in zip(value, value[1:])):
            raise ValueError("review intervals must be non-decreasing")
        return value

    def get_scheduling_policy(self) -> SchedulingPolicy:
        """Build the immutable policy table consumed by the engine."""
        from recall.core.policy import SchedulingPolicy

        return SchedulingPolicy(
            review_intervals_days=tuple(self.review_intervals_days),
            retention_decay_rate=self.retention_decay_rate,
            mastery_recent_window=self.mastery_recent_window,
            mastery_recency_decay=self.mastery_recency_decay,
            mastery_consistency_weight=self.mastery_consistency_weight,
            mastery_performance_weight=self.mastery_performance_weight,
            overdue_grace_days=self.overdue_grace_days,
            study_base_minutes=self.study_base_minutes,
            study_minutes_per_concept=self.study_minutes_per_concept,
            study_minutes_per_flashcard=self.study_minutes_per_flashcard,
            study_minutes_per_quiz_question=self.study_minutes_per_quiz_question,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
