"""
Data models for the recall engine.

Capsules arrive from the content and storage collaborators; study plans are
produced here and persisted by them. Both travel as JSON with camelCase keys,
so every model is a frozen Pydantic model with a camelCase alias generator.

Wire conventions:
- Timestamps are epoch milliseconds (int); in Python they are UTC datetimes.
- Calendar dates are ISO strings (YYYY-MM-DD).
- Sequences are JSON arrays; in Python they are tuples.
"""

from __future__ import annotations

import datetime as dt
from enum import Enum
from typing import Annotated, Any

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    Field,
    PlainSerializer,
    computed_field,
    field_validator,
)
from pydantic.alias_generators import to_camel

from recall.core.clock import ensure_utc, to_epoch_ms

Timestamp = Annotated[
    dt.datetime,
    AfterValidator(ensure_utc),
    PlainSerializer(to_epoch_ms, return_type=int, when_used="json"),
]


# =============================================================================
# Enums
# =============================================================================


class ReviewType(str, Enum):
    """Modality of a review session."""

    QUIZ = "quiz"
    FLASHCARD = "flashcard"
    MANUAL = "manual"
    ACTIVE_LEARNING = "active-learning"


class TaskStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"


class TaskKind(str, Enum):
    REVIEW = "review"
    LEARN = "learn"
    QUIZ = "quiz"


class ReviewStatus(str, Enum):
    """Status of one stage in a capsule's review schedule."""

    COMPLETED = "completed"
    DUE = "due"
    UPCOMING = "upcoming"


# =============================================================================
# Base
# =============================================================================


class RecallModel(BaseModel):
    """Immutable model serialized with camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )

    def to_dict(self) -> dict[str, Any]:
        """JSON-compatible dict using the wire field names."""
        return self.model_dump(mode="json", by_alias=True)

    def to_json(self, indent: int | None = None) -> str:
        return self.model_dump_json(by_alias=True, indent=indent)

    @classmethod
    def from_dict(cls, data: dict[str, Any]):
        return cls.model_validate(data)

    @classmethod
    def from_json(cls, data: str | bytes):
        return cls.model_validate_json(data)


# =============================================================================
# Capsule
# =============================================================================


class ReviewLog(RecallModel):
    """A single review event in a capsule's history."""

    date: Timestamp
    review_type: ReviewType = Field(default=ReviewType.MANUAL, alias="type")
    score: float = Field(ge=0, le=100)


class KeyConcept(RecallModel):
    concept: str = ""
    explanation: str = ""


class Flashcard(RecallModel):
    front: str = ""
    back: str = ""


class QuizQuestion(RecallModel):
    question: str = ""
    options: tuple[str, ...] = ()
    correct_answer: str = ""
    explanation: str = ""


class Capsule(RecallModel):
    """
    Review-relevant projection of a learnable unit.

    Invariant (maintained by record_review, not enforced on input):
    ``last_reviewed is None`` <=> ``history`` empty <=> ``review_stage == 0``.
    """

    id: str
    title: str = ""
    created_at: Timestamp | None = None
    last_reviewed: Timestamp | None = None
    review_stage: int = Field(default=0, ge=0)
    history: tuple[ReviewLog, ...] = ()

    # Content-size signals (only counts are used)
    key_concepts: tuple[KeyConcept, ...] = ()
    flashcards: tuple[Flashcard, ...] = ()
    quiz: tuple[QuizQuestion, ...] = ()

    is_shared: bool = False

    @field_validator("history", "key_concepts", "flashcards", "quiz", mode="before")
    @classmethod
    def _null_as_empty(cls, value: Any) -> Any:
        return () if value is None else value

    @property
    def is_new(self) -> bool:
        """Never reviewed."""
        return self.last_reviewed is None

    @property
    def concept_count(self) -> int:
        return len(self.key_concepts)

    @property
    def flashcard_count(self) -> int:
        return len(self.flashcards)

    @property
    def quiz_count(self) -> int:
        return len(self.quiz)


# =============================================================================
# Study Plan
# =============================================================================


class StudyTask(RecallModel):
    """One unit of scheduled work for a capsule."""

    capsule_id: str
    title: str = ""
    estimated_minutes: int = Field(ge=1)
    status: TaskStatus = TaskStatus.PENDING
    kind: TaskKind = Field(default=TaskKind.REVIEW, alias="type")

    @property
    def is_completed(self) -> bool:
        return self.status == TaskStatus.COMPLETED


class DailySession(RecallModel):
    """One calendar day of a study plan. Task order is scheduling order."""

    date: dt.date
    tasks: tuple[StudyTask, ...] = ()
    is_rest_day: bool = False

    @computed_field(alias="totalMinutes")
    @property
    def total_minutes(self) -> int:
        return sum(task.estimated_minutes for task in self.tasks)

    @property
    def is_completed(self) -> bool:
        """Every task is done (a day with no tasks is never 'completed')."""
        return bool(self.tasks) and all(task.is_completed for task in self.tasks)


class StudyPlan(RecallModel):
    """
    Day-by-day schedule ending at an exam deadline.

    Index in ``schedule`` is the day offset from ``created_at``. Plans are never
    edited in place; see ``recall.study.plan_updates``.
    """

    id: str
    name: str
    exam_date: Timestamp
    daily_minutes_available: int
    schedule: tuple[DailySession, ...] = ()
    created_at: Timestamp
    capsule_ids: tuple[str, ...] = ()

    @property
    def tasks(self) -> list[StudyTask]:
        """All tasks in schedule order."""
        return [task for session in self.schedule for task in session.tasks]


# =============================================================================
# Analytics projections
# =============================================================================


class PerformanceStats(RecallModel):
    """Global statistics over a capsule collection. Recomputed on demand."""

    global_mastery: int = 0
    retention_average: int = 0
    due_count: int = 0
    overdue_count: int = 0
    upcoming_count: int = 0


class ReviewStageInfo(RecallModel):
    """One stage of a capsule's review schedule."""

    stage: int
    interval_days: int
    review_date: Timestamp | None = None
    status: ReviewStatus


class ProgressBreakdown(RecallModel):
    """Partition of a collection into new, due and in-progress capsules."""

    total: int = 0
    new_count: int = 0
    due_count: int = 0
    in_progress_count: int = 0

    def _percent(self, count: int) -> float:
        return count / self.total * 100 if self.total > 0 else 0.0

    @property
    def new_percent(self) -> float:
        return self._percent(self.new_count)

    @property
    def due_percent(self) -> float:
        return self._percent(self.due_count)

    @property
    def in_progress_percent(self) -> float:
        return self._percent(self.in_progress_count)
