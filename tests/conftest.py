"""
Pytest Configuration and Fixtures.

This file configures pytest and provides shared fixtures for all tests.
"""
import sys
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from recall.core.models import Capsule, Flashcard, KeyConcept, QuizQuestion, ReviewLog, ReviewType  # noqa: E402
from recall.core.policy import SchedulingPolicy  # noqa: E402

NOW = datetime(2026, 3, 10, 9, 0, tzinfo=UTC)


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests across modules")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)


def build_capsule(
    capsule_id: str = "cap-1",
    *,
    stage: int = 0,
    reviewed_days_ago: float | None = None,
    scores: tuple[float, ...] = (),
    concepts: int = 0,
    flashcards: int = 0,
    quiz: int = 0,
    created_days_ago: float | None = None,
    is_shared: bool = False,
    title: str = "",
    now: datetime = NOW,
) -> Capsule:
    """
    Build a capsule relative to ``now``.

    History entries are spaced one day apart, the last one on the
    ``last_reviewed`` date.
    """
    last_reviewed = now - timedelta(days=reviewed_days_ago) if reviewed_days_ago is not None else None
    anchor = last_reviewed or now
    history = tuple(
        ReviewLog(
            date=anchor - timedelta(days=len(scores) - 1 - index),
            review_type=ReviewType.QUIZ,
            score=score,
        )
        for index, score in enumerate(scores)
    )
    return Capsule(
        id=capsule_id,
        title=title or f"Capsule {capsule_id}",
        created_at=now - timedelta(days=created_days_ago) if created_days_ago is not None else None,
        last_reviewed=last_reviewed,
        review_stage=stage,
        history=history,
        key_concepts=tuple(KeyConcept(concept=f"c{i}") for i in range(concepts)),
        flashcards=tuple(Flashcard(front=f"f{i}", back="b") for i in range(flashcards)),
        quiz=tuple(QuizQuestion(question=f"q{i}", options=("a", "b"), correct_answer="a") for i in range(quiz)),
        is_shared=is_shared,
    )


@pytest.fixture(scope="session")
def project_root():
    """Return the project root directory."""
    return PROJECT_ROOT


@pytest.fixture
def now():
    """Fixed evaluation time."""
    return NOW


@pytest.fixture
def policy():
    """Default scheduling policy."""
    return SchedulingPolicy()


@pytest.fixture
def make_capsule():
    """Capsule factory relative to the fixed ``now``."""
    return build_capsule


@pytest.fixture
def new_capsule():
    """A capsule that has never been studied."""
    return build_capsule("new-1", concepts=2, flashcards=4, quiz=3)


@pytest.fixture
def reviewed_capsule():
    """A stage-3 capsule reviewed two days ago."""
    return build_capsule("rev-1", stage=3, reviewed_days_ago=2, scores=(60, 80, 100), concepts=1)
