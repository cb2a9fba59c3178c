"""
Unit tests for the study-plan packer.

Tests:
- Deadline validation and session count
- Weakest-first priority
- Daily budget packing with forced oversized tasks
- Rest days and the cramming fallback
"""

from datetime import date, timedelta

import pytest

from recall.core.clock import to_epoch_ms
from recall.core.exceptions import RecallError, ValidationError
from recall.core.mastery import calculate_mastery_score
from recall.core.models import StudyTask, TaskKind, TaskStatus
from recall.core.policy import SchedulingPolicy
from recall.study.planner import build_study_tasks, days_until, generate_study_plan, pack_tasks


def _ids(session):
    return [task.capsule_id for task in session.tasks]


class TestDeadline:
    def test_past_deadline_raises(self, new_capsule, now, policy):
        with pytest.raises(ValidationError, match="deadline must be in the future") as exc_info:
            generate_study_plan("Exam", [new_capsule], now - timedelta(days=1), 60, now=now, policy=policy)
        assert exc_info.value.field == "exam_date"

    def test_deadline_equal_to_now_raises(self, new_capsule, now, policy):
        with pytest.raises(ValidationError):
            generate_study_plan("Exam", [new_capsule], now, 60, now=now, policy=policy)

    def test_validation_error_is_value_error(self):
        assert issubclass(ValidationError, ValueError)
        assert issubclass(ValidationError, RecallError)

    @pytest.mark.parametrize(
        "delta,expected",
        [
            (timedelta(hours=1), 1),
            (timedelta(days=1), 1),
            (timedelta(days=1, seconds=1), 2),
            (timedelta(days=5), 5),
            (timedelta(days=2, hours=1), 3),
        ],
    )
    def test_session_count(self, now, policy, delta, expected):
        assert days_until(now + delta, now) == expected
        plan = generate_study_plan("Exam", [], now + delta, 60, now=now, policy=policy)
        assert len(plan.schedule) == expected

    def test_sessions_are_consecutive_utc_dates(self, now, policy):
        plan = generate_study_plan("Exam", [], now + timedelta(days=2, hours=1), 60, now=now, policy=policy)
        assert [session.date for session in plan.schedule] == [
            date(2026, 3, 10),
            date(2026, 3, 11),
            date(2026, 3, 12),
        ]


class TestScenarios:
    def test_single_oversized_task_is_forced_onto_day_one(self, make_capsule, now):
        policy = SchedulingPolicy(study_base_minutes=10)
        capsule = make_capsule("heavy", quiz=5)  # 10 + 10 x 2 = 30 minutes

        plan = generate_study_plan("Exam", [capsule], now + timedelta(days=3), 10, now=now, policy=policy)

        first = plan.schedule[0]
        assert _ids(first) == ["heavy"]
        assert first.total_minutes == 30
        assert first.total_minutes > plan.daily_minutes_available
        assert first.is_rest_day is False
        assert all(session.is_rest_day for session in plan.schedule[1:])

    def test_three_capsules_fit_on_day_one_weakest_first(self, make_capsule, now):
        policy = SchedulingPolicy(study_base_minutes=20)  # no content -> 20 minutes each
        strong = make_capsule("strong", stage=8, reviewed_days_ago=0, scores=(75,))
        medium = make_capsule("medium", stage=4, reviewed_days_ago=0, scores=(50,))
        weak = make_capsule("weak", stage=1, reviewed_days_ago=0, scores=(6.25,))
        assert [calculate_mastery_score(c, now, policy) for c in (weak, medium, strong)] == [10, 50, 90]

        plan = generate_study_plan(
            "Exam", [strong, medium, weak], now + timedelta(days=5), 60, now=now, policy=policy
        )

        assert len(plan.schedule) == 5
        assert _ids(plan.schedule[0]) == ["weak", "medium", "strong"]
        assert plan.schedule[0].total_minutes == 60
        assert all(session.is_rest_day and not session.tasks for session in plan.schedule[1:])

    def test_past_deadline_scenario(self, new_capsule, now, policy):
        with pytest.raises(ValidationError):
            generate_study_plan("Exam", [new_capsule], now - timedelta(days=1), 60, now=now, policy=policy)


class TestPacking:
    def test_zero_capsules_gives_all_rest_days(self, now, policy):
        plan = generate_study_plan("Empty", [], now + timedelta(days=3), 60, now=now, policy=policy)
        assert len(plan.schedule) == 3
        assert all(session.is_rest_day for session in plan.schedule)
        assert all(session.total_minutes == 0 for session in plan.schedule)
        assert plan.capsule_ids == ()

    def test_budget_below_every_task_forces_one_per_day(self, make_capsule, now):
        policy = SchedulingPolicy(study_base_minutes=30)
        capsules = [make_capsule(f"c{i}") for i in range(3)]

        plan = generate_study_plan("Exam", capsules, now + timedelta(days=3), 10, now=now, policy=policy)

        assert [_ids(session) for session in plan.schedule] == [["c0"], ["c1"], ["c2"]]
        assert not any(session.is_rest_day for session in plan.schedule)

    def test_cramming_distributes_leftovers_round_robin(self, make_capsule, now):
        policy = SchedulingPolicy(study_base_minutes=30)
        capsules = [make_capsule(f"c{i}") for i in range(5)]

        plan = generate_study_plan("Exam", capsules, now + timedelta(days=2), 30, now=now, policy=policy)

        assert _ids(plan.schedule[0]) == ["c0", "c2", "c4"]
        assert _ids(plan.schedule[1]) == ["c1", "c3"]
        assert plan.schedule[0].total_minutes == 90
        assert len(plan.tasks) == 5

    def test_no_task_is_dropped(self, make_capsule, now, policy):
        capsules = [make_capsule(f"c{i}", concepts=i, quiz=i % 3) for i in range(12)]
        plan = generate_study_plan("Exam", capsules, now + timedelta(days=2), 45, now=now, policy=policy)
        assert sorted(task.capsule_id for task in plan.tasks) == sorted(c.id for c in capsules)

    def test_daily_budget_respected_except_forced_days(self, make_capsule, now, policy):
        capsules = [
            make_capsule(f"c{i}", stage=i % 4, reviewed_days_ago=i if i % 4 else None,
                         scores=(50,) * (i % 4), concepts=i % 5, flashcards=i)
            for i in range(10)
        ]
        plan = generate_study_plan("Exam", capsules, now + timedelta(days=14), 60, now=now, policy=policy)

        for session in plan.schedule:
            assert session.total_minutes <= 60 or len(session.tasks) == 1

    def test_weakest_first_across_the_plan(self, make_capsule, now, policy):
        capsules = [
            make_capsule("fresh", stage=6, reviewed_days_ago=0, scores=(95, 100)),
            make_capsule("new"),
            make_capsule("stale", stage=2, reviewed_days_ago=30, scores=(70, 40)),
            make_capsule("ok", stage=3, reviewed_days_ago=1, scores=(80, 80, 80)),
        ]
        masteries = {c.id: calculate_mastery_score(c, now, policy) for c in capsules}

        plan = generate_study_plan("Exam", capsules, now + timedelta(days=7), 30, now=now, policy=policy)

        ordered = [masteries[task.capsule_id] for task in plan.tasks]
        assert ordered == sorted(ordered)
        assert plan.tasks[-1].capsule_id == "fresh"

    def test_rest_day_only_after_all_work_is_scheduled(self, make_capsule, now, policy):
        capsules = [make_capsule(f"c{i}") for i in range(3)]  # 15 minutes each
        plan = generate_study_plan("Exam", capsules, now + timedelta(days=4), 30, now=now, policy=policy)

        assert [len(session.tasks) for session in plan.schedule] == [2, 1, 0, 0]
        assert [session.is_rest_day for session in plan.schedule] == [False, False, True, True]


class TestPlanMetadata:
    def test_plan_fields(self, make_capsule, now, policy):
        capsules = [make_capsule("b"), make_capsule("a")]
        exam = now + timedelta(days=3)
        plan = generate_study_plan("Finals", capsules, exam, 90, now=now, policy=policy)

        assert plan.id == f"plan_{to_epoch_ms(now)}"
        assert plan.name == "Finals"
        assert plan.exam_date == exam
        assert plan.daily_minutes_available == 90
        assert plan.created_at == now
        assert plan.capsule_ids == ("b", "a")

    def test_tasks_are_pending_reviews(self, new_capsule, now, policy):
        plan = generate_study_plan("Exam", [new_capsule], now + timedelta(days=1), 60, now=now, policy=policy)
        task = plan.tasks[0]
        assert task.status == TaskStatus.PENDING
        assert task.kind == TaskKind.REVIEW
        assert task.title == new_capsule.title
        assert task.estimated_minutes == 47

    def test_inputs_are_not_modified(self, make_capsule, now, policy):
        capsules = [make_capsule("x", concepts=1), make_capsule("y")]
        snapshot = [c.model_copy() for c in capsules]
        generate_study_plan("Exam", capsules, now + timedelta(days=2), 30, now=now, policy=policy)
        assert capsules == snapshot


class TestHelpers:
    def test_build_study_tasks_is_stable_on_ties(self, make_capsule, now, policy):
        capsules = [make_capsule(f"c{i}") for i in range(4)]
        assert [t.capsule_id for t in build_study_tasks(capsules, now, policy)] == ["c0", "c1", "c2", "c3"]

    def test_pack_tasks_with_explicit_costs(self, now):
        tasks = [StudyTask(capsule_id=cid, estimated_minutes=20) for cid in ("w", "m", "s")]
        sessions = pack_tasks(tasks, now, 5, 60)

        assert _ids(sessions[0]) == ["w", "m", "s"]
        assert sessions[0].total_minutes == 60
        assert [s.is_rest_day for s in sessions] == [False, True, True, True, True]

    def test_pack_tasks_stops_day_at_first_overflow(self, now):
        costs = {"a": 40, "b": 30, "c": 10}
        tasks = [StudyTask(capsule_id=cid, estimated_minutes=m) for cid, m in costs.items()]
        sessions = pack_tasks(tasks, now, 2, 60)

        # "c" would fit on day one but order is kept
        assert _ids(sessions[0]) == ["a"]
        assert _ids(sessions[1]) == ["b", "c"]
