"""Pure trend, history and analytics helpers."""
from datetime import date
from decimal import Decimal

import pytest

from petcare.db.models.habit_entry import HabitEntry
from petcare.services.habits import (
    build_trend_points,
    clamp_history_limit,
    compute_habit_analytics,
    decode_completed_tasks,
)

END = date(2024, 10, 20)


def _entry(day: int, **fields) -> HabitEntry:
    return HabitEntry(pet_id=1, entry_date=date(2024, 10, day), **fields)


def test_empty_window_is_seven_zero_points() -> None:
    points = build_trend_points([], END)
    assert len(points) == 7
    assert points[0].date == "2024-10-14"
    assert points[-1].date == "2024-10-20"
    assert all(p.feeding_grams == 0 and p.exercise_minutes == 0 and p.weight_kg == 0 for p in points)


def test_points_pick_up_matching_days() -> None:
    points = build_trend_points(
        [
            _entry(20, feeding_grams=320, exercise_minutes=30, weight_kg=Decimal("11.20")),
            _entry(16, feeding_grams=None, exercise_minutes=15, weight_kg=None),
            _entry(5, feeding_grams=999),
        ],
        END,
    )
    by_date = {p.date: p for p in points}
    assert by_date["2024-10-20"].feeding_grams == 320
    assert by_date["2024-10-20"].weight_kg == 11.2
    assert by_date["2024-10-16"].feeding_grams == 0
    assert by_date["2024-10-16"].exercise_minutes == 15
    assert "2024-10-05" not in by_date
    assert sum(p.feeding_grams for p in points) == 320


@pytest.mark.parametrize(
    "limit, expected",
    [(None, 5), (0, 5), (-3, 5), (1, 1), (3, 3), (30, 30), (100, 30)],
)
def test_clamp_history_limit(limit, expected) -> None:
    assert clamp_history_limit(limit) == expected


@pytest.mark.parametrize(
    "raw, expected",
    [
        (None, []),
        (["feeding", "walking"], ["feeding", "walking"]),
        ('["feeding"]', ["feeding"]),
        (b'["grooming"]', ["grooming"]),
        ("not json", []),
        ({"feeding": True}, []),
        ([1, "walking"], ["1", "walking"]),
    ],
)
def test_decode_completed_tasks(raw, expected) -> None:
    assert decode_completed_tasks(raw) == expected


def test_analytics_without_entries() -> None:
    result = compute_habit_analytics(7, [], END)
    assert result.pet_id == "7"
    assert result.streak_days == 0
    assert result.consistency_score == 0
    assert result.companionship_score == 0
    assert result.insights == ["No check-ins in the last 7 days. Log today's care to start tracking."]


def test_analytics_partial_week() -> None:
    entries = [
        _entry(18, exercise_minutes=30, completed_tasks=["feeding"]),
        _entry(19, exercise_minutes=30, completed_tasks=["walking"]),
        _entry(20, exercise_minutes=30, completed_tasks=["feeding", "walking"]),
    ]
    result = compute_habit_analytics(1, entries, END)
    assert result.streak_days == 3
    assert result.consistency_score == 43
    assert result.companionship_score == 43
    assert any("Fewer than half" in line for line in result.insights)
    assert any("short walk" in line for line in result.insights)


def test_streak_counts_from_yesterday_when_today_is_missing() -> None:
    entries = [_entry(17), _entry(18), _entry(19)]
    assert compute_habit_analytics(1, entries, END).streak_days == 3

    gapped = [_entry(17), _entry(19)]
    assert compute_habit_analytics(1, gapped, END).streak_days == 1


def test_entries_without_tasks_do_not_count_towards_consistency() -> None:
    entries = [_entry(day, completed_tasks=[]) for day in range(14, 21)]
    result = compute_habit_analytics(1, entries, END)
    assert result.streak_days == 7
    assert result.consistency_score == 0


def test_weight_change_insight() -> None:
    entries = [
        _entry(14, weight_kg=Decimal("11.00"), completed_tasks=["feeding"]),
        _entry(20, weight_kg=Decimal("11.50"), completed_tasks=["feeding"]),
    ]
    result = compute_habit_analytics(1, entries, END)
    assert "Weight is up 0.50 kg over the last week." in result.insights


def test_companionship_is_capped() -> None:
    entries = [_entry(day, exercise_minutes=120) for day in range(14, 21)]
    assert compute_habit_analytics(1, entries, END).companionship_score == 100
