from datetime import date
from types import SimpleNamespace

import pytest

from app.services.hours import (
    HourTotals,
    academic_year_for,
    aggregate_hours,
    calculate_duration,
    compare_to_targets,
    completion_percent,
    is_sustainable,
    resolve_level,
    total_progress,
)


def _activity(start="09:00", end="10:00", level=None, evaluation_positions=(), themes=()):
    return SimpleNamespace(
        start_time=start,
        end_time=end,
        level=level,
        evaluations=[
            SimpleNamespace(level=SimpleNamespace(position=p) if p is not None else None)
            for p in evaluation_positions
        ],
        sustainability_themes=list(themes),
    )


# ── Duration ─────────────────────────────────────────────────────────

def test_full_day_duration():
    assert calculate_duration("09:00", "17:00") == 8.0


def test_half_hour_duration():
    assert calculate_duration("14:00", "14:30") == 0.5


def test_end_before_start_is_negative():
    assert calculate_duration("23:00", "01:00") == -22.0


@pytest.mark.parametrize("bad", ["", "9", "09-00", "ab:cd", "09:00:00"])
def test_malformed_time_raises(bad):
    with pytest.raises(ValueError):
        calculate_duration(bad, "10:00")


# ── Level resolution ─────────────────────────────────────────────────

def test_explicit_level_wins_over_evaluations():
    assert resolve_level(_activity(level=3, evaluation_positions=[5])) == 3


def test_highest_evaluation_level_is_taken():
    assert resolve_level(_activity(evaluation_positions=[2, 4])) == 4


def test_zero_explicit_level_falls_through_to_evaluations():
    assert resolve_level(_activity(level=0, evaluation_positions=[2])) == 2


def test_evaluations_without_level_are_ignored():
    assert resolve_level(_activity(evaluation_positions=[None, 2, None])) == 2


def test_unresolved_level_is_zero():
    assert resolve_level(_activity()) == 0


def test_sustainability_needs_at_least_one_theme():
    assert is_sustainable(_activity(themes=["SDG 7"])) is True
    assert is_sustainable(_activity(themes=["SDG 7", "SDG 11"])) is True
    assert is_sustainable(_activity()) is False


# ── Aggregation ──────────────────────────────────────────────────────

def test_unresolved_level_is_credited_to_level_one():
    totals = aggregate_hours([_activity("10:00", "12:00")])
    assert totals.level1 == 2.0
    assert totals.as_dict() == {
        "level1": 2.0, "level2": 0.0, "level3": 0.0,
        "level4": 0.0, "level5": 0.0, "sustainability": 0.0,
    }


def test_sustainable_hours_count_for_level_and_sustainability():
    totals = aggregate_hours([_activity("09:00", "11:00", level=2, themes=["SDG 4"])])
    assert totals.level2 == 2.0
    assert totals.sustainability == 2.0
    assert totals.level1 == 0.0


def test_out_of_range_level_uses_level_one():
    totals = aggregate_hours([_activity("09:00", "10:00", level=7)])
    assert totals.level1 == 1.0


def test_aggregation_sums_per_level_and_counts_activities():
    totals = aggregate_hours([
        _activity("09:00", "12:00", level=3),
        _activity("13:00", "14:00", evaluation_positions=[1], themes=["Circular economy"]),
        _activity("08:00", "08:30", level=5),
        _activity("10:00", "11:30", level=3),
    ])
    assert totals.level1 == 1.0
    assert totals.level3 == 4.5
    assert totals.level5 == 0.5
    assert totals.sustainability == 1.0
    assert totals.activity_count == 4


def test_aggregation_is_deterministic():
    activities = [_activity("09:00", "10:15", level=4), _activity("11:00", "11:45", themes=["x"])]
    assert aggregate_hours(activities) == aggregate_hours(list(reversed(activities)))


def test_malformed_activity_aborts_aggregation():
    with pytest.raises(ValueError):
        aggregate_hours([_activity("09:00", "10:00", level=1), _activity("9h", "10:00")])


def test_no_activities_gives_zero_totals():
    assert aggregate_hours([]) == HourTotals()


# ── Academic year ────────────────────────────────────────────────────

@pytest.mark.parametrize(
    "day, expected",
    [
        (date(2024, 9, 1), "2024-2025"),
        (date(2024, 12, 31), "2024-2025"),
        (date(2025, 1, 1), "2024-2025"),
        (date(2025, 8, 31), "2024-2025"),
        (date(2025, 9, 1), "2025-2026"),
    ],
)
def test_academic_year_runs_september_to_august(day, expected):
    assert academic_year_for(day) == expected


def test_academic_year_custom_start_month():
    assert academic_year_for(date(2025, 8, 15), start_month=8) == "2025-2026"


# ── Target comparison ────────────────────────────────────────────────

def test_completion_percent_is_capped():
    assert completion_percent(3.0, 2.0) == 100.0
    assert completion_percent(1.0, 4.0) == 25.0


def test_zero_target_gives_zero_percent():
    assert completion_percent(5.0, 0.0) == 0.0


def test_compare_to_targets_rows():
    rows = compare_to_targets(
        {"level1": 2.0, "level2": 3.0, "sustainability": 1.0},
        {"level1": 4.0, "level2": 3.0, "level3": 2.0, "sustainability": 0.0},
    )
    by_bucket = {r["bucket"]: r for r in rows}

    assert [r["bucket"] for r in rows] == [
        "level1", "level2", "level3", "level4", "level5", "sustainability",
    ]
    assert by_bucket["level1"]["percentage"] == 50.0
    assert by_bucket["level1"]["is_complete"] is False
    assert by_bucket["level2"]["is_complete"] is True
    assert by_bucket["level3"]["current_hours"] == 0.0
    assert by_bucket["sustainability"]["is_complete"] is False


def test_compare_without_targets():
    rows = compare_to_targets({"level1": 2.0}, None)
    assert all(r["target_hours"] == 0.0 and not r["is_complete"] for r in rows)


def test_total_sums_levels_without_sustainability():
    total = total_progress(
        {"level1": 3.0, "level2": 1.0, "level5": 2.0, "sustainability": 4.0},
        {"level1": 4.0, "level2": 4.0, "sustainability": 10.0},
    )
    assert total["bucket"] == "total"
    assert total["current_hours"] == 6.0
    assert total["target_hours"] == 8.0
    assert total["percentage"] == 75.0
    assert total["is_complete"] is False


def test_total_without_targets_is_zero_percent():
    total = total_progress({"level1": 2.0}, None)
    assert total["percentage"] == 0.0
    assert total["is_complete"] is False
