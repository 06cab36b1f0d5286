"""
Hour aggregation rules.

Pure functions only: no database access and no clock reads. The controller
in app/controllers/hours_controller.py loads the rows and persists the result.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Iterable

MIN_LEVEL = 1
MAX_LEVEL = 5

# unresolved level is credited to the baseline level
FALLBACK_LEVEL = 1


# ─────────────────────────────────────────────────────────────
# Duration
# ─────────────────────────────────────────────────────────────

def _to_minutes(value: str) -> int:
    parts = (value or "").strip().split(":")
    if len(parts) != 2:
        raise ValueError(f"Invalid time value {value!r}, expected HH:MM")
    try:
        hours, minutes = int(parts[0]), int(parts[1])
    except ValueError:
        raise ValueError(f"Invalid time value {value!r}, expected HH:MM") from None
    return hours * 60 + minutes


def calculate_duration(start_time: str, end_time: str) -> float:
    """
    Hours between two "HH:MM" wall-clock values of the same day.

    No clamping and no midnight wrap: an end before the start gives a
    negative duration. Raises ValueError on malformed input.
    """
    return (_to_minutes(end_time) - _to_minutes(start_time)) / 60


# ─────────────────────────────────────────────────────────────
# Level / sustainability
# ─────────────────────────────────────────────────────────────

def resolve_level(activity) -> int:
    """
    Explicit activity level first; otherwise the highest level position
    among its evaluations. 0 when neither carries a level.
    """
    level = activity.level or 0

    if level == 0:
        for evaluation in activity.evaluations:
            if evaluation.level is not None and evaluation.level.position:
                level = max(level, evaluation.level.position)

    return level


def is_sustainable(activity) -> bool:
    return len(activity.sustainability_themes) > 0


# ─────────────────────────────────────────────────────────────
# Aggregation
# ─────────────────────────────────────────────────────────────

@dataclass
class HourTotals:
    level1: float = 0.0
    level2: float = 0.0
    level3: float = 0.0
    level4: float = 0.0
    level5: float = 0.0
    sustainability: float = 0.0
    # diagnostics only, never persisted
    activity_count: int = field(default=0, compare=False)

    def add_level_hours(self, level: int, hours: float) -> None:
        if not MIN_LEVEL <= level <= MAX_LEVEL:
            level = FALLBACK_LEVEL
        attr = f"level{level}"
        setattr(self, attr, getattr(self, attr) + hours)

    def as_dict(self) -> dict:
        return {
            "level1": self.level1,
            "level2": self.level2,
            "level3": self.level3,
            "level4": self.level4,
            "level5": self.level5,
            "sustainability": self.sustainability,
        }


def aggregate_hours(activities: Iterable) -> HourTotals:
    """
    Fold activities (of already-eligible enrollments) into level and
    sustainability totals. Sustainability is counted on top of the level
    bucket, not instead of it.
    """
    totals = HourTotals()

    for activity in activities:
        duration = calculate_duration(activity.start_time, activity.end_time)

        if is_sustainable(activity):
            totals.sustainability += duration

        totals.add_level_hours(resolve_level(activity), duration)
        totals.activity_count += 1

    return totals


# ─────────────────────────────────────────────────────────────
# Academic year
# ─────────────────────────────────────────────────────────────

def academic_year_for(day: date, start_month: int = 9) -> str:
    """
    Label of the academic year containing `day`, e.g. "2024-2025".
    A new year starts on the first day of `start_month` (September).
    """
    if day.month >= start_month:
        return f"{day.year}-{day.year + 1}"
    return f"{day.year - 1}-{day.year}"


# ─────────────────────────────────────────────────────────────
# Target comparison
# ─────────────────────────────────────────────────────────────

BUCKETS = ("level1", "level2", "level3", "level4", "level5", "sustainability")
LEVEL_BUCKETS = BUCKETS[:5]


def completion_percent(current: float, target: float) -> float:
    if target <= 0:
        return 0.0
    return min(100.0, (current / target) * 100.0)


def _progress_row(bucket: str, cur: float, tgt: float) -> dict:
    return {
        "bucket": bucket,
        "current_hours": cur,
        "target_hours": tgt,
        "percentage": round(completion_percent(cur, tgt), 2),
        "is_complete": tgt > 0 and cur >= tgt,
    }


def compare_to_targets(current: dict, targets: dict | None) -> list[dict]:
    """
    One row per bucket with current hours, target hours, percentage and
    completion flag. Without targets every target is 0 and nothing is
    complete.
    """
    rows = []
    for bucket in BUCKETS:
        cur = float(current.get(bucket, 0.0) or 0.0)
        tgt = float((targets or {}).get(bucket, 0.0) or 0.0)
        rows.append(_progress_row(bucket, cur, tgt))
    return rows


def total_progress(current: dict, targets: dict | None) -> dict:
    """
    Overall row: all level hours against all level targets. Sustainability
    is left out, its hours already sit in a level bucket.
    """
    cur = sum(float(current.get(b, 0.0) or 0.0) for b in LEVEL_BUCKETS)
    tgt = sum(float((targets or {}).get(b, 0.0) or 0.0) for b in LEVEL_BUCKETS)
    return _progress_row("total", cur, tgt)
