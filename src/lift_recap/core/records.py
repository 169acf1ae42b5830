"""
Personal records and strength progress from the lift log.

Lift records are grouped per exercise and walked in chronological order.
Exercises are processed in ascending id order so that ties between
exercises resolve the same way on every run.
"""

from typing import Iterable, Sequence

from .config import STRENGTH_PROGRESS_LIMIT
from .exercises.registry import exercise_name
from .models import CustomExercise, LiftRecord, StrengthProgress, TopPR
from .units import convert_weight, round_half_up


def group_lifts_by_exercise(
    lifts: Iterable[LiftRecord],
) -> dict[str, list[LiftRecord]]:
    """
    Group lift records by exercise id.

    Keys are sorted ascending; each list is sorted by recorded_at
    (stable, so same-instant records keep their input order).
    """
    grouped: dict[str, list[LiftRecord]] = {}
    for lift in lifts:
        grouped.setdefault(lift.exercise_id, []).append(lift)
    return {
        exercise_id: sorted(grouped[exercise_id], key=lambda r: r.recorded_at)
        for exercise_id in sorted(grouped)
    }


def detect_prs(
    lifts: Iterable[LiftRecord],
    unit: str,
    custom_exercises: Sequence[CustomExercise] = (),
) -> tuple[int, TopPR | None]:
    """
    Count running-max PRs and find the single largest improvement.

    Per exercise the running max starts at 0.  A record heavier than the
    running max is a PR only when the running max is already above 0, so
    the first record of an exercise sets a baseline and never counts.
    The running max always advances to the heavier weight.

    Args:
        lifts: Period-filtered lift records from both pools
        unit: Preferred weight unit
        custom_exercises: User catalog for display names

    Returns:
        (prs_achieved, top_pr); top_pr is None when no PR was found
    """
    prs_achieved = 0
    top_pr: TopPR | None = None
    best_improvement = 0.0

    for exercise_id, records in group_lifts_by_exercise(lifts).items():
        current_max = 0.0
        for record in records:
            weight = convert_weight(record.weight, record.unit, unit)
            if weight <= current_max:
                continue
            if current_max > 0:
                prs_achieved += 1
                improvement = weight - current_max
                if improvement > best_improvement:
                    best_improvement = improvement
                    top_pr = TopPR(
                        exercise=exercise_name(exercise_id, custom_exercises),
                        exercise_id=exercise_id,
                        improvement=round_half_up(improvement),
                        new_max=round_half_up(weight),
                        unit=unit,  # type: ignore[arg-type]
                    )
            current_max = weight

    return prs_achieved, top_pr


def strength_progress(
    lifts: Iterable[LiftRecord],
    unit: str,
    custom_exercises: Sequence[CustomExercise] = (),
    limit: int = STRENGTH_PROGRESS_LIMIT,
) -> list[StrengthProgress]:
    """
    Change from first to last recorded lift per exercise within the period.

    Exercises with fewer than two records, or whose endpoints are equal,
    are left out.  Results are ordered by absolute change, largest first,
    and truncated to ``limit``.
    """
    rows: list[tuple[float, StrengthProgress]] = []

    for exercise_id, records in group_lifts_by_exercise(lifts).items():
        if len(records) < 2:
            continue

        first, last = records[0], records[-1]
        start_max = convert_weight(first.weight, first.unit, unit)
        end_max = convert_weight(last.weight, last.unit, unit)
        improvement = end_max - start_max
        if improvement == 0:
            continue

        rows.append((
            abs(improvement),
            StrengthProgress(
                exercise=exercise_name(exercise_id, custom_exercises),
                exercise_id=exercise_id,
                start_max=round_half_up(start_max),
                end_max=round_half_up(end_max),
                improvement=round_half_up(improvement),
                unit=unit,  # type: ignore[arg-type]
            ),
        ))

    rows.sort(key=lambda row: row[0], reverse=True)
    return [progress for _, progress in rows[:limit]]
