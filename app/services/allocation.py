"""
Time and volume allocation for generated workouts.

Converts a total duration, stretching time and cardio split into minute
budgets and exercise counts. All arithmetic is integer (floor).
"""
from dataclasses import dataclass

# 30s hold + 5s transition
SECONDS_PER_STRETCH = 35

# (upper bound in minutes, main exercise count); anything longer gets 14
MAIN_EXERCISE_BREAKPOINTS = [(20, 5), (45, 8), (75, 10)]
MAX_MAIN_EXERCISES = 14

# (upper bound in minutes, unique stretch count); anything longer gets 12
STRETCH_BREAKPOINTS = [(5, 5), (10, 6), (15, 8), (20, 10)]
MAX_UNIQUE_STRETCHES = 12


@dataclass(frozen=True)
class TimeBudget:
    """Minute budgets and exercise counts for the main workout."""
    mainMinutes: int
    cardioMinutes: int
    weightsMinutes: int
    totalExercises: int
    cardioExercises: int
    weightsExercises: int


def main_exercise_count(duration_minutes: int) -> int:
    """Total number of main-section exercises for a session length."""
    for upper, count in MAIN_EXERCISE_BREAKPOINTS:
        if duration_minutes <= upper:
            return count
    return MAX_MAIN_EXERCISES


def stretch_cap(minutes: int) -> int:
    """Maximum number of unique stretches for a stretching block."""
    for upper, count in STRETCH_BREAKPOINTS:
        if minutes <= upper:
            return count
    return MAX_UNIQUE_STRETCHES


def stretch_rounds(minutes: int, unique_count: int) -> int:
    """
    Rounds per stretch needed to fill the block.

    Args:
        minutes: Length of the stretching block
        unique_count: Number of distinct stretches selected

    Returns:
        Rounds per stretch, at least 1
    """
    if unique_count <= 0:
        return 1
    total_slots = (max(0, minutes) * 60) // SECONDS_PER_STRETCH
    return max(1, total_slots // unique_count)


def allocate(duration_minutes: int, stretching_minutes: int, cardio_split: int) -> TimeBudget:
    """
    Split a session into cardio and weights budgets.

    Main time is duration minus stretching, clamped at zero. A session with
    no main time gets no main exercises.
    """
    main_minutes = max(0, duration_minutes - stretching_minutes)
    cardio_minutes = (main_minutes * cardio_split) // 100
    weights_minutes = main_minutes - cardio_minutes

    total = main_exercise_count(duration_minutes) if main_minutes > 0 else 0
    cardio_count = (total * cardio_split) // 100
    weights_count = total - cardio_count

    return TimeBudget(
        mainMinutes=main_minutes,
        cardioMinutes=cardio_minutes,
        weightsMinutes=weights_minutes,
        totalExercises=total,
        cardioExercises=cardio_count,
        weightsExercises=weights_count,
    )
