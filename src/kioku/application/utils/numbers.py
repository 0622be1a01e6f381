import math


def round_half_up(value: float) -> int:
    """
    Round to the nearest integer with halves going up.

    Python's round() uses banker's rounding (round(12.5) == 12), which would
    shift intervals and percentages by a day or a point on exact halves.
    """
    return math.floor(value + 0.5)


def accuracy_percent(correct: int, total: int) -> int:
    """Whole-number percentage of correct answers; 0 when nothing was answered."""
    if total <= 0:
        return 0
    return round_half_up(correct / total * 100)
