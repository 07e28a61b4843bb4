import math

CHARS_PER_WORD = 5.0
MIN_MINUTES = 1.0 / 60.0  # one second


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positives, the way a browser's Math.round does."""
    return int(math.floor(value + 0.5))


def elapsed_minutes(start: float, now: float) -> float:
    return max(0.0, now - start) / 60.0


def words_per_minute(chars: int, minutes: float) -> float:
    """
    WPM = (chars / 5) / minutes
    Minutes are clamped to one second so a zero elapsed time never divides by zero.
    """
    return (max(0, chars) / CHARS_PER_WORD) / max(MIN_MINUTES, minutes)


def prefix_accuracy(expected: str, typed: str) -> float:
    """
    Percentage of expected characters matched position by position.
    Only the overlapping prefix is compared, but the divisor is the full expected
    length, so an unfinished attempt stays below 100.
    """
    if not expected:
        return 100.0
    overlap = min(len(expected), len(typed))
    matches = sum(1 for i in range(overlap) if expected[i] == typed[i])
    return 100.0 * matches / len(expected)


def keystroke_accuracy(correct: int, total: int) -> float:
    if total <= 0:
        return 100.0
    return 100.0 * correct / total


def score(correct: int, accuracy: float) -> int:
    return round_half_up(correct * accuracy / 100.0)
