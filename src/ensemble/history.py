"""Round history entries and window helpers."""

from collections import Counter
from dataclasses import dataclass
from typing import Optional, Sequence

from shared_types import Outcome, Vote

TAI_RANGE = range(11, 18)
XIU_RANGE = range(4, 11)


def classify(score: int) -> Outcome:
    """Map a three-dice total to its outcome. Totals outside 4..17 are unclassified."""
    if score in XIU_RANGE:
        return Outcome.XIU
    if score in TAI_RANGE:
        return Outcome.TAI
    return Outcome.UNKNOWN


@dataclass(frozen=True)
class HistoryEntry:
    """One finished round."""

    session: str
    score: int
    dice: Optional[tuple[int, int, int]] = None

    @property
    def outcome(self) -> Outcome:
        return classify(self.score)


def outcomes(history: Sequence[HistoryEntry], window: int | None = None) -> list[Outcome]:
    """Outcomes of the last ``window`` entries (all entries if None), oldest first."""
    entries = history if window is None else history[-window:]
    return [e.outcome for e in entries]


def scores(history: Sequence[HistoryEntry], window: int | None = None) -> list[int]:
    entries = history if window is None else history[-window:]
    return [e.score for e in entries]


def count_switches(seq: Sequence[Outcome]) -> int:
    """Number of adjacent positions where the outcome changes."""
    return sum(1 for prev, cur in zip(seq, seq[1:]) if cur != prev)


def most_common_pattern(seq: Sequence[Outcome], length: int) -> Optional[tuple[tuple[Outcome, ...], int]]:
    """Most frequent contiguous sub-sequence of ``length``.

    Ties go to the pattern seen first. Returns None when ``seq`` is shorter
    than ``length``.
    """
    if len(seq) < length:
        return None
    counts = Counter(tuple(seq[i:i + length]) for i in range(len(seq) - length + 1))
    return counts.most_common(1)[0]


def follow_vote(outcome: Optional[Outcome]) -> Vote:
    """Vote for the streak to continue. Anything but Tài counts as Xỉu."""
    return Vote.TAI if outcome == Outcome.TAI else Vote.XIU


def break_vote(outcome: Optional[Outcome]) -> Vote:
    """Vote for the streak to end."""
    return Vote.XIU if outcome == Outcome.TAI else Vote.TAI


def contrarian_vote(last: Outcome) -> Vote:
    """Vote against the most recent outcome. Anything but Xỉu counts as Tài."""
    return Vote.TAI if last == Outcome.XIU else Vote.XIU
