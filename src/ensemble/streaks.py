"""Streak (bridge) detection and break probability."""

from dataclasses import dataclass
from typing import Optional, Sequence

from shared_types import Outcome, Vote

from .history import HistoryEntry, break_vote, count_switches, follow_vote, outcomes

STREAK_WINDOW = 15
BREAK_OVERRIDE = 0.6


@dataclass(frozen=True)
class StreakInfo:
    length: int
    outcome: Optional[Outcome]
    break_probability: float
    switches: int = 0
    imbalance: float = 0.0


def _break_probability(length: int, switches: int, imbalance: float) -> float:
    if length >= 6:
        return min(0.8 + switches / 15 + imbalance * 0.3, 0.95)
    if length >= 4:
        return min(0.5 + switches / 12 + imbalance * 0.25, 0.9)
    if length >= 2 and switches >= 5:
        return 0.45
    if length == 1 and switches >= 6:
        return 0.3
    return 0.0


def detect_streak(history: Sequence[HistoryEntry]) -> StreakInfo:
    """Trailing run length plus the chance that the run breaks next round.

    Switches and imbalance are measured over the last 15 rounds.
    """
    if not history:
        return StreakInfo(length=0, outcome=None, break_probability=0.0)

    current = history[-1].outcome
    length = 1
    for entry in reversed(history[:-1]):
        if entry.outcome != current:
            break
        length += 1

    window = outcomes(history, STREAK_WINDOW)
    switches = count_switches(window)
    tai = window.count(Outcome.TAI)
    xiu = window.count(Outcome.XIU)
    imbalance = abs(tai - xiu) / len(window)

    return StreakInfo(
        length=length,
        outcome=current,
        break_probability=_break_probability(length, switches, imbalance),
        switches=switches,
        imbalance=imbalance,
    )


def follow_or_break(info: StreakInfo, threshold: int) -> Optional[Vote]:
    """Streak-regime vote shared by the predictors.

    Returns None below ``threshold`` so the caller can run its own fallback.
    """
    if info.length < threshold:
        return None
    if info.break_probability > BREAK_OVERRIDE:
        return break_vote(info.outcome)
    return follow_vote(info.outcome)
