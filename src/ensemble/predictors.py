"""Heuristic vote producers.

Every predictor reads the ordered history (oldest first) plus the current
streak and returns a ``Vote``. Trend, short, mean and switch first apply
the shared follow-or-break rule once the streak reaches their threshold,
then fall back to their own window heuristic.
"""

from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from shared_types import Outcome, PredictorName, Vote

from .history import (
    HistoryEntry,
    break_vote,
    contrarian_vote,
    count_switches,
    follow_vote,
    most_common_pattern,
    outcomes,
    scores,
)
from .streaks import StreakInfo, detect_streak, follow_or_break

MIN_BRIDGE_HISTORY = 5


def _pattern_vote(window: list[Outcome], length: int, min_count: int) -> Optional[Vote]:
    found = most_common_pattern(window, length)
    if found is None or found[1] < min_count:
        return None
    pattern, _ = found
    return Vote.TAI if pattern[-1] != window[-1] else Vote.XIU


def trend(history: Sequence[HistoryEntry], info: StreakInfo | None = None) -> Vote:
    """Recency-weighted trend with a length-4 pattern check."""
    info = info or detect_streak(history)
    vote = follow_or_break(info, 3)
    if vote is not None:
        return vote

    window = outcomes(history, 15)
    if not window:
        return Vote.NONE

    weights = [1.3**i for i in range(len(window))]
    tai_weight = sum(w for w, o in zip(weights, window) if o == Outcome.TAI)
    xiu_weight = sum(w for w, o in zip(weights, window) if o == Outcome.XIU)
    total = tai_weight + xiu_weight

    vote = _pattern_vote(window[-10:], 4, 3)
    if vote is not None:
        return vote
    if total > 0 and abs(tai_weight - xiu_weight) / total >= 0.25:
        return Vote.TAI if tai_weight > xiu_weight else Vote.XIU
    return contrarian_vote(window[-1])


def short_pattern(history: Sequence[HistoryEntry], info: StreakInfo | None = None) -> Vote:
    """Length-2 pattern over the last 8 rounds."""
    info = info or detect_streak(history)
    vote = follow_or_break(info, 2)
    if vote is not None:
        return vote

    window = outcomes(history, 8)
    if not window:
        return Vote.NONE
    vote = _pattern_vote(window, 2, 2)
    if vote is not None:
        return vote
    return contrarian_vote(window[-1])


def mean_deviation(history: Sequence[HistoryEntry], info: StreakInfo | None = None) -> Vote:
    """Bet on the minority outcome of the last 12 rounds unless they are balanced."""
    info = info or detect_streak(history)
    vote = follow_or_break(info, 2)
    if vote is not None:
        return vote

    window = outcomes(history, 12)
    if not window:
        return Vote.NONE
    tai = window.count(Outcome.TAI)
    xiu = len(window) - tai
    if abs(tai - xiu) / len(window) < 0.2:
        return contrarian_vote(window[-1])
    return Vote.TAI if xiu > tai else Vote.XIU


def recent_switch(history: Sequence[HistoryEntry], info: StreakInfo | None = None) -> Vote:
    info = info or detect_streak(history)
    vote = follow_or_break(info, 2)
    if vote is not None:
        return vote

    window = outcomes(history, 10)
    if not window:
        return Vote.NONE
    # Both branches vote against the last outcome; the switch count does not
    # change the result. Kept that way until the heuristic's intent is settled.
    if count_switches(window) >= 4:
        return contrarian_vote(window[-1])
    return contrarian_vote(window[-1])


@dataclass(frozen=True)
class BridgeSignal:
    vote: Vote
    break_probability: float
    reason: str


def bridge_break(history: Sequence[HistoryEntry], info: StreakInfo | None = None) -> BridgeSignal:
    """Decide whether to follow the current bridge or bet on it breaking.

    Starts from the detector's break probability and adjusts it with score
    volatility and the dominant length-2 pattern of the last 20 rounds.
    The first matching adjustment wins.
    """
    if len(history) < MIN_BRIDGE_HISTORY:
        return BridgeSignal(Vote.NONE, 0.0, "[Bridge] not enough data to follow or break")

    info = info or detect_streak(history)
    streak, current = info.length, info.outcome
    probability = info.break_probability

    window = outcomes(history, 20)
    window_scores = scores(history, 20)
    mean = sum(window_scores) / len(window_scores)
    deviation = sum(abs(s - mean) for s in window_scores) / len(window_scores)

    dominant = most_common_pattern(window, 2)
    stable_pattern = dominant is not None and dominant[1] >= 3

    if streak >= 3 and deviation < 2.0 and not stable_pattern:
        probability = max(probability - 0.25, 0.1)
        reason = f"[Follow] stable streak of {streak} {current}, keep following the bridge"
    elif streak >= 6:
        probability = min(probability + 0.3, 0.95)
        reason = f"[Break] streak too long: {streak} {current}, bridge likely to break"
    elif streak >= 3 and deviation > 3.5:
        probability = min(probability + 0.25, 0.9)
        reason = f"[Break] high volatility in scores ({deviation:.1f}), break more likely"
    elif stable_pattern and all(o == current for o in window[-5:]):
        probability = min(probability + 0.2, 0.85)
        pattern = ",".join(dominant[0])
        reason = f"[Break] repeating pattern {pattern} detected, bridge may break"
    else:
        probability = max(probability - 0.2, 0.1)
        reason = "[Follow] no strong break signal, keep following the bridge"

    vote = break_vote(current) if probability > 0.5 else follow_vote(current)
    return BridgeSignal(vote, probability, reason)


@dataclass(frozen=True)
class RuleVerdict:
    outcome: Outcome
    reason: str


_ALTERNATING = {
    (Outcome.TAI, Outcome.XIU, Outcome.TAI): Outcome.XIU,
    (Outcome.XIU, Outcome.TAI, Outcome.XIU): Outcome.TAI,
}

_DOUBLE_PAIRS = {
    (Outcome.TAI, Outcome.TAI, Outcome.XIU, Outcome.XIU): Outcome.TAI,
    (Outcome.XIU, Outcome.XIU, Outcome.TAI, Outcome.TAI): Outcome.XIU,
}


def heuristic_rules(history: Sequence[HistoryEntry], info: StreakInfo | None = None) -> RuleVerdict:
    """Rule cascade over the most recent rounds; the first matching rule wins."""
    info = info or detect_streak(history)
    streak, current = info.length, info.outcome

    if 2 <= streak <= 4:
        return RuleVerdict(current, f"[Follow] short streak of {streak} {current}, keep following")

    last3 = tuple(outcomes(history, 3))
    if len(last3) == 3 and last3 in _ALTERNATING:
        pick = _ALTERNATING[last3]
        return RuleVerdict(pick, f"[Break] alternating pattern {','.join(last3)}, next should be {pick}")

    last4 = tuple(outcomes(history, 4))
    if len(last4) == 4 and last4 in _DOUBLE_PAIRS:
        pick = _DOUBLE_PAIRS[last4]
        return RuleVerdict(pick, f"[Follow] double pair pattern {','.join(last4)}, next should be {pick}")

    if len(history) >= 7:
        last7 = outcomes(history, 7)
        if all(o == Outcome.XIU for o in last7):
            return RuleVerdict(Outcome.TAI, f"[Break] {Outcome.XIU} streak too long (7 rounds), predict {Outcome.TAI}")
        if all(o == Outcome.TAI for o in last7):
            return RuleVerdict(Outcome.XIU, f"[Break] {Outcome.TAI} streak too long (7 rounds), predict {Outcome.XIU}")

    recent = outcomes(history, 5)
    recent_scores = scores(history, 5)
    avg = sum(recent_scores) / (len(recent_scores) or 1)
    if avg > 11:
        return RuleVerdict(Outcome.TAI, f"[Follow] high average score ({avg:.1f}), predict {Outcome.TAI}")
    if avg < 7:
        return RuleVerdict(Outcome.XIU, f"[Follow] low average score ({avg:.1f}), predict {Outcome.XIU}")

    tai = recent.count(Outcome.TAI)
    xiu = recent.count(Outcome.XIU)
    if tai > xiu + 1:
        return RuleVerdict(Outcome.XIU, f"[Break] {Outcome.TAI} dominates ({tai}/{len(recent)}), predict {Outcome.XIU}")
    if xiu > tai + 1:
        return RuleVerdict(Outcome.TAI, f"[Break] {Outcome.XIU} dominates ({xiu}/{len(recent)}), predict {Outcome.TAI}")

    all_outcomes = outcomes(history)
    if all_outcomes.count(Outcome.TAI) > all_outcomes.count(Outcome.XIU):
        return RuleVerdict(Outcome.XIU, f"[Break] more {Outcome.TAI} overall, predict {Outcome.XIU}")
    return RuleVerdict(Outcome.TAI, f"[Follow] more or equal {Outcome.XIU} overall, predict {Outcome.TAI}")


VotePredictor = Callable[[Sequence[HistoryEntry], Optional[StreakInfo]], Vote]

# Tracked predictors in the order the engine evaluates them.
TRACKED_PREDICTORS: dict[PredictorName, VotePredictor] = {
    PredictorName.TREND: trend,
    PredictorName.SHORT: short_pattern,
    PredictorName.MEAN: mean_deviation,
    PredictorName.SWITCH: recent_switch,
}
