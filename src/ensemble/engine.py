"""Weighted ensemble over the heuristic predictors."""

import random
import threading
from dataclasses import dataclass, field
from typing import Optional, Sequence

import structlog

from observability import metrics
from shared_types import Outcome, PredictorName, Vote

from .history import HistoryEntry
from .performance import DEFAULT_LOOKBACK, PerformanceTracker, VoteStore
from .predictors import TRACKED_PREDICTORS, bridge_break, heuristic_rules
from .streaks import StreakInfo, detect_streak

logger = structlog.get_logger().bind(source="ensemble")

MIN_HISTORY = 5
RULES = "rules"
FALLBACK_REASON = "insufficient history, random pick"

BAD_PATTERN_SWITCHES = 6
BAD_PATTERN_STREAK = 7
BREAK_BONUS = 0.4
STREAK_BONUS = 0.35


@dataclass(frozen=True)
class EnsembleResult:
    outcome: Outcome
    rationale: str
    confidence: float
    votes: dict[str, Vote] = field(default_factory=dict)
    scores: dict[str, float] = field(default_factory=dict)
    weights: dict[str, float] = field(default_factory=dict)
    streak: int = 0
    break_probability: float = 0.0
    fallback: bool = False


def base_weights(streak: int, scores: dict[str, float]) -> dict[str, float]:
    """Regime-dependent weights; every predictor but the rule cascade is scaled by its score."""
    return {
        PredictorName.TREND: (0.15 if streak >= 3 else 0.2) * scores[PredictorName.TREND],
        PredictorName.SHORT: (0.2 if streak >= 2 else 0.15) * scores[PredictorName.SHORT],
        PredictorName.MEAN: 0.1 * scores[PredictorName.MEAN],
        PredictorName.SWITCH: 0.1 * scores[PredictorName.SWITCH],
        PredictorName.BRIDGE: (0.35 if streak >= 3 else 0.3) * scores[PredictorName.BRIDGE],
        RULES: 0.3 if streak >= 2 else 0.25,
    }


def is_bad_pattern(info: StreakInfo) -> bool:
    """Choppy or overextended tables where every signal is discounted."""
    return info.switches >= BAD_PATTERN_SWITCHES or info.length >= BAD_PATTERN_STREAK


class EnsembleEngine:
    """Owns the vote ledger and turns a history into one prediction.

    Args:
        store: Vote ledger; a fresh one is created when omitted.
        rng: Random source for the insufficient-history pick.
        min_history: Rounds required before the ensemble runs.
        lookback: Rounds used to score each predictor.
    """

    def __init__(
        self,
        store: Optional[VoteStore] = None,
        rng: Optional[random.Random] = None,
        min_history: int = MIN_HISTORY,
        lookback: int = DEFAULT_LOOKBACK,
    ):
        self.store = store if store is not None else VoteStore()
        self.rng = rng or random.Random()
        self.min_history = min_history
        self.tracker = PerformanceTracker(self.store, lookback=lookback)

    def predict(self, history: Sequence[HistoryEntry]) -> EnsembleResult:
        metrics.counter("ensemble.predictions")
        if not history or len(history) < self.min_history:
            return self._fallback(history)

        with metrics.timer("ensemble.predict"):
            return self._combine(history)

    def _fallback(self, history: Sequence[HistoryEntry]) -> EnsembleResult:
        pick = Outcome.TAI if self.rng.random() < 0.5 else Outcome.XIU
        metrics.counter("ensemble.fallbacks")
        logger.info("ensemble.fallback", rounds=len(history or ()), pick=str(pick))
        return EnsembleResult(outcome=pick, rationale=FALLBACK_REASON, confidence=0.5, fallback=True)

    def _combine(self, history: Sequence[HistoryEntry]) -> EnsembleResult:
        session = history[-1].session
        info = detect_streak(history)

        votes: dict[str, Vote] = {name: fn(history, info) for name, fn in TRACKED_PREDICTORS.items()}
        bridge = bridge_break(history, info)
        votes[PredictorName.BRIDGE] = bridge.vote
        rules = heuristic_rules(history, info)

        for name, vote in votes.items():
            self.store.record(name, session, vote)

        scores = self.tracker.scores(list(votes), history)
        weights = base_weights(info.length, scores)

        tai = xiu = 0.0
        for name, vote in votes.items():
            if vote is Vote.TAI:
                tai += weights[name]
            elif vote is Vote.XIU:
                xiu += weights[name]
        if rules.outcome == Outcome.TAI:
            tai += weights[RULES]
        else:
            xiu += weights[RULES]

        if is_bad_pattern(info):
            tai *= 0.5
            xiu *= 0.5

        bonus = 0.0
        if bridge.break_probability > 0.5:
            bonus = BREAK_BONUS
        elif info.length >= 3:
            bonus = STREAK_BONUS
        if bridge.vote is Vote.TAI:
            tai += bonus
        else:
            xiu += bonus

        outcome = Outcome.TAI if tai > xiu else Outcome.XIU
        total = tai + xiu
        confidence = max(tai, xiu) / total if total > 0 else 0.5

        all_votes = {str(k): v for k, v in votes.items()}
        all_votes[RULES] = Vote.TAI if rules.outcome == Outcome.TAI else Vote.XIU

        result = EnsembleResult(
            outcome=outcome,
            rationale=f"{rules.reason} | {bridge.reason}",
            confidence=confidence,
            votes=all_votes,
            scores=scores,
            weights={str(k): v for k, v in weights.items()},
            streak=info.length,
            break_probability=bridge.break_probability,
        )
        logger.info(
            "ensemble.prediction",
            session=session,
            outcome=str(outcome),
            confidence=round(confidence, 4),
            streak=info.length,
        )
        return result


_default_engine: Optional[EnsembleEngine] = None
_default_lock = threading.Lock()


def get_engine() -> EnsembleEngine:
    """Shared engine for one-off scripts and the REPL.

    The web app and CLI build and own their engines; use this only where no
    caller manages one. Its vote ledger lives for the rest of the process.
    """
    global _default_engine
    with _default_lock:
        if _default_engine is None:
            _default_engine = EnsembleEngine()
        return _default_engine


def predict(history: Sequence[HistoryEntry], engine: Optional[EnsembleEngine] = None) -> EnsembleResult:
    """Predict with ``engine``, or with the shared script engine when omitted."""
    return (engine or get_engine()).predict(history)
