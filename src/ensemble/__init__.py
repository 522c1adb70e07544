"""Ensemble prediction engine for Tài/Xỉu rounds."""

from .engine import EnsembleEngine, EnsembleResult, predict
from .history import HistoryEntry, classify
from .performance import PerformanceTracker, VoteStore
from .predictors import BridgeSignal, RuleVerdict
from .streaks import StreakInfo, detect_streak

__all__ = [
    "BridgeSignal",
    "EnsembleEngine",
    "EnsembleResult",
    "HistoryEntry",
    "PerformanceTracker",
    "RuleVerdict",
    "StreakInfo",
    "VoteStore",
    "classify",
    "detect_streak",
    "predict",
]
