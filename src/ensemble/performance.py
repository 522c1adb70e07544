"""Per-predictor vote ledger and rolling accuracy scores."""

import threading
from typing import Sequence

import structlog

from shared_types import Vote

from .history import HistoryEntry

logger = structlog.get_logger().bind(source="performance")

DEFAULT_LOOKBACK = 10
NEUTRAL_SCORE = 1.0
MAX_SCORE = 2.0


class VoteStore:
    """In-memory ledger of (predictor, session) -> vote.

    A vote is written once, the first time a session is evaluated, and read
    back later against the following session's outcome. Nothing is evicted.
    """

    def __init__(self):
        self._votes: dict[tuple[str, str], Vote] = {}
        self._lock = threading.Lock()

    def record(self, predictor: str, session: str, vote: Vote) -> bool:
        """Store a vote unless one already exists. Returns True if written."""
        key = (str(predictor), session)
        with self._lock:
            if key in self._votes:
                return False
            self._votes[key] = Vote(vote)
            return True

    def get(self, predictor: str, session: str) -> Vote:
        with self._lock:
            return self._votes.get((str(predictor), session), Vote.NONE)

    def __len__(self) -> int:
        with self._lock:
            return len(self._votes)

    def clear(self) -> None:
        with self._lock:
            self._votes.clear()


class PerformanceTracker:
    """Scores predictors by how often their recorded votes hit the next round."""

    def __init__(self, store: VoteStore, lookback: int = DEFAULT_LOOKBACK):
        self.store = store
        self.lookback = lookback

    def score(self, predictor: str, history: Sequence[HistoryEntry]) -> float:
        """Accuracy over the last ``lookback`` rounds mapped onto [0, 2].

        Half right scores 1.0. A session with no recorded vote counts as a miss.
        """
        window = min(self.lookback, len(history) - 1)
        if window <= 0:
            return NEUTRAL_SCORE

        correct = 0
        for i in range(window):
            voted = self.store.get(predictor, history[-(i + 2)].session)
            actual = history[-(i + 1)].outcome
            if voted is not Vote.NONE and voted.outcome == actual:
                correct += 1

        half = window / 2
        raw = 1.0 + (correct - half) / half
        return max(0.0, min(MAX_SCORE, raw))

    def scores(self, predictors: Sequence[str], history: Sequence[HistoryEntry]) -> dict[str, float]:
        result = {str(name): self.score(name, history) for name in predictors}
        logger.debug("performance.scores", scores=result)
        return result
