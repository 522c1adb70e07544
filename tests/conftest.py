"""Shared test fixtures for Sicbo Oracle."""

import sys
from pathlib import Path

import pytest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from ensemble.history import HistoryEntry  # noqa: E402

PATTERN_SCORES = {"T": 13, "X": 8}


def _session(i: int) -> str:
    return f"#{i:07d}"


@pytest.fixture
def make_history():
    """Build history from a pattern string, oldest first: "TTX" -> Tài, Tài, Xỉu."""

    def _make(pattern: str, start: int = 1, tai_score: int = 13, xiu_score: int = 8) -> list[HistoryEntry]:
        score_for = {"T": tai_score, "X": xiu_score}
        return [
            HistoryEntry(session=_session(start + i), score=score_for[ch], dice=None)
            for i, ch in enumerate(pattern)
        ]

    return _make


@pytest.fixture
def history_from_scores():
    """Build history from raw dice totals, oldest first."""

    def _make(scores: list[int], start: int = 1) -> list[HistoryEntry]:
        return [HistoryEntry(session=_session(start + i), score=s) for i, s in enumerate(scores)]

    return _make


@pytest.fixture
def upstream_payload():
    """Upstream JSON shape: newest round first."""
    rounds = []
    for n in range(112, 100, -1):
        score = 13 if n % 2 else 8
        faces = [4, 4, 5] if score == 13 else [2, 3, 3]
        rounds.append({"gameNum": _session(n), "score": score, "facesList": faces})
    return {"code": 0, "data": {"resultList": rounds}}
