"""Parse upstream round-history payloads into HistoryEntry lists."""

from typing import Any

import structlog
from pydantic import BaseModel, Field, ValidationError

from ensemble.history import HistoryEntry

from .errors import DataUnavailableError

logger = structlog.get_logger().bind(source="feed_parser")


class UpstreamRound(BaseModel):
    """One item of ``data.resultList`` as served upstream."""

    gameNum: str = Field(pattern=r"^#?\d+$")
    score: int
    facesList: list[int] = Field(min_length=3)


def parse_history(payload: Any) -> list[HistoryEntry]:
    """Validate the payload and return history oldest-first.

    Upstream lists the newest round first. Raises DataUnavailableError on any
    shape problem or an empty result list.
    """
    data = payload.get("data") if isinstance(payload, dict) else None
    rounds = data.get("resultList") if isinstance(data, dict) else None
    if not isinstance(rounds, list):
        raise DataUnavailableError("upstream payload has no data.resultList")
    if not rounds:
        raise DataUnavailableError("upstream returned no rounds")

    try:
        parsed = [UpstreamRound.model_validate(item) for item in rounds]
    except ValidationError as e:
        logger.warning("feed.malformed_round", errors=e.error_count())
        raise DataUnavailableError(f"malformed round in upstream payload: {e.errors()[0]['msg']}") from e

    return [
        HistoryEntry(session=r.gameNum, score=r.score, dice=tuple(r.facesList[:3]))
        for r in reversed(parsed)
    ]
