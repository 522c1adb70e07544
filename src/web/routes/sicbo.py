"""Prediction routes: public /sicbo payload and a detailed breakdown."""

import random

import structlog
from fastapi import APIRouter, Depends, HTTPException

from ensemble.engine import EnsembleEngine, EnsembleResult
from ensemble.history import HistoryEntry
from feed.client import RoundFeedClient
from feed.errors import DataUnavailableError
from web.deps import get_display_rng, get_engine, get_feed
from web.models import PredictionDetail, SicboResponse
from web.presenters import next_session_id, random_confidence_pct, random_score_range

logger = structlog.get_logger()

router = APIRouter(tags=["sicbo"])

UNAVAILABLE_DETAIL = "Could not load round history from upstream, or the data was invalid."


async def _load_and_predict(
    feed: RoundFeedClient, engine: EnsembleEngine
) -> tuple[list[HistoryEntry], EnsembleResult]:
    try:
        history = await feed.fetch_history()
    except DataUnavailableError as e:
        logger.warning("sicbo.data_unavailable", error=str(e))
        raise HTTPException(status_code=503, detail=UNAVAILABLE_DETAIL)
    return history, engine.predict(history)


@router.get("/sicbo", response_model=SicboResponse)
async def sicbo(
    feed: RoundFeedClient = Depends(get_feed),
    engine: EnsembleEngine = Depends(get_engine),
    rng: random.Random = Depends(get_display_rng),
):
    history, result = await _load_and_predict(feed, engine)
    last = history[-1]
    dice = last.dice or (None, None, None)
    return SicboResponse(
        phien=last.session,
        xuc_xac_1=dice[0],
        xuc_xac_2=dice[1],
        xuc_xac_3=dice[2],
        tong=last.score,
        ket_qua=str(last.outcome),
        phien_hien_tai=next_session_id(last.session),
        du_doan=str(result.outcome),
        dudoan_vi=random_score_range(result.outcome, rng),
        do_tin_cay=f"{random_confidence_pct(rng)}%",
    )


@router.get("/api/predict", response_model=PredictionDetail)
async def predict_detail(
    feed: RoundFeedClient = Depends(get_feed),
    engine: EnsembleEngine = Depends(get_engine),
):
    history, result = await _load_and_predict(feed, engine)
    last = history[-1]
    return PredictionDetail(
        session=last.session,
        next_session=next_session_id(last.session),
        outcome=str(result.outcome),
        confidence=result.confidence,
        rationale=result.rationale,
        fallback=result.fallback,
        streak=result.streak,
        break_probability=result.break_probability,
        votes={name: vote.name for name, vote in result.votes.items()},
        scores=result.scores,
        weights=result.weights,
    )
