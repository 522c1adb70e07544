"""Dependency injection for FastAPI routes."""

import random
from functools import lru_cache

import structlog
from fastapi import Request

from cli.config import load_config_model
from cli.config_models import SicboConfig
from ensemble.engine import EnsembleEngine
from feed.client import RoundFeedClient

logger = structlog.get_logger()


@lru_cache
def get_config() -> SicboConfig:
    """Load shared config from config.yaml or defaults."""
    return load_config_model()


def build_engine(config: SicboConfig) -> EnsembleEngine:
    seed = config.engine.seed
    return EnsembleEngine(
        rng=random.Random(seed) if seed is not None else None,
        min_history=config.engine.min_history,
        lookback=config.engine.lookback,
    )


def build_feed(config: SicboConfig) -> RoundFeedClient:
    return RoundFeedClient(config.feed, retry=config.retry)


def get_engine(request: Request) -> EnsembleEngine:
    """Engine owned by the app; holds the vote ledger for the process lifetime."""
    state = request.app.state
    if getattr(state, "engine", None) is None:
        state.engine = build_engine(get_config())
    return state.engine


def get_feed(request: Request) -> RoundFeedClient:
    state = request.app.state
    if getattr(state, "feed", None) is None:
        state.feed = build_feed(get_config())
    return state.feed


def get_display_rng() -> random.Random:
    """Random source for cosmetic display values."""
    return random.Random()
