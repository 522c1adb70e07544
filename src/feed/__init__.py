"""Upstream round-history feed."""

from .client import RoundFeedClient
from .errors import DataUnavailableError, FeedError
from .parser import parse_history

__all__ = [
    "DataUnavailableError",
    "FeedError",
    "RoundFeedClient",
    "parse_history",
]
