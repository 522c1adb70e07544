"""Async client for the upstream round-history API."""

from typing import Optional

import httpx
import structlog

from cli.config_models import FeedConfig, RetryConfig
from cli.retry import retry_from_config
from ensemble.history import HistoryEntry
from observability import metrics

from .errors import DataUnavailableError
from .parser import parse_history

logger = structlog.get_logger().bind(source="feed")


def is_retryable(exc: BaseException) -> bool:
    """Transport failures and 5xx responses."""
    if isinstance(exc, httpx.HTTPStatusError):
        return exc.response.status_code >= 500
    return isinstance(exc, httpx.RequestError)


class RoundFeedClient:
    """Fetches the latest rounds and hands back parsed history.

    Transport errors and 5xx responses are retried per ``retry``; whatever still
    fails surfaces as DataUnavailableError.
    """

    def __init__(
        self,
        config: Optional[FeedConfig] = None,
        retry: Optional[RetryConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.config = config or FeedConfig()
        self.retry = retry or RetryConfig()
        self.client = httpx.AsyncClient(
            timeout=self.config.timeout,
            headers={"User-Agent": self.config.user_agent},
            transport=transport,
        )

    async def _get(self) -> httpx.Response:
        response = await self.client.get(self.config.base_url, params=self.config.params())
        response.raise_for_status()
        return response

    async def fetch_payload(self) -> dict:
        """GET the raw upstream JSON."""
        metrics.counter("feed.fetches")
        fetch = retry_from_config(self.retry, predicate=is_retryable)(self._get)
        try:
            response = await fetch()
            return response.json()
        except httpx.HTTPStatusError as e:
            metrics.counter("feed.errors")
            logger.error("feed.http_error", status=e.response.status_code, url=str(e.request.url))
            raise DataUnavailableError(f"upstream returned HTTP {e.response.status_code}") from e
        except httpx.RequestError as e:
            metrics.counter("feed.errors")
            logger.error("feed.request_error", error=str(e))
            raise DataUnavailableError(f"upstream request failed: {e}") from e
        except ValueError as e:
            metrics.counter("feed.errors")
            logger.error("feed.invalid_json", error=str(e))
            raise DataUnavailableError("upstream returned invalid JSON") from e

    async def fetch_history(self) -> list[HistoryEntry]:
        """Fetch and parse history, oldest round first."""
        payload = await self.fetch_payload()
        try:
            history = parse_history(payload)
        except DataUnavailableError:
            metrics.counter("feed.errors")
            raise
        logger.debug("feed.history", rounds=len(history), last=history[-1].session)
        return history

    async def close(self):
        """Close the async client."""
        await self.client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
