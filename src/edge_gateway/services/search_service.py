"""Federated search aggregator.

Tries every configured backend instance in order, one at a time, and
returns the first non-empty normalized result list. A failing mirror is
skipped, never fatal: exhaustion yields an empty list, not an error.
"""

import logging
from collections.abc import Awaitable, Callable

import anyio
import httpx

from edge_gateway.config import settings
from edge_gateway.entities import (
    AttemptOutcome,
    AttemptSkip,
    AttemptSuccess,
    BackendFamily,
    SearchResultItem,
)
from edge_gateway.normalizers import get_normalizer
from edge_gateway.protocols import PayloadShapeError
from edge_gateway.registry import BackendRegistry

logger = logging.getLogger(__name__)

CancelCheck = Callable[[], Awaitable[bool]]

# Seconds between caller-disconnect checks while an attempt is in flight
DISCONNECT_POLL_INTERVAL = 0.2


class SearchAggregator:
    """Sequential first-success-wins search over backend mirror families.

    Attempts follow the registry order exactly and restart from the top on
    every call. Each attempt is bounded by a total deadline covering
    connect, send and the whole body read. When ``is_cancelled`` is given it
    is polled while an attempt is in flight; once it reports true the
    in-flight call is cancelled and no further instances are tried.

    Example:
        ```python
        aggregator = SearchAggregator(client=httpx.AsyncClient(), registry=BackendRegistry.create())
        items = await aggregator.search("lofi hip hop")
        ```
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        registry: BackendRegistry,
        attempt_timeout: float | None = None,
        result_limit: int | None = None,
        cache_ttl: int | None = None,
        user_agent: str | None = None,
        disconnect_poll_interval: float = DISCONNECT_POLL_INTERVAL,
    ) -> None:
        """Initialize the aggregator.

        Args:
            client: Shared async HTTP client (required).
            registry: Ordered backend families (required).
            attempt_timeout: Deadline in seconds for each instance call. Defaults to settings.
            result_limit: Maximum number of items returned. Defaults to settings.
            cache_ttl: Cache hint in seconds for outbound calls. Defaults to settings.
            user_agent: Outbound User-Agent. Defaults to settings.
            disconnect_poll_interval: Seconds between ``is_cancelled`` checks.
        """
        self._client = client
        self._registry = registry
        self._attempt_timeout = attempt_timeout or settings.search_attempt_timeout
        self._limit = result_limit or settings.search_result_limit
        self._cache_ttl = settings.search_cache_ttl if cache_ttl is None else cache_ttl
        self._user_agent = user_agent or settings.user_agent
        self._poll_interval = disconnect_poll_interval

    @property
    def registry(self) -> BackendRegistry:
        return self._registry

    async def search(
        self,
        query: str,
        is_cancelled: CancelCheck | None = None,
    ) -> list[SearchResultItem]:
        """Search the backend families in order.

        Args:
            query: Raw search text (non-empty; checked by the caller)
            is_cancelled: Optional awaitable predicate polled during each attempt

        Returns:
            Normalized items from the first instance that produced any,
            or an empty list when every instance was skipped
        """
        for family in self._registry:
            for instance in family.instances:
                outcome = await self._watched_attempt(family, instance, query, is_cancelled)
                if outcome is None:
                    logger.info("search: caller went away, abandoned %s", instance)
                    return []

                if isinstance(outcome, AttemptSuccess):
                    logger.info(
                        "search: %d results from %s (%s)",
                        len(outcome.items),
                        instance,
                        family.name,
                    )
                    return outcome.items

                logger.warning(
                    "search: skipped %s (%s): %s", instance, family.name, outcome.reason
                )

        logger.warning("search: all %d instances exhausted", self._registry.instance_count)
        return []

    async def _watched_attempt(
        self,
        family: BackendFamily,
        instance: str,
        query: str,
        is_cancelled: CancelCheck | None,
    ) -> AttemptOutcome | None:
        """Run one attempt, cancelling it if the caller goes away.

        Returns:
            The attempt outcome, or None when the caller disconnected
        """
        if is_cancelled is None:
            return await self._attempt(family, instance, query)

        outcome: AttemptOutcome | None = None
        abandoned = False

        async with anyio.create_task_group() as tg:

            async def watch_caller() -> None:
                nonlocal abandoned
                while not await is_cancelled():
                    await anyio.sleep(self._poll_interval)
                abandoned = True
                tg.cancel_scope.cancel()

            tg.start_soon(watch_caller)
            outcome = await self._attempt(family, instance, query)
            tg.cancel_scope.cancel()

        return None if abandoned else outcome

    async def _attempt(
        self,
        family: BackendFamily,
        instance: str,
        query: str,
    ) -> AttemptOutcome:
        """Query one instance and classify the result.

        Only network, HTTP status and payload errors become a skip; anything
        else (including cancellation) propagates.
        """
        normalizer = get_normalizer(family.shape)
        url = normalizer.build_search_url(instance, query)

        try:
            with anyio.fail_after(self._attempt_timeout):
                response = await self._client.get(
                    url,
                    headers={
                        "User-Agent": self._user_agent,
                        "Accept": "application/json",
                        "Cache-Control": f"max-age={self._cache_ttl}",
                    },
                    timeout=self._attempt_timeout,
                )
        except (TimeoutError, httpx.TimeoutException):
            return AttemptSkip(reason=f"timed out after {self._attempt_timeout}s")
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            return AttemptSkip(reason=f"request failed: {type(e).__name__}: {e}")

        if not response.is_success:
            return AttemptSkip(reason=f"HTTP {response.status_code}")

        try:
            payload = response.json()
        except ValueError:
            return AttemptSkip(reason="body is not valid JSON")

        try:
            items = normalizer.normalize(payload, self._limit)
        except PayloadShapeError as e:
            return AttemptSkip(reason=f"unexpected payload: {e}")

        if not items:
            return AttemptSkip(reason="no usable results")

        return AttemptSuccess(items=items)
