"""Upstream passthrough fetcher.

Forwards exactly one GET to a caller-named URL after the allowlist check
and returns the upstream response untouched. No retries: the caller asked
for one specific resource.
"""

import logging
from urllib.parse import urlsplit

import anyio
import httpx

from edge_gateway.config import settings
from edge_gateway.entities import UpstreamOutcome
from edge_gateway.errors import (
    ForbiddenHostError,
    InvalidTargetError,
    MissingParameterError,
    UpstreamUnreachableError,
)

from .allowlist_service import AllowlistValidator

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_TYPE = "application/octet-stream"
ALLOWED_SCHEMES = ("http", "https")


class PassthroughFetcher:
    """Allowlist-enforced single-request fetcher.

    Example:
        ```python
        fetcher = PassthroughFetcher(client=httpx.AsyncClient(), validator=AllowlistValidator.create())
        outcome = await fetcher.fetch("https://i.ytimg.com/vi/abc/hqdefault.jpg")
        outcome.status, outcome.content_type, len(outcome.body)
        ```
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        validator: AllowlistValidator,
        user_agent: str | None = None,
        cache_ttl: int | None = None,
        timeout: float | None = None,
    ) -> None:
        """Initialize the fetcher.

        Args:
            client: Shared async HTTP client (required).
            validator: Allowlist used to vet targets (required).
            user_agent: Outbound User-Agent. Defaults to settings.
            cache_ttl: Cache hint in seconds for the outbound call. Defaults to settings.
            timeout: Request timeout in seconds. Defaults to settings.
        """
        self._client = client
        self._validator = validator
        self._user_agent = user_agent or settings.user_agent
        self._cache_ttl = settings.proxy_cache_ttl if cache_ttl is None else cache_ttl
        self._timeout = timeout or settings.proxy_timeout

    @property
    def cache_ttl(self) -> int:
        return self._cache_ttl

    def _validate_target(self, target_url: str | None) -> str:
        """Run the parameter, syntax and allowlist checks.

        Returns:
            The target URL, ready to fetch

        Raises:
            MissingParameterError: No target given
            InvalidTargetError: Target is not an absolute http(s) URL
            ForbiddenHostError: Target host is not allowlisted
        """
        if not target_url:
            raise MissingParameterError("Missing url param")

        try:
            parts = urlsplit(target_url)
            hostname = parts.hostname
        except ValueError as e:
            raise InvalidTargetError(f"Invalid url param: {e}") from e

        if parts.scheme.lower() not in ALLOWED_SCHEMES or not hostname:
            raise InvalidTargetError("Invalid url param: expected an absolute http(s) URL")

        if not self._validator.is_host_allowed(hostname):
            logger.info("passthrough: rejected host %s", hostname)
            raise ForbiddenHostError(hostname)

        return target_url

    async def fetch(self, target_url: str | None) -> UpstreamOutcome:
        """Fetch ``target_url`` once and return the upstream response.

        Args:
            target_url: Absolute URL named by the caller

        Returns:
            UpstreamOutcome with the upstream status, content type and body

        Raises:
            MissingParameterError, InvalidTargetError, ForbiddenHostError:
                Validation failed; no request was sent
            UpstreamUnreachableError: Connection error, or the whole call
                (including the body read) exceeded the timeout
        """
        url = self._validate_target(target_url)

        try:
            with anyio.fail_after(self._timeout):
                response = await self._client.get(
                    url,
                    headers={
                        "Accept": "*/*",
                        "User-Agent": self._user_agent,
                        "Cache-Control": f"max-age={self._cache_ttl}",
                    },
                    timeout=self._timeout,
                    follow_redirects=False,
                )
        except TimeoutError as e:
            logger.warning("passthrough: %s exceeded %ss", url, self._timeout)
            raise UpstreamUnreachableError(
                f"Upstream request timed out after {self._timeout}s"
            ) from e
        except httpx.InvalidURL as e:
            raise InvalidTargetError(f"Invalid url param: {e}") from e
        except httpx.HTTPError as e:
            logger.warning("passthrough: upstream unreachable for %s: %s", url, e)
            raise UpstreamUnreachableError(f"Upstream request failed: {e}") from e

        return UpstreamOutcome(
            status=response.status_code,
            content_type=response.headers.get("content-type") or DEFAULT_CONTENT_TYPE,
            body=response.content,
        )
