"""Allowlist validation for passthrough targets."""

from collections.abc import Iterable
from urllib.parse import urlsplit

from edge_gateway.config import Settings, settings
from edge_gateway.entities import AllowlistEntry, MatchMode


def extract_hostname(url: str) -> str | None:
    """Return the hostname of ``url``, or None if it has none or does not parse.

    The hostname is lowercased by the parser; scheme and port are dropped.
    """
    try:
        return urlsplit(url).hostname
    except ValueError:
        return None


class AllowlistValidator:
    """Decides whether a target hostname may be fetched.

    Pure function of its input and the immutable entry list; safe to share
    across concurrent requests.

    Example:
        ```python
        validator = AllowlistValidator.create()
        validator.is_allowed("https://i.ytimg.com/vi/abc/hq.jpg")  # True
        validator.is_allowed("https://evil.example/")  # False
        validator.is_allowed("notadomain")  # False
        ```
    """

    def __init__(self, entries: Iterable[AllowlistEntry]) -> None:
        self._entries = tuple(entries)

    @classmethod
    def create(cls, config: Settings | None = None) -> "AllowlistValidator":
        """Build the validator from the configured domain lists.

        Args:
            config: Settings to read from. Defaults to global settings.

        Returns:
            Configured AllowlistValidator
        """
        config = config or settings
        entries = [
            AllowlistEntry(hostname=host, match_mode=MatchMode.SUFFIX_OF_DOMAIN)
            for host in config.allowed_domains
        ]
        entries.extend(
            AllowlistEntry(hostname=host, match_mode=MatchMode.EXACT)
            for host in config.allowed_exact_hosts
        )
        return cls(entries)

    @property
    def entries(self) -> tuple[AllowlistEntry, ...]:
        return self._entries

    def is_host_allowed(self, hostname: str) -> bool:
        if not hostname:
            return False
        return any(entry.matches(hostname) for entry in self._entries)

    def is_allowed(self, url: str) -> bool:
        """Check whether the host of ``url`` is on the allowlist.

        Never raises: malformed input is simply not allowed. The scheme is
        not checked here.
        """
        if not isinstance(url, str):
            return False
        hostname = extract_hostname(url)
        return hostname is not None and self.is_host_allowed(hostname)
