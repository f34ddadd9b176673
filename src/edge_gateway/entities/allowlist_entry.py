"""Allowlist entry domain entity."""

from dataclasses import dataclass
from enum import Enum


class MatchMode(str, Enum):
    """How an allowlist entry is compared against a hostname."""

    EXACT = "exact"
    SUFFIX_OF_DOMAIN = "suffix_of_domain"


@dataclass(frozen=True)
class AllowlistEntry:
    """A hostname that passthrough requests may target.

    Attributes:
        hostname: The allowed hostname (no scheme, no port)
        match_mode: EXACT matches the hostname only; SUFFIX_OF_DOMAIN also
            matches any subdomain of it
    """

    hostname: str
    match_mode: MatchMode = MatchMode.SUFFIX_OF_DOMAIN

    def matches(self, hostname: str) -> bool:
        if hostname == self.hostname:
            return True
        if self.match_mode is MatchMode.SUFFIX_OF_DOMAIN:
            return hostname.endswith("." + self.hostname)
        return False
