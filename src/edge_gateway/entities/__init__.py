"""Domain entities for internal representation.

These are frozen dataclasses used by services, normalizers and the
registry. They are NOT used for API contracts - use DTOs from the dto
package for that.
"""

from .allowlist_entry import AllowlistEntry, MatchMode
from .backend_family import BackendFamily, ResponseShape
from .search_result import SearchResultItem
from .upstream_outcome import AttemptOutcome, AttemptSkip, AttemptSuccess, UpstreamOutcome

__all__ = [
    "AllowlistEntry",
    "MatchMode",
    "BackendFamily",
    "ResponseShape",
    "SearchResultItem",
    "UpstreamOutcome",
    "AttemptOutcome",
    "AttemptSuccess",
    "AttemptSkip",
]
