# catalog/services/pagination_service.py
import math
import re
from dataclasses import dataclass

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100
# Keeps OFFSET well inside a 32-bit integer for any allowed limit
MAX_PAGE = 10_000_000

LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def _parse_int(raw):
    """
    Returns the leading integer of a query-string parameter
    ("2.5" -> 2, "10abc" -> 10), or None when there is none.
    """
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    match = LEADING_INT.match(str(raw))
    return int(match.group(1)) if match else None


@dataclass(frozen=True)
class Page:
    number: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT

    @property
    def offset(self) -> int:
        return (self.number - 1) * self.limit

    def total_pages(self, total: int) -> int:
        if self.limit <= 0:
            return 0
        return math.ceil(total / self.limit)

    def meta(self, total: int) -> dict:
        return {
            "page": self.number,
            "limit": self.limit,
            "total": total,
            "totalPages": self.total_pages(total),
        }


# Envelope for "no rule applies" results; never passes through clamping
EMPTY_PAGE = Page(number=1, limit=0)


def normalize_pagination(page=None, limit=None,
                         default_limit: int = DEFAULT_LIMIT,
                         max_limit: int = MAX_LIMIT) -> Page:
    """
    Missing, zero or non-numeric values fall back to the defaults.
    Negative values are clamped to 1, limit never exceeds max_limit
    and page never exceeds MAX_PAGE.
    """
    number = _parse_int(page) or DEFAULT_PAGE
    size = _parse_int(limit) or default_limit

    return Page(
        number=min(max(1, number), MAX_PAGE),
        limit=min(max(1, size), max_limit),
    )
