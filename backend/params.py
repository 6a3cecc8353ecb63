"""Parsed query-string parameters for the /api endpoints."""
from dataclasses import dataclass
from typing import Optional

from months import parse_month

DEFAULT_PAGE = 1
DEFAULT_PER_PAGE = 10


class InvalidParameter(ValueError):
    """Raised for a query parameter the API refuses; mapped to HTTP 400."""

    def __init__(self, name, message):
        super().__init__(f"Invalid '{name}': {message}")
        self.name = name


def _month(args):
    raw = args.get("month")
    if raw is None or not raw.strip():
        return None
    try:
        return parse_month(raw)
    except ValueError:
        raise InvalidParameter("month", f"unknown month name {raw!r}") from None


def _positive_int(args, name, default):
    raw = args.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        raise InvalidParameter(name, f"expected an integer, got {raw!r}") from None
    if value < 1:
        raise InvalidParameter(name, "must be at least 1")
    return value


@dataclass(frozen=True)
class MonthParams:
    month: Optional[int] = None

    @classmethod
    def from_args(cls, args):
        return cls(month=_month(args))


@dataclass(frozen=True)
class ListingParams:
    month: Optional[int] = None
    search: Optional[str] = None
    page: int = DEFAULT_PAGE
    per_page: int = DEFAULT_PER_PAGE

    @classmethod
    def from_args(cls, args):
        search = (args.get("search") or "").strip()
        return cls(
            month=_month(args),
            search=search or None,
            page=_positive_int(args, "page", DEFAULT_PAGE),
            per_page=_positive_int(args, "perPage", DEFAULT_PER_PAGE),
        )

    @property
    def skip(self):
        return (self.page - 1) * self.per_page
