"""Core utilities and shared functionality."""

from tradesim.core.timezone import (
    now_utc,
    to_utc,
    from_epoch_millis,
    to_epoch_millis,
    parse_datetime_utc,
    to_iso_utc,
    UTC,
)
from tradesim.core.exceptions import (
    AppError,
    ValidationError,
    NotFoundError,
    TradeError,
    InvalidQuantityError,
    InsufficientCashError,
    InsufficientHoldingError,
    FeedUnavailableError,
    PersistenceCorruptError,
)

__all__ = [
    "now_utc",
    "to_utc",
    "from_epoch_millis",
    "to_epoch_millis",
    "parse_datetime_utc",
    "to_iso_utc",
    "UTC",
    "AppError",
    "ValidationError",
    "NotFoundError",
    "TradeError",
    "InvalidQuantityError",
    "InsufficientCashError",
    "InsufficientHoldingError",
    "FeedUnavailableError",
    "PersistenceCorruptError",
]
