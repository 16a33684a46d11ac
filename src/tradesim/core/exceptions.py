"""Application-level exceptions."""


class AppError(Exception):
    """Base exception for application errors."""

    def __init__(self, message: str, code: str = "APP_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)


class ValidationError(AppError):
    """Raised when input validation fails."""

    def __init__(self, message: str):
        super().__init__(message, code="VALIDATION_ERROR")


class NotFoundError(AppError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        super().__init__(f"{resource} not found: {identifier}", code="NOT_FOUND")


class TradeError(AppError):
    """Base class for rejected trade attempts. The ledger is left untouched."""


class InvalidQuantityError(TradeError):
    """Raised when a trade quantity is not a finite positive number."""

    def __init__(self, quantity: str):
        super().__init__(
            f"Invalid quantity: {quantity} (must be a finite number > 0)",
            code="INVALID_QUANTITY",
        )


class InsufficientCashError(TradeError):
    """Raised when a BUY costs more than the available cash."""

    def __init__(self, requested: str, available: str):
        super().__init__(
            f"Insufficient cash: requested {requested}, available {available}",
            code="INSUFFICIENT_CASH",
        )


class InsufficientHoldingError(TradeError):
    """Raised when attempting to sell more units than held."""

    def __init__(self, symbol: str, requested: str, available: str):
        super().__init__(
            f"Insufficient holding of {symbol}: requested {requested}, available {available}",
            code="INSUFFICIENT_HOLDING",
        )


class FeedUnavailableError(AppError):
    """Raised when the price feed cannot be reached or returns garbage."""

    def __init__(self, message: str):
        super().__init__(message, code="FEED_UNAVAILABLE")


class PersistenceCorruptError(AppError):
    """Raised when a saved ledger snapshot cannot be decoded."""

    def __init__(self, message: str):
        super().__init__(message, code="PERSISTENCE_CORRUPT")
