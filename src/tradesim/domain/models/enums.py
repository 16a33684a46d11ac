"""Enumerations for domain models."""

from enum import Enum


class OrderSide(str, Enum):
    """Side of a simulated market order."""

    BUY = "BUY"
    SELL = "SELL"


class QuoteCurrency(str, Enum):
    """Currencies prices and balances can be quoted in."""

    USD = "usd"
    INR = "inr"
    EUR = "eur"
