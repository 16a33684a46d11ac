"""Number formatting helpers for display fields."""

from decimal import Decimal, ROUND_HALF_EVEN
from typing import Union

from tradesim.domain.models.enums import QuoteCurrency

CURRENCY_SYMBOLS: dict[QuoteCurrency, str] = {
    QuoteCurrency.USD: "$",
    QuoteCurrency.INR: "₹",
    QuoteCurrency.EUR: "€",
}

_MAX_FRACTION_DIGITS = 8


def format_decimal(value: Decimal) -> str:
    """Plain (non-scientific) string form of a Decimal without trailing zeros."""
    text = format(value.normalize(), "f")
    return "0" if text in ("-0", "") else text


def format_money(amount: Union[Decimal, int, float], currency: Union[QuoteCurrency, str]) -> str:
    """
    Format an amount with the currency symbol, thousands separators and
    between 2 and 8 fractional digits.
    """
    currency = QuoteCurrency(currency)
    value = Decimal(str(amount)).quantize(
        Decimal(1).scaleb(-_MAX_FRACTION_DIGITS), rounding=ROUND_HALF_EVEN
    )
    text = f"{value:,.{_MAX_FRACTION_DIGITS}f}"
    whole, _, fraction = text.partition(".")
    fraction = fraction.rstrip("0").ljust(2, "0")
    return f"{CURRENCY_SYMBOLS.get(currency, '')}{whole}.{fraction}"
