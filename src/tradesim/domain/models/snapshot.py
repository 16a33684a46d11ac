"""Serializable copy of the full ledger state."""

from dataclasses import dataclass, field
from decimal import Decimal

from tradesim.domain.models.enums import QuoteCurrency
from tradesim.domain.models.holding import Holding
from tradesim.domain.models.order import Order


@dataclass
class LedgerSnapshot:
    """Ledger state at a point in time (what gets persisted)."""

    cash: Decimal
    holdings: dict[str, Holding] = field(default_factory=dict)
    history: list[Order] = field(default_factory=list)
    last_prices: dict[str, Decimal] = field(default_factory=dict)
    currency: QuoteCurrency = QuoteCurrency.USD

    def __post_init__(self) -> None:
        if isinstance(self.currency, str):
            self.currency = QuoteCurrency(self.currency)

    @classmethod
    def initial(
        cls,
        starting_cash: Decimal,
        currency: QuoteCurrency = QuoteCurrency.USD,
    ) -> "LedgerSnapshot":
        """Default state for a fresh session."""
        return cls(cash=starting_cash, currency=currency)
