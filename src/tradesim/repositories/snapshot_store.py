"""Persistence adapter: saves and loads the ledger snapshot."""

import logging
from decimal import Decimal

from tradesim.core.exceptions import PersistenceCorruptError
from tradesim.domain.models import LedgerSnapshot, QuoteCurrency
from tradesim.repositories.protocols import SnapshotRepository
from tradesim.repositories.snapshot_codec import dump_snapshot, parse_snapshot

logger = logging.getLogger(__name__)


class SnapshotStore:
    """
    Stores the ledger snapshot under a single key.

    load() never fails on bad data: an absent or corrupt slot yields the
    default initial state.
    """

    def __init__(
        self,
        repository: SnapshotRepository,
        key: str,
        starting_cash: Decimal,
        default_currency: QuoteCurrency = QuoteCurrency.USD,
    ):
        self._repo = repository
        self._key = key
        self._starting_cash = starting_cash
        self._default_currency = default_currency

    @property
    def key(self) -> str:
        return self._key

    def initial_snapshot(self) -> LedgerSnapshot:
        """Fresh default state."""
        return LedgerSnapshot.initial(self._starting_cash, self._default_currency)

    def save(self, snapshot: LedgerSnapshot) -> None:
        """Serialize and write the snapshot."""
        self._repo.write(self._key, dump_snapshot(snapshot))

    def load(self) -> LedgerSnapshot:
        """Read the saved snapshot, or the default state if absent/corrupt."""
        raw = self._repo.read(self._key)
        if raw is None:
            return self.initial_snapshot()
        try:
            return parse_snapshot(raw)
        except PersistenceCorruptError as exc:
            logger.warning("Discarding saved state under %r: %s", self._key, exc.message)
            return self.initial_snapshot()

    def clear(self) -> None:
        """Remove the saved snapshot."""
        self._repo.delete(self._key)
