"""CSV export of the order history."""

import csv
import io
from pathlib import Path
from typing import Iterable

from tradesim.core.formatting import format_decimal
from tradesim.domain.views import HistoryRow

CSV_COLUMNS = ["ts", "type", "symbol", "qty", "price", "cost"]
EXPORT_FILENAME = "crypto_demo_history.csv"


def _write_rows(handle, rows: Iterable[HistoryRow]) -> None:
    # Every cell is quoted; embedded quotes are doubled
    writer = csv.writer(handle, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(CSV_COLUMNS)
    for row in rows:
        writer.writerow([
            row.ts,
            row.type,
            row.symbol,
            format_decimal(row.qty),
            format_decimal(row.price),
            format_decimal(row.cost),
        ])


def history_to_csv(rows: Iterable[HistoryRow]) -> str:
    """Serialize history rows to CSV text with a header row."""
    output = io.StringIO()
    _write_rows(output, rows)
    return output.getvalue()


def export_history_csv(rows: Iterable[HistoryRow], path: str) -> Path:
    """
    Write history rows to a CSV file.

    Args:
        rows: History rows, typically Ledger.export_history()
        path: Output file path (parent directories are created)

    Returns:
        The written file path
    """
    file_path = Path(path)
    file_path.parent.mkdir(parents=True, exist_ok=True)

    with open(file_path, "w", newline="", encoding="utf-8") as csvfile:
        _write_rows(csvfile, rows)
    return file_path
