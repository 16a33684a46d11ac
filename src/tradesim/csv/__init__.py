"""CSV export module."""

from tradesim.csv.exporter import (
    CSV_COLUMNS,
    EXPORT_FILENAME,
    history_to_csv,
    export_history_csv,
)

__all__ = [
    "CSV_COLUMNS",
    "EXPORT_FILENAME",
    "history_to_csv",
    "export_history_csv",
]
