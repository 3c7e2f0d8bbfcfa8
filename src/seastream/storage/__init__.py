"""Storage components for decoded events.

This package provides:
- EventColumns: dynamic columnar buffer with Arrow/Parquet export
"""

from seastream.storage.table import EventColumns

__all__ = [
    "EventColumns",
]
