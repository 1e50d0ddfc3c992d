"""
Order reference generator.

References look like ``LWG-20240101-0001``: a fixed prefix, the calendar
date the order was placed and a per‑day sequence number. Counters are kept
per date string, so a new day starts again at 1 without scanning orders.
"""

from datetime import datetime

from storefront.utils.logger import get_logger

_logger = get_logger(__name__)

SEQUENCE_WIDTH = 4


class OrderRefGenerator:
    """Not thread-safe on its own; MemoryStore calls it under its lock."""

    def __init__(self, prefix: str):
        self.prefix = prefix
        self._sequences: dict[str, int] = {}

    def next_ref(self, when: datetime) -> str:
        date_key = when.strftime("%Y%m%d")
        seq = self._sequences.get(date_key, 0) + 1
        self._sequences[date_key] = seq
        if seq == 10 ** SEQUENCE_WIDTH:
            # Past 9999 the number simply grows wider.
            _logger.warning(f"Order sequence for {date_key} exceeded {seq - 1}, widening references")
        return f"{self.prefix}-{date_key}-{seq:0{SEQUENCE_WIDTH}d}"

    def current(self, when: datetime) -> int:
        """Last sequence number issued on the day of `when` (0 if none)."""
        return self._sequences.get(when.strftime("%Y%m%d"), 0)
