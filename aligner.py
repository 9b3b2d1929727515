"""
Temporal Aligner
Maps a news publication date plus a trading-day offset onto the price variation index
"""

import numbers

from price_index import ABSENT


class TemporalAligner:
    """
    Resolve (date, offset) to a trading day of a PriceVariationIndex.

    The anchor is always ceiling(date): news from a weekend or holiday counts
    toward the next session. Offsets are then walked one trading day at a
    time from the anchor, so non-trading dates are skipped.
    """

    def __init__(self, index):
        self.index = index

    def anchor(self, date):
        return self.index.ceiling(date)

    def locate(self, date, offset):
        """
        Args:
            date: Publication date of the news item
            offset: Signed number of trading days from the anchor

        Returns:
            TradingDay, or ABSENT if any step falls off the index
        """
        if isinstance(offset, bool) or not isinstance(offset, numbers.Integral):
            raise TypeError(f"Offset must be an integer, got {offset!r}")

        entry = self.anchor(date)
        step = self.index.successor if offset > 0 else self.index.predecessor
        for _ in range(abs(int(offset))):
            if not entry:
                break
            entry = step(entry.date)
        return entry

    def align(self, date, offset):
        """Variation at the located trading day, or ABSENT"""
        entry = self.locate(date, offset)
        if not entry:
            return ABSENT
        return entry.variation
