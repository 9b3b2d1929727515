"""
Price Variation Index
Ordered date -> daily price variation mapping with ceiling/predecessor/successor lookups
"""

from collections import namedtuple
from datetime import date, datetime

import numpy as np
import pandas as pd


TradingDay = namedtuple('TradingDay', ['date', 'variation'])


class DataError(ValueError):
    """Raised when the price series cannot be turned into an index"""


class _Absent:
    """Marker for a lookup with no matching trading day"""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self):
        return False

    def __repr__(self):
        return 'ABSENT'


ABSENT = _Absent()


def to_date(value):
    """Coerce an ISO string, datetime, Timestamp or date into a datetime.date"""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return pd.Timestamp(value).date()


class PriceVariationIndex:
    """
    Immutable index of day-over-day closing price variations.

    The first date of the raw series has no previous close, so it never
    becomes a key. Navigation queries return a TradingDay or ABSENT.
    """

    def __init__(self, prices):
        """
        Args:
            prices: Sequence of (date, closing price) tuples, ascending by date
        """
        prices = list(prices)
        if len(prices) < 2:
            raise DataError(f"At least two prices are required, got {len(prices)}")

        dates = [to_date(d) for d, _ in prices]
        closes = np.asarray([float(p) for _, p in prices], dtype=float)

        if not np.all(np.isfinite(closes)):
            raise DataError("Price series contains non-finite values")

        keys = np.asarray(dates, dtype='datetime64[D]')
        if np.any(np.diff(keys) <= np.timedelta64(0, 'D')):
            raise DataError("Price dates must be unique and strictly increasing")

        self._keys = keys[1:]
        self._variations = np.diff(closes)
        self._keys.setflags(write=False)
        self._variations.setflags(write=False)

    def __len__(self):
        return len(self._keys)

    def __iter__(self):
        for i in range(len(self._keys)):
            yield self._entry(i)

    def __repr__(self):
        return f"PriceVariationIndex({len(self)} days, {self.first().date} .. {self.last().date})"

    def _entry(self, position):
        if position < 0 or position >= len(self._keys):
            return ABSENT
        return TradingDay(self._keys[position].item(), float(self._variations[position]))

    def _search(self, d, side):
        return int(np.searchsorted(self._keys, np.datetime64(to_date(d), 'D'), side=side))

    def first(self):
        return self._entry(0)

    def last(self):
        return self._entry(len(self._keys) - 1)

    def get(self, d):
        """Exact lookup of a trading day"""
        entry = self.ceiling(d)
        if entry and entry.date == to_date(d):
            return entry
        return ABSENT

    def ceiling(self, d):
        """Entry with the smallest key >= d"""
        return self._entry(self._search(d, 'left'))

    def predecessor(self, d):
        """Entry with the greatest key strictly < d"""
        return self._entry(self._search(d, 'left') - 1)

    def successor(self, d):
        """Entry with the smallest key strictly > d"""
        return self._entry(self._search(d, 'right'))

    def to_series(self):
        """Variations as a pandas Series indexed by date"""
        return pd.Series(self._variations, index=pd.DatetimeIndex(self._keys), name='Variation')
