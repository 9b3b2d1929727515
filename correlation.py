"""
Sentiment / Price Correlation Report
Pearson correlation between news sentiment and price variation at several trading-day offsets
"""

from collections import OrderedDict, namedtuple
from concurrent.futures import ThreadPoolExecutor
from enum import Enum

import numpy as np

from aligner import TemporalAligner
from price_index import ABSENT


# Report order: same day, 2 days before, 1 day before, 1 day after, 2 days after
OFFSETS = (0, -2, -1, 1, 2)

MIN_PAIRS = 2


class CorrelationStatus(Enum):
    OK = 'ok'
    INSUFFICIENT_DATA = 'insufficient data'
    UNDEFINED = 'undefined'


class CorrelationResult(namedtuple('CorrelationResult',
                                   ['offset', 'sentiments', 'variations', 'coefficient', 'status'])):
    """
    Outcome for one offset.

    sentiments and variations are the index-paired vectors that survived
    alignment. coefficient is None unless status is OK.
    """

    __slots__ = ()

    @property
    def ok(self):
        return self.status is CorrelationStatus.OK

    @property
    def num_pairs(self):
        return len(self.sentiments)


def offset_label(offset):
    """Human readable name of an offset, e.g. '2 days before news date'"""
    if offset == 0:
        return 'same day of news date'
    days = abs(offset)
    unit = 'day' if days == 1 else 'days'
    return f"{days} {unit} {'before' if offset < 0 else 'after'} news date"


def pearson_correlation(x, y):
    """
    Pearson correlation coefficient of two equal-length vectors

    Returns:
        (coefficient, status): coefficient is None when status is not OK
    """
    x = np.asarray(x, dtype=float)
    y = np.asarray(y, dtype=float)
    if x.shape != y.shape:
        raise ValueError(f"Vectors differ in length: {len(x)} vs {len(y)}")

    if len(x) < MIN_PAIRS:
        return None, CorrelationStatus.INSUFFICIENT_DATA

    # Constant vector: zero variance
    if np.ptp(x) == 0 or np.ptp(y) == 0:
        return None, CorrelationStatus.UNDEFINED

    dx = x - x.mean()
    dy = y - y.mean()
    denominator = np.sqrt(np.sum(dx ** 2) * np.sum(dy ** 2))
    if denominator == 0:
        return None, CorrelationStatus.UNDEFINED

    r = float(np.sum(dx * dy) / denominator)
    return float(np.clip(r, -1.0, 1.0)), CorrelationStatus.OK


def paired_vectors(observations, aligner, offset):
    """Sentiment and variation vectors for one offset, skipping absent alignments"""
    sentiments = []
    variations = []
    for obs in observations:
        variation = aligner.align(obs.date, offset)
        if variation is ABSENT:
            continue
        sentiments.append(obs.score)
        variations.append(variation)
    return sentiments, variations


def correlate_offset(observations, aligner, offset):
    sentiments, variations = paired_vectors(observations, aligner, offset)
    coefficient, status = pearson_correlation(sentiments, variations)
    return CorrelationResult(offset, tuple(sentiments), tuple(variations), coefficient, status)


def build_report(observations, index, offsets=OFFSETS, workers=None):
    """
    Correlate sentiment with price variation at every offset

    Args:
        observations: SentimentObservationSet (or any iterable of observations)
        index: PriceVariationIndex
        offsets: Trading-day offsets, reported in this order
        workers: Thread count for computing offsets concurrently; None runs serially

    Raises:
        ValueError: offsets contains duplicates

    Returns:
        OrderedDict mapping offset -> CorrelationResult
    """
    offsets = tuple(offsets)
    if len(set(offsets)) != len(offsets):
        raise ValueError(f"Duplicate offsets in {offsets}")

    observations = list(observations)
    aligner = TemporalAligner(index)

    if workers:
        with ThreadPoolExecutor(max_workers=workers) as executor:
            results = list(executor.map(
                lambda offset: correlate_offset(observations, aligner, offset), offsets))
    else:
        results = [correlate_offset(observations, aligner, offset) for offset in offsets]

    return OrderedDict((result.offset, result) for result in results)
