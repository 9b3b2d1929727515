"""
News Sentiment Observations
Scores news abstracts on a five-level scale and keeps the dated observations
"""

import numbers
import re
from collections import namedtuple

import pandas as pd
from vaderSentiment.vaderSentiment import SentimentIntensityAnalyzer

from price_index import to_date


MIN_SCORE = -2
MAX_SCORE = 2

# Sentiment scale: -2 = very negative, -1 = negative, 0 = neutral, 1 = positive, 2 = very positive
SCORE_LABELS = {
    -2: 'very negative',
    -1: 'negative',
    0: 'neutral',
    1: 'positive',
    2: 'very positive',
}

_SENTENCE_END = re.compile(r'(?<=[.!?])\s+')


class SentimentObservation(namedtuple('SentimentObservation', ['date', 'score'])):
    """A news item's publication date and its sentiment score"""

    __slots__ = ()

    def __new__(cls, date, score):
        if isinstance(score, bool) or not isinstance(score, numbers.Integral):
            raise ValueError(f"Sentiment score must be an integer, got {score!r}")
        if not MIN_SCORE <= score <= MAX_SCORE:
            raise ValueError(f"Sentiment score {score} outside [{MIN_SCORE}, {MAX_SCORE}]")
        return super().__new__(cls, to_date(date), int(score))


class SentimentObservationSet:
    """Observations in arrival order; several may share a date"""

    def __init__(self, observations=()):
        self._observations = []
        for obs in observations:
            self.add(*obs)

    def add(self, date, score):
        observation = SentimentObservation(date, score)
        self._observations.append(observation)
        return observation

    def __len__(self):
        return len(self._observations)

    def __iter__(self):
        return iter(self._observations)

    def __getitem__(self, idx):
        return self._observations[idx]

    def scores(self):
        return [obs.score for obs in self._observations]

    def to_frame(self):
        """Observations as a DataFrame with 'date' and 'score' columns"""
        return pd.DataFrame(self._observations, columns=['date', 'score'])


def bucket_compound(compound):
    """Map a VADER compound polarity in [-1, 1] onto the five-level scale"""
    if compound <= -0.6:
        return -2
    if compound < -0.05:
        return -1
    if compound <= 0.05:
        return 0
    if compound < 0.6:
        return 1
    return 2


def split_sentences(text):
    return [s.strip() for s in _SENTENCE_END.split(text or '') if s.strip()]


class SentimentScorer:
    """Five-level sentiment classifier for news abstracts built on VADER"""

    def __init__(self, analyzer=None):
        self.analyzer = analyzer or SentimentIntensityAnalyzer()

    def score_sentence(self, sentence):
        return bucket_compound(self.analyzer.polarity_scores(sentence)['compound'])

    def score(self, text):
        """
        Score an abstract

        A single sentence scores its own class. Over several sentences the
        most extreme class wins; on a tie the earlier sentence is kept.

        Args:
            text: News abstract

        Returns:
            Integer score in [-2, 2]
        """
        score = 0
        for sentence in split_sentences(text):
            current = self.score_sentence(sentence)
            if abs(current) > abs(score):
                score = current
        return score

    def score_items(self, items):
        """
        Turn (date, abstract) tuples into a SentimentObservationSet

        Args:
            items: Iterable of (publication date, abstract text)

        Returns:
            SentimentObservationSet in the same order as items
        """
        observations = SentimentObservationSet()
        for date, text in items:
            observations.add(date, self.score(text))
        return observations
