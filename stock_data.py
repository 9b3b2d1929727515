"""
Stock Data Fetcher
Fetches daily closing prices and news abstracts for a single ticker
"""

from datetime import datetime, timezone

import pandas as pd
import yfinance as yf

from price_index import to_date


class StockDataFetcher:
    """Fetch closing prices and dated news items for one stock"""

    def __init__(self, symbol, period='3mo', start=None, end=None):
        """
        Initialize stock data fetcher

        Args:
            symbol: Stock ticker symbol (e.g., 'TSLA', 'AAPL')
            period: Time period for historical data (e.g., '1mo', '3mo', '6mo', '1y')
            start: Optional first date (overrides period together with end)
            end: Optional last date
        """
        self.symbol = symbol.upper()
        self.period = period
        self.start = to_date(start) if start else None
        self.end = to_date(end) if end else None
        self.data = None
        self.news_data = []

    def _ticker(self):
        return yf.Ticker(self.symbol)

    def fetch_prices(self, start=None, end=None):
        """
        Fetch historical closing prices

        Args:
            start: Optional first date, overrides the fetcher's window for this call
            end: Optional last date, overrides the fetcher's window for this call

        Returns:
            List of (date, close) tuples in ascending date order
        """
        try:
            start, end = self._window(start, end)
            ticker = self._ticker()
            if start or end:
                self.data = ticker.history(start=start, end=end)
            else:
                self.data = ticker.history(period=self.period)

            if self.data is None or self.data.empty:
                raise ValueError(f"No data found for symbol {self.symbol}")

        except Exception as e:
            print(f"✗ Error fetching prices for {self.symbol}: {e}")
            raise

        prices = frame_to_prices(self.data, 'Close')
        print(f"✓ Fetched {len(prices)} days of prices for {self.symbol}")
        return prices

    def load_prices_csv(self, path, price_column=None):
        """
        Read prices from a Yahoo Finance style CSV download

        Args:
            path: CSV file with a Date column
            price_column: Column to use; defaults to 'Adj Close', then 'Close'

        Returns:
            List of (date, close) tuples in ascending date order
        """
        frame = pd.read_csv(path)
        if price_column is None:
            price_column = 'Adj Close' if 'Adj Close' in frame.columns else 'Close'
        if price_column not in frame.columns:
            raise ValueError(f"Column '{price_column}' not found in {path}")

        frame = frame.set_index(pd.to_datetime(frame['Date']))
        self.data = frame
        prices = frame_to_prices(frame, price_column)
        print(f"✓ Loaded {len(prices)} days of prices from {path}")
        return prices

    def fetch_news(self, max_articles=100, start=None, end=None):
        """
        Fetch recent news articles for the stock

        Args:
            max_articles: Maximum number of articles to fetch
            start: Optional first publication date, overrides the fetcher's window
            end: Optional last publication date, overrides the fetcher's window

        Returns:
            List of (date, abstract) tuples in arrival order
        """
        start, end = self._window(start, end)
        try:
            news = self._ticker().news
        except Exception as e:
            print(f"⚠ Error fetching news for {self.symbol}: {e}")
            return []

        if not news:
            print(f"⚠ No news found for {self.symbol}")
            return []

        self.news_data = []
        for article in news[:max_articles]:
            item = parse_article(article)
            if item is None or not self._in_window(item[0], start, end):
                continue
            self.news_data.append(item)

        print(f"✓ Fetched {len(self.news_data)} news articles for {self.symbol}")
        return self.news_data

    def load_news_csv(self, path, date_column='date', text_column='abstract'):
        """
        Read news items from a CSV file

        Args:
            path: CSV file with a publication date and an abstract per row
            date_column: Publication date/timestamp column
            text_column: Abstract column

        Returns:
            List of (date, abstract) tuples in file order
        """
        frame = pd.read_csv(path)
        missing = [c for c in (date_column, text_column) if c not in frame.columns]
        if missing:
            raise ValueError(f"Columns {missing} not found in {path}")

        frame = frame.dropna(subset=[date_column, text_column])
        self.news_data = []
        for published, text in zip(frame[date_column], frame[text_column]):
            day = to_date(str(published).split('T')[0])
            if self._in_window(day, self.start, self.end) and str(text).strip():
                self.news_data.append((day, str(text)))

        print(f"✓ Loaded {len(self.news_data)} news articles from {path}")
        return self.news_data

    def _window(self, start, end):
        start = to_date(start) if start else self.start
        end = to_date(end) if end else self.end
        return start, end

    @staticmethod
    def _in_window(day, start, end):
        if start and day < start:
            return False
        if end and day > end:
            return False
        return True


def frame_to_prices(frame, column):
    """Sorted, de-duplicated (date, close) tuples from a date-indexed DataFrame"""
    closes = frame[column].dropna()
    series = pd.Series(closes.values, index=[ts.date() for ts in closes.index])
    series = series[~series.index.duplicated(keep='last')].sort_index()
    return [(day, float(price)) for day, price in series.items()]


def parse_article(article):
    """
    Extract (date, abstract) from a yfinance news item

    Handles both the flat layout (title, providerPublishTime) and the
    nested 'content' layout (title, summary, pubDate).
    """
    content = article.get('content') or article
    text = content.get('summary') or content.get('title') or ''
    if not text.strip():
        return None

    if content.get('pubDate'):
        day = to_date(content['pubDate'].split('T')[0])
    elif article.get('providerPublishTime'):
        day = datetime.fromtimestamp(article['providerPublishTime'], tz=timezone.utc).date()
    else:
        return None

    return day, text.strip()
