"""
News / Price Correlation Analyzer
Ties price and news retrieval, sentiment scoring and the correlation report together
"""

import matplotlib.pyplot as plt

from correlation import OFFSETS, CorrelationStatus, build_report, offset_label
from price_index import PriceVariationIndex
from sentiment import SCORE_LABELS, SentimentScorer
from stock_data import StockDataFetcher


class NewsPriceAnalyzer:
    """
    Main class for correlating news sentiment with daily price moves
    """

    def __init__(self, ticker='TSLA', period='3mo', start=None, end=None,
                 max_articles=100, offsets=OFFSETS, scorer=None, fetcher=None):
        """
        Args:
            ticker: Stock ticker symbol
            period: Historical data period, used when start/end are not given
            start: Optional first date of the analysis window
            end: Optional last date of the analysis window
            max_articles: Maximum number of news items to fetch
            offsets: Trading-day offsets to report, in order
            scorer: Sentiment classifier (defaults to SentimentScorer)
            fetcher: Data fetcher (defaults to StockDataFetcher)
        """
        self.ticker = ticker.upper()
        self.max_articles = max_articles
        self.offsets = tuple(offsets)
        if not self.offsets:
            raise ValueError("At least one offset is required")

        self.data_fetcher = fetcher or StockDataFetcher(self.ticker, period=period, start=start, end=end)
        self.scorer = scorer or SentimentScorer()

        self.prices = None
        self.index = None
        self.news_items = None
        self.observations = None
        self.report = None

    def load_prices(self, csv_path=None):
        """Fetch prices (or read them from csv_path) and build the variation index"""
        if csv_path:
            self.prices = self.data_fetcher.load_prices_csv(csv_path)
        else:
            self.prices = self.data_fetcher.fetch_prices()

        self.index = PriceVariationIndex(self.prices)
        print(f"✓ Price variation index built: {len(self.index)} trading days")
        return self.index

    def load_news(self, csv_path=None):
        """Fetch news (or read them from csv_path) and score every abstract"""
        if csv_path:
            self.news_items = self.data_fetcher.load_news_csv(csv_path)
        else:
            self.news_items = self.data_fetcher.fetch_news(max_articles=self.max_articles)

        print("Running sentiment analysis on news abstracts...")
        self.observations = self.scorer.score_items(self.news_items)
        print(f"✓ Scored {len(self.observations)} news items")
        return self.observations

    def build_report(self, workers=None):
        """Correlation report for every configured offset"""
        if self.index is None:
            self.load_prices()
        if self.observations is None:
            self.load_news()

        self.report = build_report(self.observations, self.index, offsets=self.offsets, workers=workers)
        return self.report

    def get_summary(self):
        """Text rendering of the correlation report"""
        if self.report is None:
            return None

        scale = ', '.join(f"{score} = {label}" for score, label in SCORE_LABELS.items())

        summary = f"\n{'='*60}\n"
        summary += f"News Sentiment vs Price Variation for {self.ticker}\n"
        summary += f"{'='*60}\n"
        summary += f"Sentiment scale: {scale}\n"
        summary += f"Trading days: {len(self.index)}  News items: {len(self.observations)}\n"

        for offset, result in self.report.items():
            summary += f"\n--- {offset_label(offset).capitalize()} ---\n"
            for sentiment, variation in zip(result.sentiments, result.variations):
                summary += f"{sentiment:+d}\t{variation:+.2f}\n"

            excluded = len(self.observations) - result.num_pairs
            if excluded:
                summary += f"({excluded} news items without a trading day at this offset)\n"

            if result.status is CorrelationStatus.OK:
                summary += f"Pearson correlation: {result.coefficient:+.4f}\n"
            elif result.status is CorrelationStatus.INSUFFICIENT_DATA:
                summary += f"Pearson correlation: insufficient data ({result.num_pairs} pairs) ⚠️\n"
            else:
                summary += "Pearson correlation: undefined (no variance) ⚠️\n"

        summary += f"{'='*60}\n"
        return summary

    def plot_report(self, save_path=None):
        """Scatter of sentiment against price variation, one panel per offset"""
        if self.report is None:
            self.build_report()

        fig, axes = plt.subplots(1, len(self.report), figsize=(4 * len(self.report), 4), sharey=True)
        if len(self.report) == 1:
            axes = [axes]

        for ax, (offset, result) in zip(axes, self.report.items()):
            ax.scatter(result.sentiments, result.variations, alpha=0.6)
            ax.axhline(0, color='gray', linewidth=0.8)
            title = offset_label(offset)
            if result.ok:
                title += f"\nr = {result.coefficient:+.3f}"
            else:
                title += f"\n({result.status.value})"
            ax.set_title(title, fontsize=10)
            ax.set_xlabel('Sentiment')
            ax.set_xticks(sorted(SCORE_LABELS))
            ax.grid(True, alpha=0.3)

        axes[0].set_ylabel('Price Variation ($)')
        fig.suptitle(f'{self.ticker} - News Sentiment vs Price Variation')
        fig.tight_layout()

        if save_path:
            fig.savefig(save_path, dpi=150, bbox_inches='tight')
            print(f"✓ Plot saved to {save_path}")
        else:
            plt.show()

        return fig
