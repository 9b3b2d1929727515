"""
End-to-end tests for the analyzer and the command line, without network access
"""

from datetime import date

import matplotlib
matplotlib.use('Agg')

import matplotlib.pyplot as plt
import pytest

import main
import news_price
from correlation import CorrelationStatus
from news_price import NewsPriceAnalyzer
from price_index import DataError
from sentiment import SentimentObservationSet


PRICES = [
    (date(2021, 9, 1), 100.0),
    (date(2021, 9, 2), 101.0),
    (date(2021, 9, 3), 99.0),
    (date(2021, 9, 7), 99.5),
    (date(2021, 9, 8), 102.5),
    (date(2021, 9, 9), 101.0),
]

NEWS = [
    (date(2021, 9, 2), 'Good.'),
    (date(2021, 9, 3), 'Bad.'),
    (date(2021, 9, 4), 'Good.'),
    (date(2021, 9, 8), 'Bad.'),
]


class FakeFetcher:
    def __init__(self, prices=PRICES, news=NEWS):
        self.prices = prices
        self.news = news
        self.csv_paths = []

    def fetch_prices(self):
        return list(self.prices)

    def fetch_news(self, max_articles=100):
        return list(self.news[:max_articles])

    def load_prices_csv(self, path):
        self.csv_paths.append(path)
        return list(self.prices)

    def load_news_csv(self, path):
        self.csv_paths.append(path)
        return list(self.news)


class FakeScorer:
    def score_items(self, items):
        return SentimentObservationSet((d, 1 if text == 'Good.' else -1) for d, text in items)


@pytest.fixture
def analyzer():
    return NewsPriceAnalyzer('tsla', fetcher=FakeFetcher(), scorer=FakeScorer())


def test_build_report_loads_inputs_on_demand(analyzer):
    report = analyzer.build_report()
    assert analyzer.ticker == 'TSLA'
    assert len(analyzer.index) == 5
    assert len(analyzer.observations) == 4
    assert list(report) == [0, -2, -1, 1, 2]

    assert report[0].sentiments == (1, -1, 1, -1)
    assert report[0].variations == (1.0, -2.0, 0.5, 3.0)
    assert report[0].status is CorrelationStatus.OK


def test_boundary_observations_are_excluded_per_offset(analyzer):
    report = analyzer.build_report()
    # 2021-09-02 has no predecessor; 2021-09-08 has one successor only
    assert report[-1].num_pairs == 3
    assert report[2].num_pairs == 3
    assert report[2].sentiments == (1, -1, 1)


def test_summary_lists_every_offset(analyzer):
    assert analyzer.get_summary() is None
    analyzer.build_report()
    summary = analyzer.get_summary()
    assert 'News Sentiment vs Price Variation for TSLA' in summary
    assert 'Same day of news date' in summary
    assert '2 days before news date' in summary
    assert '2 days after news date' in summary
    assert 'Pearson correlation' in summary


def test_summary_reports_markers():
    analyzer = NewsPriceAnalyzer(
        'TSLA', fetcher=FakeFetcher(news=[(date(2021, 9, 3), 'Good.'), (date(2021, 9, 3), 'Good.')]),
        scorer=FakeScorer())
    analyzer.build_report()
    summary = analyzer.get_summary()
    assert 'undefined' in summary

    analyzer = NewsPriceAnalyzer(
        'TSLA', fetcher=FakeFetcher(news=[(date(2021, 9, 3), 'Good.')]), scorer=FakeScorer())
    analyzer.build_report()
    assert 'insufficient data' in analyzer.get_summary()


def test_csv_paths_are_used_when_given(analyzer):
    analyzer.load_prices(csv_path='prices.csv')
    analyzer.load_news(csv_path='news.csv')
    assert analyzer.data_fetcher.csv_paths == ['prices.csv', 'news.csv']


def test_single_price_is_a_data_error():
    analyzer = NewsPriceAnalyzer('TSLA', fetcher=FakeFetcher(prices=PRICES[:1]), scorer=FakeScorer())
    with pytest.raises(DataError):
        analyzer.build_report()


def test_plot_report_saves_figure(analyzer, tmp_path):
    path = tmp_path / 'report.png'
    fig = analyzer.plot_report(save_path=str(path))
    assert path.exists()
    assert len(fig.axes) == 5
    plt.close(fig)


def test_main_runs_with_csv_inputs(monkeypatch, capsys):
    created = []

    def fake_analyzer(ticker, **kwargs):
        a = NewsPriceAnalyzer(ticker, fetcher=FakeFetcher(), scorer=FakeScorer())
        created.append(kwargs)
        return a

    monkeypatch.setattr(main, 'NewsPriceAnalyzer', fake_analyzer)
    code = main.main(['--ticker', 'TSLA', '--start', '2021-09-01', '--end', '2021-12-01',
                      '--prices-csv', 'TSLA.csv', '--news-csv', 'news.csv', '--max-articles', '20'])
    assert code == 0
    assert created == [{'period': '3mo', 'start': '2021-09-01', 'end': '2021-12-01', 'max_articles': 20}]
    assert 'Pearson correlation' in capsys.readouterr().out


def test_main_reports_data_error(monkeypatch, capsys):
    monkeypatch.setattr(
        main, 'NewsPriceAnalyzer',
        lambda ticker, **kwargs: NewsPriceAnalyzer(
            ticker, fetcher=FakeFetcher(prices=[]), scorer=FakeScorer()))
    assert main.main([]) == 1
    assert '✗' in capsys.readouterr().out


def test_default_collaborators(monkeypatch):
    monkeypatch.setattr(news_price, 'SentimentScorer', lambda: 'scorer')
    analyzer = NewsPriceAnalyzer('aapl', period='6mo', start='2021-09-01')
    assert analyzer.scorer == 'scorer'
    assert analyzer.data_fetcher.symbol == 'AAPL'
    assert analyzer.data_fetcher.start == date(2021, 9, 1)


def test_empty_offsets_are_rejected():
    with pytest.raises(ValueError):
        NewsPriceAnalyzer('TSLA', offsets=(), fetcher=FakeFetcher(), scorer=FakeScorer())
