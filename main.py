"""
Main entry point for the news sentiment / stock price correlation study
Fetches prices and news, scores sentiment and reports correlations per trading-day offset
"""

import argparse
import sys

from news_price import NewsPriceAnalyzer
from price_index import DataError


def run_analysis(ticker, period='3mo', start=None, end=None, prices_csv=None, news_csv=None,
                 max_articles=100, plot=False, save_plot=None):
    """
    Run the full analysis and print the report

    Args:
        ticker: Stock ticker symbol
        period: Historical data period
        start: Optional first date (ISO)
        end: Optional last date (ISO)
        prices_csv: Read prices from this CSV instead of downloading them
        news_csv: Read news from this CSV instead of downloading them
        max_articles: Maximum number of news items to fetch
        plot: Show a scatter plot per offset
        save_plot: Save the scatter plot to this path
    """
    print(f"\n{'='*70}")
    print(f"News Sentiment vs Stock Price - {ticker}")
    print(f"{'='*70}\n")

    analyzer = NewsPriceAnalyzer(ticker, period=period, start=start, end=end, max_articles=max_articles)

    print("Step 1: Loading stock prices...")
    analyzer.load_prices(csv_path=prices_csv)

    print("\nStep 2: Loading news and running sentiment analysis...")
    analyzer.load_news(csv_path=news_csv)

    print("\nStep 3: Computing correlations...")
    analyzer.build_report()
    print(analyzer.get_summary())

    if plot or save_plot:
        print("Generating visualizations...")
        analyzer.plot_report(save_path=save_plot)

    return analyzer


def main(argv=None):
    parser = argparse.ArgumentParser(description='News Sentiment vs Stock Price Correlation')

    parser.add_argument('--ticker', type=str, default='TSLA',
                        help='Stock ticker symbol')

    parser.add_argument('--period', type=str, default='3mo',
                        help='Historical data period (e.g., 1mo, 3mo, 6mo, 1y)')

    parser.add_argument('--start', type=str, default=None,
                        help='First date of the window (YYYY-MM-DD), overrides --period')

    parser.add_argument('--end', type=str, default=None,
                        help='Last date of the window (YYYY-MM-DD)')

    parser.add_argument('--prices-csv', type=str, default=None,
                        help='Read prices from a Yahoo Finance CSV download')

    parser.add_argument('--news-csv', type=str, default=None,
                        help='Read news from a CSV file with date and abstract columns')

    parser.add_argument('--max-articles', type=int, default=100,
                        help='Maximum number of news articles to fetch')

    parser.add_argument('--plot', action='store_true',
                        help='Show a scatter plot per offset')

    parser.add_argument('--save-plot', type=str, default=None,
                        help='Save the scatter plot to this path')

    args = parser.parse_args(argv)

    try:
        run_analysis(
            ticker=args.ticker,
            period=args.period,
            start=args.start,
            end=args.end,
            prices_csv=args.prices_csv,
            news_csv=args.news_csv,
            max_articles=args.max_articles,
            plot=args.plot,
            save_plot=args.save_plot
        )
    except DataError as e:
        print(f"✗ Cannot build report: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
