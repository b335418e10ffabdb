"""
Command line entry point.

Loads reference tables from a directory of CSV files, recommends a blend and
prints the buyer-facing report (or the full scored ranking).
"""

import argparse
import logging
import sys

import pandas as pd

from .blend_report import build_blend_report, format_report
from .blend_scoring import BlendScoringEngine
from .config import DEFAULT_PRIORITY, FORMAT_UNFORMED, PRIORITIES, US_SERVING_G
from .country import get_country_profile
from .data_loader import load_tables_from_csv

RANKING_COLUMNS = ['rank', 'recipe_name', 'trim_id', 'cost', 'co2', 'fiber', 'protein', 'nutrition', 'score']


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='beefblend',
        description="Recommend a shiitake-extract beef blend for a fat ceiling and priority",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m beefblend --tables data/ --country UK --fat 0.2
  python -m beefblend --tables data/ --country US --format "Burger / Meatball" --fat 0.2 --priority cost
  python -m beefblend --tables data/ --country EU --fat 0.15 --must-fiber --ranking
        """
    )
    parser.add_argument(
        '--tables',
        required=True,
        help='Directory with beef_prices.csv, recipes.csv, nutrition.csv, co2.csv '
             '(and optionally scoring_config.csv)'
    )
    parser.add_argument(
        '--country',
        default='US',
        help='Country name or code (default: US)'
    )
    parser.add_argument(
        '--format',
        dest='format_name',
        default=FORMAT_UNFORMED,
        help=f"Product format (default: '{FORMAT_UNFORMED}')"
    )
    parser.add_argument(
        '--fat',
        type=float,
        required=True,
        help='Fat ceiling as a fraction, e.g. 0.2 for 80CL'
    )
    parser.add_argument(
        '--priority',
        choices=PRIORITIES,
        default=DEFAULT_PRIORITY,
        help=f"Scoring priority (default: {DEFAULT_PRIORITY})"
    )
    parser.add_argument(
        '--must-fiber',
        action='store_true',
        help='Only consider blends that qualify as high in fiber'
    )
    parser.add_argument(
        '--must-protein',
        action='store_true',
        help='Only consider blends that qualify as high in protein'
    )
    parser.add_argument(
        '--per-serving',
        action='store_true',
        help=f"Show the nutrition comparison per {US_SERVING_G}g serving"
    )
    parser.add_argument(
        '--ranking',
        action='store_true',
        help='Print every scored candidate instead of the report'
    )
    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Debug logging'
    )
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(levelname)s %(name)s: %(message)s',
    )

    try:
        country = get_country_profile(args.country)
        tables, overrides = load_tables_from_csv(args.tables, country.code)
    except (ValueError, FileNotFoundError) as e:
        print(f"❌ ERROR: {e}", file=sys.stderr)
        return 1

    if tables.is_empty():
        print(f"❌ ERROR: No data found for {country.code}", file=sys.stderr)
        return 1

    engine = BlendScoringEngine(tables, country, overrides=overrides)

    if args.ranking:
        ranking = engine.ranking(args.format_name, args.fat, args.priority, args.must_fiber, args.must_protein)
        if ranking.empty:
            print(f"No candidates for '{args.format_name}'")
            return 1
        with pd.option_context('display.width', 200, 'display.max_rows', None):
            print(ranking[RANKING_COLUMNS].to_string(index=False, float_format=lambda v: f"{v:.4f}"))
        return 0

    recommendation = engine.recommend(args.format_name, args.fat, args.priority, args.must_fiber, args.must_protein)
    report = build_blend_report(
        tables,
        country,
        args.format_name,
        args.fat,
        recommendation,
        serving_g=US_SERVING_G if args.per_serving else None,
    )
    print(format_report(report))
    return 0


if __name__ == "__main__":
    sys.exit(main())
