"""
Trade Companies - Sample Data Generator
Creates a synthetic shipments CSV for the csv store backend

Usage:
    python scripts/create_sample_data.py
    python scripts/create_sample_data.py --rows 5000 --output data/shipments.csv
"""

import sys
import argparse
from pathlib import Path
from datetime import datetime, timedelta
import random

sys.path.insert(0, str(Path(__file__).parent.parent))

import pandas as pd
from trade_engine.logging_config import setup_logging, get_logger
from trade_engine.records import RECORD_COLUMNS


def generate_sample_data(num_rows: int = 1000, seed: int = 42) -> pd.DataFrame:
    """Generate sample shipment rows (weights in metric tonnes)"""
    rng = random.Random(seed)

    commodities = [
        'FRESH GRAPES',
        'COFFEE BEANS',
        'RICE',
        'RAW CANE SUGAR',
        'SOYA BEAN MEAL',
        'COTTON',
        'STEEL COILS',
        'COPPER CATHODES'
    ]
    importers = [
        ('ABC TRADING LLC', 'USA', 'https://abctrading.example'),
        ('METRO WHOLESALE', 'GERMANY', None),
        ('SUNRISE TRADERS', 'UAE', 'https://sunrise.example'),
        ('OCEAN IMPORTS', 'KENYA', None),
        ('GLOBAL FOODS CO', 'USA', 'https://globalfoods.example'),
        ('CONTINENTAL EXPORTS', 'GERMANY', None)
    ]
    exporters = [
        ('RELIABLE EXPORTS INC', 'INDIA', 'https://reliable.example'),
        ('PRIME SUPPLIERS CO', 'CHINA', None),
        ('AGRO EXPORTS', 'INDIA', None),
        ('FRESH FARMS PVT LTD', 'KENYA', 'https://freshfarms.example'),
        # Also appears as an importer: listed once per role
        ('CONTINENTAL EXPORTS', 'GERMANY', 'https://continental.example')
    ]

    data = []
    start_date = datetime(2023, 1, 1)

    for _ in range(num_rows):
        importer = rng.choice(importers)
        exporter = rng.choice(exporters)

        row = {
            'importer_name': importer[0],
            'importer_country': importer[1],
            'importer_website': importer[2],
            'exporter_name': exporter[0],
            'exporter_country': exporter[1],
            'exporter_website': exporter[2],
            'commodity_name': rng.choice(commodities),
            'weight_tonnes': round(rng.uniform(0.5, 80), 3),
            'shipment_date': (start_date + timedelta(days=rng.randint(0, 545))).strftime('%Y-%m-%d')
        }

        data.append(row)

    return pd.DataFrame(data, columns=list(RECORD_COLUMNS))


def main():
    """Generate the sample CSV"""
    parser = argparse.ArgumentParser(description='Generate a synthetic shipments CSV')
    parser.add_argument('--rows', type=int, default=2000, help='Number of shipments (default: 2000)')
    parser.add_argument('--output', default='data/shipments.csv', help='Output CSV path')
    parser.add_argument('--seed', type=int, default=42, help='Random seed (default: 42)')
    args = parser.parse_args()

    setup_logging(log_level='INFO')
    logger = get_logger(__name__)

    logger.info("=" * 80)
    logger.info("Trade Companies Sample Data Generator")
    logger.info("=" * 80)

    output = Path(args.output)
    output.parent.mkdir(parents=True, exist_ok=True)

    logger.info(f"Generating {args.rows} shipments...")
    df = generate_sample_data(args.rows, seed=args.seed)
    df.to_csv(output, index=False)

    logger.info(f"  ✓ Created: {output}")
    logger.info("=" * 80)
    logger.info("Next steps:")
    logger.info("  1. Set store.backend: csv and store.path in config/db_config.yml")
    logger.info("  2. Run: python scripts/run_api.py")


if __name__ == "__main__":
    main()
