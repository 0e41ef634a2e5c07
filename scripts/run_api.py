#!/usr/bin/env python
"""
API Server Entrypoint
======================
Starts the Trade Companies API using Uvicorn.

Usage:
    python scripts/run_api.py
    python scripts/run_api.py --port 8080
    python scripts/run_api.py --host 127.0.0.1 --port 8000 --reload

Environment Variables:
    DB_CONFIG_PATH: Path to YAML config (default: config/db_config.yml)
"""

import os
import sys
import argparse
from pathlib import Path

import uvicorn

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))


def print_banner():
    """Print the application banner."""
    print()
    print("=" * 70)
    print("  Trade Companies API")
    print("  Read-Only Company & Shipment Analytics")
    print("=" * 70)
    print()


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description='Trade Companies API Server',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s                           # Start on 0.0.0.0:8000
  %(prog)s --port 8080               # Start on port 8080
  %(prog)s --host 127.0.0.1          # Localhost only
  %(prog)s --reload                  # Auto-reload on code changes
  %(prog)s --workers 4               # Use 4 worker processes

API Documentation:
  Swagger UI: http://localhost:8000/docs
  ReDoc:      http://localhost:8000/redoc

Key Endpoints:
  GET /api/v1/health                 - Health check
  GET /api/v1/companies              - List companies
  GET /api/v1/companies/{name}       - Company detail
  GET /api/v1/analytics/stats        - Importer/exporter counts
  GET /api/v1/analytics/commodities  - Top commodities by weight
  GET /api/v1/analytics/monthly      - Weight shipped per month
        """
    )

    parser.add_argument(
        '--host',
        default='0.0.0.0',
        help='Host to bind to (default: 0.0.0.0)'
    )

    parser.add_argument(
        '--port',
        type=int,
        default=8000,
        help='Port to bind to (default: 8000)'
    )

    parser.add_argument(
        '--reload',
        action='store_true',
        help='Enable auto-reload for development'
    )

    parser.add_argument(
        '--workers',
        type=int,
        default=1,
        help='Number of worker processes (default: 1, use >1 for production)'
    )

    parser.add_argument(
        '--config',
        default='config/db_config.yml',
        help='Path to YAML config file (default: config/db_config.yml)'
    )

    parser.add_argument(
        '--log-level',
        default='info',
        choices=['debug', 'info', 'warning', 'error'],
        help='Logging level (default: info)'
    )

    parser.add_argument(
        '--log-file',
        default=None,
        help='Optional rotating log file'
    )

    args = parser.parse_args()

    # Settings for api.main, which reads them at import
    os.environ['DB_CONFIG_PATH'] = args.config
    os.environ['LOG_LEVEL'] = args.log_level.upper()
    if args.log_file:
        os.environ['LOG_FILE'] = args.log_file

    # Verify config exists
    if not Path(args.config).exists():
        print(f"ERROR: Config not found: {args.config}")
        sys.exit(1)

    print_banner()
    print(f"  Host:       {args.host}")
    print(f"  Port:       {args.port}")
    print(f"  Reload:     {args.reload}")
    print(f"  Workers:    {args.workers}")
    print(f"  Config:     {args.config}")
    print(f"  Log Level:  {args.log_level}")
    print()
    print(f"  API Docs:   http://{args.host if args.host != '0.0.0.0' else 'localhost'}:{args.port}/docs")
    print()
    print("=" * 70)
    print()

    uvicorn.run(
        "api.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        workers=args.workers if not args.reload else 1,  # Workers doesn't work with reload
        log_level=args.log_level
    )


if __name__ == '__main__':
    main()
