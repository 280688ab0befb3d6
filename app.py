#!/usr/bin/env python3
"""
Run script for teamstock
"""

import argparse
import os

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

from teamstock import create_app  # noqa: E402
from teamstock.build import current_context  # noqa: E402
from teamstock.logger import get_logger  # noqa: E402

logger = get_logger("teamstock.run")


def parse_arguments():
    parser = argparse.ArgumentParser(description='teamstock inventory and team API')
    parser.add_argument('--seed-demo-data', action='store_true',
                        help='Insert demo records into empty collections before starting')
    parser.add_argument('--seed-only', action='store_true',
                        help='Insert demo data and exit without starting the server')
    return parser.parse_args()


def _flag(name, default='False'):
    return os.environ.get(name, default).lower() in ('true', '1', 'yes', 'on')


if __name__ == '__main__':
    args = parse_arguments()
    app = create_app()

    if args.seed_demo_data or args.seed_only:
        from teamstock.debug.demo_data_manager import insert_demo_data
        with app.app_context():
            summary = insert_demo_data(current_context())
        logger.info(f"Demo data: {summary}")
        if args.seed_only:
            raise SystemExit(0)

    debug_mode = _flag('FLASK_DEBUG')
    use_reloader = _flag('USE_RELOADER')
    host = os.environ.get('FLASK_HOST', '127.0.0.1')
    port = int(os.environ.get('FLASK_PORT', '5000'))

    if debug_mode:
        logger.warning("DEBUG MODE ENABLED - Do not use in production!")

    logger.info(f"Starting server on {host}:{port} (debug={debug_mode}, reloader={use_reloader})")
    app.run(debug=debug_mode, host=host, port=port, use_reloader=use_reloader)
