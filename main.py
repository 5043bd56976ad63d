#!/usr/bin/env python3
"""
Main entry point for the timetable manager.
Provides options to run in different modes:
- CLI mode: Run timetable commands from the command line
- API mode: Start a REST API server
"""
import sys
import logging
import argparse

from timetabler.cli import main as cli_main, setup_logging
from timetabler.api import create_app
from timetabler.config import get_api_config, get_app_config


def parse_args():
    """Parse command-line arguments for the main entry point."""
    api_config = get_api_config()

    parser = argparse.ArgumentParser(
        description='Academic Timetable Manager',
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )

    parser.add_argument(
        '--mode',
        type=str,
        choices=['cli', 'api'],
        default='cli',
        help='Mode to run the timetable manager in'
    )

    parser.add_argument(
        '--port',
        type=int,
        default=api_config['port'],
        help='Port to run the API server on (only in API mode)'
    )

    parser.add_argument(
        '--host',
        type=str,
        default=api_config['host'],
        help='Host to bind the API server to (only in API mode)'
    )

    # Parse known args and pass the rest to the appropriate mode
    return parser.parse_known_args()


def main():
    """Main entry point."""
    args, remaining = parse_args()

    if args.mode == 'cli':
        cli_main(remaining)

    elif args.mode == 'api':
        app_config = get_app_config()
        setup_logging(app_config['log_level'])
        logging.getLogger(__name__).info(f"Starting API server on {args.host}:{args.port}")
        create_app().run(host=args.host, port=args.port, debug=app_config['debug'])

    else:
        print(f"Invalid mode: {args.mode}")
        sys.exit(1)


if __name__ == '__main__':
    main()
