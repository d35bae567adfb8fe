#!/usr/bin/env python3
"""
Start the MoodGrid import/export service.
Usage: python scripts/start_web.py [--config conf.json] [--host HOST] [--port PORT] [--dev]

The config file must provide `hostname` and `port`; without it the
service refuses to start.
"""

import argparse
import logging
import sys
from pathlib import Path

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import uvicorn

from dashboard.app import create_app
from dashboard.config import ConfigError, load_settings
from utils.logger import setup_logger

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="MoodGrid import/export service")
    parser.add_argument("--config", help="path to the JSON config (default: conf.json or $MOODGRID_CONFIG)")
    parser.add_argument("--host", help="override the configured bind address")
    parser.add_argument("--port", type=int, help="override the configured port")
    parser.add_argument("--dev", action="store_true", help="debug logging and API docs")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)

    try:
        settings = load_settings(args.config)
    except ConfigError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    updates = {}
    if args.host:
        updates["DASHBOARD_HOST"] = args.host
    if args.port:
        updates["DASHBOARD_PORT"] = args.port
    if args.dev:
        updates.update(DEBUG=True, LOG_LEVEL="DEBUG", ENVIRONMENT="development")
    if updates:
        settings = settings.model_copy(update=updates)

    setup_logger(settings.log_file, level=settings.LOG_LEVEL, fmt=settings.LOG_FORMAT)
    logger.info(f"✅ Settings loaded: {settings.APP_NAME} ({settings.ENVIRONMENT})")

    app = create_app(settings)
    uvicorn.run(
        app,
        host=settings.DASHBOARD_HOST,
        port=settings.DASHBOARD_PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
