"""Local server entry point.

Usage:
    python -m quakewatch [--host HOST] [--port PORT] [--config PATH]
"""

import argparse
import logging
import os

import uvicorn

from quakewatch.api import create_app
from quakewatch.shell.config_loader import load_config, load_config_from_env


def main() -> None:
    parser = argparse.ArgumentParser(description="Run the PHIVOLCS earthquake API server")
    parser.add_argument("--config", help="Path to YAML config (default: CONFIG_PATH or env vars)")
    parser.add_argument("--host", help="Interface to bind (overrides config)")
    parser.add_argument("--port", type=int, help="Port to listen on (overrides config)")
    args = parser.parse_args()

    log_level = os.environ.get("LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logger = logging.getLogger("quakewatch")

    config_path = args.config or os.environ.get("CONFIG_PATH")
    config = load_config(config_path) if config_path else load_config_from_env()

    if args.host:
        config.host = args.host
    if args.port:
        config.port = args.port

    app = create_app(config)

    logger.info("PHIVOLCS Earthquake Monitor running on http://%s:%d", config.host, config.port)
    logger.info("API endpoints: /api/health, /api/earthquakes, /api/earthquakes/latest, /api/earthquakes/stats")

    uvicorn.run(app, host=config.host, port=config.port, log_level=log_level.lower())


if __name__ == "__main__":
    main()
