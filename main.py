"""ASGI Entry Point - Root Module.

Lets the service be started with `uvicorn main:app`.
Configuration comes from CONFIG_PATH or environment variables.
"""

import logging
import os

from quakewatch.api import create_app


log_level = os.environ.get("LOG_LEVEL", "INFO").upper()
logging.basicConfig(
    level=getattr(logging, log_level, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

app = create_app()

__all__ = ["app"]
