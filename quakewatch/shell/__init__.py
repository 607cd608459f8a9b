"""Imperative Shell - I/O and side effects.

This module contains all code that interacts with external systems
or holds process state:
- PHIVOLCS page client (HTTP)
- Record cache (shared in-memory state)
- Configuration loading (environment/files)

Keep this layer thin and simple. All business logic should be in core.
"""

from quakewatch.shell.phivolcs_client import PhivolcsClient
from quakewatch.shell.record_cache import RecordCache
from quakewatch.shell.config_loader import load_config, load_config_from_env

__all__ = [
    "PhivolcsClient",
    "RecordCache",
    "load_config",
    "load_config_from_env",
]
