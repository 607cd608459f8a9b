"""PHIVOLCS earthquake feed scraper and API."""

__version__ = "1.0.0"
