"""Planogram builder: price-book ingestion, shelf layout and CSV exports."""

__version__ = "0.1.0"
