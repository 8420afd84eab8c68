"""Lightweight GELF log collector: UDP ingestion with an in-memory query API."""

__version__ = "0.1.0"
