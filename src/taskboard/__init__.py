"""taskboard: a minimal task tracker (REST API over an in-memory store + console client)."""

__version__ = "0.1.0"
