"""Synthetic fund-transfer generator for JSON-RPC load testing."""

__version__ = "0.1.0"
