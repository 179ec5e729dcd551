"""Composable note filters: evaluation, registry-driven construction and saved filters."""

__version__ = "1.0.0"
