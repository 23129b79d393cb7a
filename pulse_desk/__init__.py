"""Pulse Desk - agency CRM, task board and contract dashboard."""

__version__ = "0.1.0"
