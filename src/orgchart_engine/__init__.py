"""Organizational chart hierarchy and survey access-policy engine."""

__version__ = "0.1.0"
