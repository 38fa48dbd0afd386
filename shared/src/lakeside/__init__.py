"""Lakeside Retreat booking domain: models, services and utilities."""

__version__ = "0.1.0"
