"""Greetings API: CRUD over a JSON-persisted collection of greetings."""

__version__ = "1.0.0"
