"""Pydantic schemas for request bodies."""
