"""
Core utilities shared across the Greetings API.

This package hosts configuration helpers (env vars, paths), logging setup and
the error taxonomy used by services, repositories and routers.
"""
