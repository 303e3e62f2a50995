"""
High-level use cases for the Greetings API.

Service modules orchestrate a collection store to implement the business
rules (identity assignment, language uniqueness, filtering). Routers call
these services instead of touching the storage directly.
"""
