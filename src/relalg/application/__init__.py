"""Application layer for the relational algebra engine.

Exports:
    Database:
        - Database: Table registry and operator entry point
"""

from relalg.application.database import Database

__all__ = [
    "Database",
]
