"""Database layer for horadofrango application."""

from horadofrango.database.base import Database
from horadofrango.database.factories import create_sqlite_database

__all__ = ["Database", "create_sqlite_database"]
