"""Database configuration and utilities."""

from .session import Base, SessionLocal, engine, get_db, utcnow

__all__ = ["Base", "engine", "get_db", "SessionLocal", "utcnow"]
