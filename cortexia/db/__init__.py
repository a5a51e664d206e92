"""
Database Module
===============

Provides database session management and base model.
"""

from cortexia.db.base import Base
from cortexia.db.session import session_scope, init_db, close_db

__all__ = ["Base", "session_scope", "init_db", "close_db"]
