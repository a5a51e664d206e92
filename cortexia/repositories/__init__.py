"""
Repositories
============

Storage interface and backends for the domain records.
"""

from cortexia.repositories.base import InMemoryRepository, Repository
from cortexia.repositories.sql import SqlRepository
from cortexia.repositories.store import LifeSnapshot, LifeStore

__all__ = [
    "InMemoryRepository",
    "Repository",
    "SqlRepository",
    "LifeSnapshot",
    "LifeStore",
]
