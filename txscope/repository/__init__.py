"""
Repository pattern: data access that works the same with a pool or inside a transaction.
"""

from .base import AsyncBaseRepository, BaseRepository
from .unit_of_work import AsyncUnitOfWork, UnitOfWork

__all__ = ["BaseRepository", "AsyncBaseRepository", "UnitOfWork", "AsyncUnitOfWork"]
