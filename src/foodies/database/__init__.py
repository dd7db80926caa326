"""PostgreSQL database layer.

This module provides:
- Connection pool management
- Schema creation
- Repository classes for data access
"""

from foodies.database.connection import (
    check_database_health,
    close_database_pool,
    get_database_pool,
    init_database_pool,
)
from foodies.database.schema import create_schema


__all__ = [
    "check_database_health",
    "close_database_pool",
    "create_schema",
    "get_database_pool",
    "init_database_pool",
]
