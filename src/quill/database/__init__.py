"""
Database module for the Quill backend
"""

from .connection import (
    create_schema,
    dispose_database,
    get_async_engine,
    get_async_session,
    init_database,
)
from .exists import exists_post, exists_user

__all__ = [
    "create_schema",
    "dispose_database",
    "get_async_engine",
    "get_async_session",
    "init_database",
    "exists_post",
    "exists_user",
]
