"""
Quill
GraphQL API for a small blogging domain: users, posts and authentication
"""

__version__ = "0.1.0"

from .config import settings

__all__ = ["settings", "__version__"]
