"""Database models."""
from wealthwise.models.user import User

__all__ = [
    "User",
]
