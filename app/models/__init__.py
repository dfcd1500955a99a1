"""Database models for the application."""

from app.models.blog import BlogDB
from app.models.category import CategoryDB

__all__ = ["BlogDB", "CategoryDB"]
