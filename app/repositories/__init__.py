"""Repository layer for database operations."""

from app.repositories.blog import BlogFilter, BlogRepository, BlogSort
from app.repositories.category import CategoryRepository

__all__ = ["BlogFilter", "BlogRepository", "BlogSort", "CategoryRepository"]
