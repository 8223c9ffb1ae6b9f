# core/sa/models/__init__.py
from .base import Base, TimestampMixin
from .user import User
from .book import Book
from .user_book import UserBook
from .dynamic import UserDynamic

__all__ = [
    'Base',
    'TimestampMixin',
    'User',
    'Book',
    'UserBook',
    'UserDynamic'
]
