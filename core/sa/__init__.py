# core/sa/__init__.py
from .database import Database
from .models import (
    Base, User, Book, UserBook, UserDynamic
)

__all__ = [
    'Database',
    'Base',
    'User',
    'Book',
    'UserBook',
    'UserDynamic'
]
