# core/sa/repositories/__init__.py
from .book import BookRepository
from .user import UserRepository
from .user_book import UserBookRepository
from .dynamic import DynamicRepository

__all__ = ['BookRepository', 'UserRepository', 'UserBookRepository', 'DynamicRepository']
