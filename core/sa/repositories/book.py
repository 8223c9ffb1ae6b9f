# core/sa/repositories/book.py
from typing import Optional
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
from core.models.book import BookInfo
from ..models import Book

class BookRepository:
    def __init__(self, session: Session):
        self.session = session

    def get_by_isbn(self, isbn: str) -> Optional[Book]:
        """Get a cached book by its ISBN"""
        return self.session.get(Book, isbn)

    def upsert(self, book_info: BookInfo) -> Book:
        """Insert a book, or overwrite the cached fields of an existing one.

        A concurrent insert of the same ISBN surfaces as an IntegrityError; the
        row that won is then updated instead.

        Args:
            book_info: Canonical book data

        Returns:
            The persisted Book object
        """
        values = book_info.model_dump()
        book = self.get_by_isbn(book_info.isbn)
        if book is None:
            book = Book(**values)
            self.session.add(book)
            try:
                self.session.commit()
                return book
            except IntegrityError:
                self.session.rollback()
                book = self.get_by_isbn(book_info.isbn)
                if book is None:
                    raise

        for key, value in values.items():
            if key != 'isbn':
                setattr(book, key, value)
        try:
            self.session.commit()
        except SQLAlchemyError:
            self.session.rollback()
            raise
        return book
