# core/sa/models/book.py
from sqlalchemy import String, Integer, Text, JSON
from sqlalchemy.orm import Mapped, mapped_column
from .base import Base, TimestampMixin

class Book(Base, TimestampMixin):
    """Cached book metadata, keyed by ISBN.

    Rows are written once, when an ISBN is first resolved through the metadata
    provider, and are treated as the truth for that ISBN afterwards.
    """
    __tablename__ = 'book'

    isbn: Mapped[str] = mapped_column(String(20), primary_key=True)
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    author: Mapped[str | None] = mapped_column(String(500), nullable=True)
    translator: Mapped[str | None] = mapped_column(String(500), nullable=True)
    publisher: Mapped[str | None] = mapped_column(String(255), nullable=True)
    pub_date: Mapped[str | None] = mapped_column(String(50), nullable=True)
    pages: Mapped[int | None] = mapped_column(Integer, nullable=True)
    price: Mapped[str | None] = mapped_column(String(50), nullable=True)
    image_url: Mapped[str | None] = mapped_column(String, nullable=True)
    summary: Mapped[str | None] = mapped_column(Text, nullable=True)
    tags: Mapped[list[str] | None] = mapped_column(JSON, nullable=True, default=list)
