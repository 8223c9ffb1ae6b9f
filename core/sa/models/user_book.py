# core/sa/models/user_book.py
from datetime import datetime, UTC
from sqlalchemy import Integer, String, Boolean, ForeignKey, DateTime, JSON, UniqueConstraint, Index
from sqlalchemy.orm import relationship, Mapped, mapped_column
from .base import Base, TimestampMixin

class UserBook(Base, TimestampMixin):
    """A book stored up in a user's collection.

    Removing a book only clears ``is_active``; storing it again re-activates
    the same row. ``isbn`` deliberately has no foreign key to ``book``: the
    book cache is filled in the background and may lag behind this row.
    """
    __tablename__ = 'user_book'

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[str] = mapped_column(String(36), ForeignKey('user.id'), nullable=False)
    isbn: Mapped[str] = mapped_column(String(20), nullable=False)
    tags: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    stored_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=lambda: datetime.now(UTC))

    # Relationships
    user = relationship('User', back_populates='user_books')

    __table_args__ = (
        UniqueConstraint('user_id', 'isbn', name='uix_user_book_user_isbn'),
        Index('idx_user_book_user_active', 'user_id', 'is_active'),
    )
