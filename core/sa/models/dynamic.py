# core/sa/models/dynamic.py
import uuid
from sqlalchemy import Integer, String, Text, Boolean, ForeignKey, Index
from sqlalchemy.orm import relationship, Mapped, mapped_column
from .base import Base, TimestampMixin

class UserDynamic(Base, TimestampMixin):
    """A short status update published by a user, optionally about a book"""
    __tablename__ = 'user_dynamic'

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id: Mapped[str] = mapped_column(String(36), ForeignKey('user.id'), nullable=False)
    isbn: Mapped[str | None] = mapped_column(String(20), nullable=True)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    like_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    # Relationships
    user = relationship('User', back_populates='dynamics')

    __table_args__ = (
        Index('idx_user_dynamic_user_created', 'user_id', 'created_at'),
    )
