# core/models/book.py

from pydantic import BaseModel, ConfigDict, field_validator
from typing import Optional, List

class BookInfo(BaseModel):
    """Canonical book metadata, detached from any database session"""
    isbn: str
    title: str
    author: Optional[str] = None
    translator: Optional[str] = None
    publisher: Optional[str] = None
    pub_date: Optional[str] = None
    pages: Optional[int] = None
    price: Optional[str] = None
    image_url: Optional[str] = None
    summary: Optional[str] = None
    tags: List[str] = []

    model_config = ConfigDict(from_attributes=True)

    @field_validator('tags', mode='before')
    @classmethod
    def _tags_default(cls, value):
        # Rows cached before tags were tracked hold NULL
        return [] if value is None else value
