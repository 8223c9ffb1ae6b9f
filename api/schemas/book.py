# api/schemas/book.py
from typing import Optional, List
from pydantic import BaseModel, ConfigDict

class Book(BaseModel):
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

class BookList(BaseModel):
    items: List[Book]
    total: int

class UserBookRequest(BaseModel):
    # Empty defaults let the service report missing fields as parameter errors
    user_id: str = ""
    isbn: str = ""

class OkResponse(BaseModel):
    ok: bool = True
