# api/schemas/dynamic.py
from datetime import datetime
from typing import Optional, List
from pydantic import BaseModel, ConfigDict

class Dynamic(BaseModel):
    id: str
    user_id: str
    isbn: Optional[str] = None
    content: str
    like_count: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)

class DynamicCreate(BaseModel):
    user_id: str = ""
    content: str = ""
    isbn: Optional[str] = None

class DynamicPage(BaseModel):
    items: List[Dynamic]
    page: int
    size: int

class LikeResult(BaseModel):
    id: str
    like_count: int
