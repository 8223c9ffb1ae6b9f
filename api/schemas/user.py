# api/schemas/user.py
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict

class User(BaseModel):
    id: str
    phone_number: str
    nick_name: str
    avatar_url: Optional[str] = None
    signature: Optional[str] = None
    gender: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

class UserRegister(BaseModel):
    phone_number: str = ""
    password: str = ""
    nick_name: str = ""

class UserLogin(BaseModel):
    phone_number: str = ""
    password: str = ""

class UserUpdate(BaseModel):
    nick_name: Optional[str] = None
    avatar_url: Optional[str] = None
    signature: Optional[str] = None
    gender: Optional[str] = None
