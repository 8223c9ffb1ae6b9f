# api/routes/users.py

from fastapi import APIRouter, Depends, status

from api.dependencies import get_user_service
from api.schemas.user import User, UserLogin, UserRegister, UserUpdate
from core.services.user_service import UserService

router = APIRouter(prefix="/user", tags=["user"])

@router.post("/register", response_model=User, status_code=status.HTTP_201_CREATED)
def register(user: UserRegister, service: UserService = Depends(get_user_service)):
    return service.register(user.phone_number, user.password, user.nick_name)

@router.post("/login", response_model=User)
def login(credentials: UserLogin, service: UserService = Depends(get_user_service)):
    return service.login(credentials.phone_number, credentials.password)

@router.put("/{user_id}", response_model=User)
def update_user(user_id: str, user: UserUpdate, service: UserService = Depends(get_user_service)):
    """Update the profile fields of a user; fields left out are unchanged."""
    return service.update_info(user_id, **user.model_dump())
