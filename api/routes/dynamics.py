# api/routes/dynamics.py

from fastapi import APIRouter, Depends, Query, status

from api.dependencies import get_dynamic_service
from api.schemas.dynamic import Dynamic, DynamicCreate, DynamicPage, LikeResult
from core.services.dynamic_service import DynamicService

router = APIRouter(prefix="/dynamic", tags=["dynamic"])

@router.post("", response_model=Dynamic, status_code=status.HTTP_201_CREATED)
def publish(dynamic: DynamicCreate, service: DynamicService = Depends(get_dynamic_service)):
    return service.publish(dynamic.user_id, dynamic.content, dynamic.isbn)

@router.get("", response_model=DynamicPage)
def get_feed(
    page: int = Query(1, description="Page number"),
    service: DynamicService = Depends(get_dynamic_service)
):
    """Get one page of everybody's dynamics, newest first."""
    items = service.feed(page)
    return DynamicPage(items=items, page=page, size=service.page_size)

@router.get("/user/{user_id}", response_model=DynamicPage)
def get_user_feed(
    user_id: str,
    page: int = Query(1, description="Page number"),
    service: DynamicService = Depends(get_dynamic_service)
):
    """Get one page of a user's dynamics, newest first."""
    items = service.user_feed(user_id, page)
    return DynamicPage(items=items, page=page, size=service.page_size)

@router.get("/{dynamic_id}", response_model=Dynamic)
def get_dynamic(dynamic_id: str, service: DynamicService = Depends(get_dynamic_service)):
    return service.get(dynamic_id)

@router.post("/{dynamic_id}/like", response_model=LikeResult)
def like(dynamic_id: str, service: DynamicService = Depends(get_dynamic_service)):
    return LikeResult(id=dynamic_id, like_count=service.like(dynamic_id))
