# api/dependencies.py
from concurrent.futures import Executor
from typing import Callable

from fastapi import Depends
from sqlalchemy.orm import Session

from core.resolvers.book_resolver import MetadataProvider, get_write_back_executor
from core.sa.database import db, get_db
from core.sa.repositories.dynamic import DynamicRepository
from core.sa.repositories.user import UserRepository
from core.services.collection_service import CollectionManager
from core.services.dynamic_service import DynamicService
from core.services.user_service import UserService
from core.utils.http import BookMetadataClient


def get_metadata_provider() -> MetadataProvider:
    return BookMetadataClient()


def get_session_factory() -> Callable[[], Session]:
    """Session factory for work that outlives the request session"""
    return db.get_session


def get_executor() -> Executor:
    return get_write_back_executor()


def get_collection_manager(
    session: Session = Depends(get_db),
    provider: MetadataProvider = Depends(get_metadata_provider),
    session_factory: Callable[[], Session] = Depends(get_session_factory),
    executor: Executor = Depends(get_executor)
) -> CollectionManager:
    return CollectionManager.from_session(
        session,
        provider=provider,
        session_factory=session_factory,
        executor=executor
    )


def get_user_service(session: Session = Depends(get_db)) -> UserService:
    return UserService(UserRepository(session))


def get_dynamic_service(session: Session = Depends(get_db)) -> DynamicService:
    return DynamicService(DynamicRepository(session), UserRepository(session))
