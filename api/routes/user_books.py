# api/routes/user_books.py

from fastapi import APIRouter, Depends

from api.dependencies import get_collection_manager
from api.schemas.book import BookList, OkResponse, UserBookRequest
from core.services.collection_service import CollectionManager

router = APIRouter(prefix="/userbook", tags=["userbook"])

@router.post("/store", response_model=OkResponse)
def store_book(request: UserBookRequest, manager: CollectionManager = Depends(get_collection_manager)):
    """
    Store a book in the user's collection by ISBN.

    The book's metadata is fetched from the metadata provider when it is not
    cached yet. Storing a book twice is not an error.
    """
    manager.add_to_collection(request.user_id, request.isbn)
    return OkResponse()

@router.post("/unstore", response_model=OkResponse)
def unstore_book(request: UserBookRequest, manager: CollectionManager = Depends(get_collection_manager)):
    """Remove a book from the user's collection."""
    manager.remove_from_collection(request.user_id, request.isbn)
    return OkResponse()

@router.get("/{user_id}/books", response_model=BookList)
def get_user_books(user_id: str, manager: CollectionManager = Depends(get_collection_manager)):
    """
    Get the books in a user's collection, most recently stored first.

    Books whose metadata is not cached yet are left out.
    """
    books = manager.list_collection(user_id)
    return BookList(items=books, total=len(books))
