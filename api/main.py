# api/main.py
import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware

from api.routes import dynamics, user_books, users
from core.config import get_settings
from core.errors import BookFriendsError, ErrorKind
from core.sa.database import db
from core.utils.log import setup_logging

logger = logging.getLogger(__name__)

# HTTP status for each error kind; anything missing is a server error
ERROR_STATUS = {
    ErrorKind.PARAMETER: status.HTTP_400_BAD_REQUEST,
    ErrorKind.USER_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.NOT_IN_COLLECTION: status.HTTP_404_NOT_FOUND,
    ErrorKind.DYNAMIC_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.USER_ALREADY_EXISTS: status.HTTP_409_CONFLICT,
    ErrorKind.INVALID_CREDENTIALS: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.UPSTREAM_RESOLUTION_FAILED: status.HTTP_502_BAD_GATEWAY,
    ErrorKind.PERSISTENCE_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

app = FastAPI(title="Book Friends")

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(users.router)
app.include_router(user_books.router)
app.include_router(dynamics.router)

# Initialize database on startup
@app.on_event("startup")
async def startup_event():
    setup_logging()
    db.init_db()

@app.exception_handler(BookFriendsError)
async def book_friends_error_handler(request: Request, exc: BookFriendsError):
    status_code = ERROR_STATUS.get(exc.kind, status.HTTP_500_INTERNAL_SERVER_ERROR)
    if status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc}")
    return JSONResponse(status_code=status_code, content=exc.to_dict())

@app.get("/")
async def root():
    return {"message": "Book Friends"}
