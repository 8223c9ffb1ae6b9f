# tests/conftest.py
import sys
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from unittest.mock import Mock

import pytest

# Add project root to Python path
project_root = str(Path(__file__).parent.parent)
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from sqlalchemy.orm import Session
from werkzeug.security import generate_password_hash

from core.sa.database import Database
from core.sa.models import Book, User, UserBook, UserDynamic
from core.resolvers.book_resolver import BookResolver
from core.services.collection_service import CollectionManager

@pytest.fixture(scope="session")
def test_db_path(tmp_path_factory):
    """Create a temporary directory for the test database."""
    test_dir = tmp_path_factory.mktemp("test_db")
    return str(test_dir / "test_bookfriends.db")

@pytest.fixture(scope="session")
def database(test_db_path):
    """Create a test database instance"""
    db = Database(f"sqlite:///{test_db_path}")

    # Drop all tables and recreate schema
    db.drop_db()
    db.init_db()

    yield db

    db.engine.dispose()

@pytest.fixture(scope="function")
def db_session(database):
    """Create a new database session for a test"""
    session: Session = database.get_session()
    try:
        yield session
    finally:
        session.close()

@pytest.fixture(autouse=True)
def cleanup_db(db_session):
    """Clean up database tables before each test"""
    # Delete in reverse order of dependencies
    for model in (UserDynamic, UserBook, Book, User):
        db_session.query(model).delete()
    db_session.commit()
    yield
    db_session.rollback()

@pytest.fixture
def write_back_executor():
    """Executor for background book cache writes; joined at teardown."""
    executor = ThreadPoolExecutor(max_workers=2)
    yield executor
    executor.shutdown(wait=True)

@pytest.fixture
def provider_payload():
    """A book payload as returned by the metadata provider."""
    return {
        'title': 'T',
        'author': ['Author One', 'Author Two'],
        'publisher': 'Test Press',
        'pubdate': '2020-1',
        'pages': '320',
        'price': '39.00',
        'images': {'large': 'http://example.com/large.jpg', 'small': 'http://example.com/small.jpg'},
        'summary': 'A test book.',
        'tags': 'a,b'
    }

@pytest.fixture
def provider(provider_payload):
    """Metadata provider stub returning provider_payload."""
    stub = Mock()
    stub.fetch_by_isbn.return_value = provider_payload
    return stub

@pytest.fixture
def resolver(db_session, database, provider, write_back_executor):
    return BookResolver(
        db_session,
        provider=provider,
        session_factory=database.get_session,
        executor=write_back_executor
    )

@pytest.fixture
def collection_manager(db_session, database, provider, write_back_executor):
    return CollectionManager.from_session(
        db_session,
        provider=provider,
        session_factory=database.get_session,
        executor=write_back_executor
    )

@pytest.fixture
def sample_user(db_session):
    """Create a sample user for testing."""
    user = User(
        phone_number="13800000000",
        password_hash=generate_password_hash("secret"),
        nick_name="Test User"
    )
    db_session.add(user)
    db_session.commit()
    return user

@pytest.fixture
def sample_book(db_session):
    """Create a sample cached book for testing."""
    book = Book(
        isbn="9787020002207",
        title="Cached Book",
        author="Cached Author",
        publisher="Cached Press",
        pages=200,
        tags=["classic", "novel"]
    )
    db_session.add(book)
    db_session.commit()
    return book
