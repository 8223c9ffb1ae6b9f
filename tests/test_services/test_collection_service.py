import pytest
from unittest.mock import Mock, patch
from sqlalchemy.exc import OperationalError
from core.errors import (
    BookNotFound, ErrorKind, NotInCollection, ParameterError, PersistenceError,
    ProviderUnavailable, UpstreamResolutionFailed, UserNotFound
)
from core.models.book import BookInfo
from core.sa.models import UserBook
from core.services.collection_service import CollectionManager

def _active_entries(db_session, user_id, isbn):
    db_session.expire_all()
    return db_session.query(UserBook).filter_by(user_id=user_id, isbn=isbn, is_active=True).all()

def test_add_then_list_scenario(collection_manager, sample_user, write_back_executor):
    collection_manager.add_to_collection(sample_user.id, "9780000000001")

    # The listing only reads the cache, so let the write-back land first
    write_back_executor.shutdown(wait=True)
    books = collection_manager.list_collection(sample_user.id)

    assert len(books) == 1
    assert books[0].isbn == "9780000000001"
    assert books[0].title == "T"

def test_add_copies_book_tags(collection_manager, sample_user, db_session):
    collection_manager.add_to_collection(sample_user.id, "9780000000001")

    entries = _active_entries(db_session, sample_user.id, "9780000000001")
    assert len(entries) == 1
    assert entries[0].tags == ["a", "b"]

def test_add_cached_book_without_tags(collection_manager, sample_user, sample_book, db_session, provider):
    sample_book.tags = None
    db_session.commit()

    collection_manager.add_to_collection(sample_user.id, sample_book.isbn)

    entries = _active_entries(db_session, sample_user.id, sample_book.isbn)
    assert entries[0].tags == []
    provider.fetch_by_isbn.assert_not_called()

def test_add_twice_is_idempotent(collection_manager, sample_user, db_session):
    collection_manager.add_to_collection(sample_user.id, "9780000000001")
    collection_manager.add_to_collection(sample_user.id, "9780000000001")

    assert len(_active_entries(db_session, sample_user.id, "9780000000001")) == 1

def test_add_rejects_empty_parameters_without_store_calls():
    user_repository = Mock()
    user_book_repository = Mock()
    resolver = Mock()
    manager = CollectionManager(user_repository, user_book_repository, resolver)

    for user_id, isbn in [("", "x"), ("u1", ""), (None, "x"), ("  ", "x")]:
        with pytest.raises(ParameterError) as exc_info:
            manager.add_to_collection(user_id, isbn)
        assert exc_info.value.kind == ErrorKind.PARAMETER

    assert user_repository.mock_calls == []
    assert user_book_repository.mock_calls == []
    assert resolver.mock_calls == []

def test_add_unknown_user_does_not_resolve(collection_manager, provider):
    with pytest.raises(UserNotFound):
        collection_manager.add_to_collection("missing-user", "9780000000001")

    provider.fetch_by_isbn.assert_not_called()

def test_add_provider_transport_failure(collection_manager, sample_user, provider, db_session):
    cause = ProviderUnavailable("connection refused")
    provider.fetch_by_isbn.side_effect = cause

    with pytest.raises(UpstreamResolutionFailed) as exc_info:
        collection_manager.add_to_collection(sample_user.id, "9780000000001")

    assert exc_info.value.cause is cause
    assert exc_info.value.to_dict()["error"] == "upstream_resolution_failed"
    db_session.expire_all()
    assert db_session.query(UserBook).count() == 0

def test_add_provider_not_found(collection_manager, sample_user, provider):
    provider.fetch_by_isbn.side_effect = BookNotFound("no book")

    with pytest.raises(UpstreamResolutionFailed) as exc_info:
        collection_manager.add_to_collection(sample_user.id, "9780000000001")

    assert isinstance(exc_info.value.cause, BookNotFound)

def test_add_relation_store_failure(collection_manager, sample_user, write_back_executor, db_session):
    error = OperationalError("INSERT", {}, Exception("database is locked"))
    with patch.object(collection_manager.user_book_repository, 'upsert_active', side_effect=error):
        with pytest.raises(PersistenceError) as exc_info:
            collection_manager.add_to_collection(sample_user.id, "9780000000001")

    assert exc_info.value.cause is error
    # The cached book is not rolled back
    write_back_executor.shutdown(wait=True)
    assert collection_manager.resolver.lookup_cached("9780000000001") is not None

def test_add_user_lookup_failure(collection_manager, provider):
    error = OperationalError("SELECT", {}, Exception("disk I/O error"))
    with patch.object(collection_manager.user_repository, 'exists', side_effect=error):
        with pytest.raises(PersistenceError):
            collection_manager.add_to_collection("u1", "9780000000001")

    provider.fetch_by_isbn.assert_not_called()

def test_remove_never_added(collection_manager, sample_user):
    with pytest.raises(NotInCollection):
        collection_manager.remove_from_collection(sample_user.id, "9780000000001")

def test_remove_twice_fails_second_time(collection_manager, sample_user, sample_book):
    collection_manager.add_to_collection(sample_user.id, sample_book.isbn)
    collection_manager.remove_from_collection(sample_user.id, sample_book.isbn)

    with pytest.raises(NotInCollection):
        collection_manager.remove_from_collection(sample_user.id, sample_book.isbn)

def test_remove_keeps_entry_inactive(collection_manager, sample_user, sample_book, db_session):
    collection_manager.add_to_collection(sample_user.id, sample_book.isbn)
    collection_manager.remove_from_collection(sample_user.id, sample_book.isbn)

    db_session.expire_all()
    entries = db_session.query(UserBook).filter_by(user_id=sample_user.id, isbn=sample_book.isbn).all()
    assert len(entries) == 1
    assert entries[0].is_active is False

def test_remove_rejects_empty_parameters(collection_manager):
    with pytest.raises(ParameterError):
        collection_manager.remove_from_collection("", "9780000000001")
    with pytest.raises(ParameterError):
        collection_manager.remove_from_collection("u1", "")

def test_remove_unknown_user(collection_manager):
    with pytest.raises(UserNotFound):
        collection_manager.remove_from_collection("missing-user", "9780000000001")

def test_add_remove_list_excludes_book(collection_manager, sample_user, sample_book):
    collection_manager.add_to_collection(sample_user.id, sample_book.isbn)
    collection_manager.remove_from_collection(sample_user.id, sample_book.isbn)

    books = collection_manager.list_collection(sample_user.id)

    assert sample_book.isbn not in [book.isbn for book in books]

def test_add_after_remove_reactivates(collection_manager, sample_user, sample_book, db_session):
    collection_manager.add_to_collection(sample_user.id, sample_book.isbn)
    collection_manager.remove_from_collection(sample_user.id, sample_book.isbn)
    collection_manager.add_to_collection(sample_user.id, sample_book.isbn)

    db_session.expire_all()
    assert db_session.query(UserBook).filter_by(user_id=sample_user.id).count() == 1
    assert [b.isbn for b in collection_manager.list_collection(sample_user.id)] == [sample_book.isbn]

def test_list_skips_books_missing_from_cache(collection_manager, sample_user, sample_book, db_session):
    db_session.add(UserBook(user_id=sample_user.id, isbn="9789999999999", tags=[]))
    db_session.add(UserBook(user_id=sample_user.id, isbn=sample_book.isbn, tags=[]))
    db_session.commit()

    books = collection_manager.list_collection(sample_user.id)

    assert [book.isbn for book in books] == [sample_book.isbn]

def test_list_keeps_store_order_and_collapses_duplicates(sample_book):
    first = UserBook(user_id="u1", isbn="9780000000010", tags=[])
    second = UserBook(user_id="u1", isbn=sample_book.isbn, tags=[])
    duplicate = UserBook(user_id="u1", isbn="9780000000010", tags=[])
    user_book_repository = Mock()
    user_book_repository.list_active_by_user.return_value = [first, second, duplicate]
    resolver = Mock()
    resolver.lookup_cached.side_effect = lambda isbn: BookInfo(isbn=isbn, title=f"Book {isbn}")
    manager = CollectionManager(Mock(), user_book_repository, resolver)

    books = manager.list_collection("u1")

    assert [book.isbn for book in books] == ["9780000000010", sample_book.isbn]
    assert resolver.lookup_cached.call_count == 2
    resolver.resolve.assert_not_called()

def test_list_empty_collection(collection_manager, sample_user):
    assert collection_manager.list_collection(sample_user.id) == []

def test_list_rejects_empty_user(collection_manager):
    with pytest.raises(ParameterError):
        collection_manager.list_collection("")
