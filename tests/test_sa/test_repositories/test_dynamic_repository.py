# tests/test_sa/test_repositories/test_dynamic_repository.py

import pytest
from datetime import datetime, timedelta, UTC
from core.sa.repositories.dynamic import DynamicRepository
from core.sa.models import UserDynamic

@pytest.fixture
def dynamic_repo(db_session):
    return DynamicRepository(db_session)

@pytest.fixture
def dynamics(db_session, sample_user):
    """Create 5 dynamics, one day apart, the last one removed."""
    now = datetime.now(UTC)
    items = []
    for i in range(5):
        dynamic = UserDynamic(
            user_id=sample_user.id,
            content=f"Dynamic {i}",
            created_at=now - timedelta(days=5 - i),
            is_active=(i != 4)
        )
        db_session.add(dynamic)
        items.append(dynamic)
    db_session.commit()
    return items

def test_add(dynamic_repo, sample_user):
    dynamic = dynamic_repo.add(sample_user.id, "Started a new book", isbn="9780000000001")
    assert dynamic.id is not None
    assert dynamic.like_count == 0
    assert dynamic.is_active is True

def test_increment_like_count(dynamic_repo, dynamics):
    assert dynamic_repo.increment_like_count(dynamics[0].id) == 1
    assert dynamic_repo.increment_like_count(dynamics[0].id) == 2

def test_increment_like_count_inactive(dynamic_repo, dynamics):
    assert dynamic_repo.increment_like_count(dynamics[4].id) is None
    assert dynamic_repo.increment_like_count("missing") is None

def test_page_by_user(dynamic_repo, dynamics, sample_user):
    """Test paging returns active dynamics newest first."""
    first = dynamic_repo.page_by_user(sample_user.id, 1, 2)
    second = dynamic_repo.page_by_user(sample_user.id, 2, 2)
    third = dynamic_repo.page_by_user(sample_user.id, 3, 2)
    assert [d.content for d in first] == ["Dynamic 3", "Dynamic 2"]
    assert [d.content for d in second] == ["Dynamic 1", "Dynamic 0"]
    assert third == []

def test_page_all(dynamic_repo, dynamics):
    assert [d.content for d in dynamic_repo.page_all(1, 10)] == [
        "Dynamic 3", "Dynamic 2", "Dynamic 1", "Dynamic 0"
    ]
