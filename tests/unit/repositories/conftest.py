"""Fixtures for repository unit tests."""

import pytest

from authcore.services.repositories.user_repository import UserRepository


@pytest.fixture
def repo(db):
    return UserRepository(db)


@pytest.fixture
def test_user(repo):
    return repo.create(
        first_name="Test",
        last_name="User",
        email="test@example.com",
        password_hash="not-a-real-hash",
        phone="08030000000",
    )
