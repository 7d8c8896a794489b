"""
Shared fixtures: an in-memory database seeded with the category catalog and a
TestClient whose requests run as a fixed user.
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from finsight.database.connection import Base, get_db
from finsight.main import app
from finsight.models.model import Category, User
from finsight.repositories.category_crud import seed_categories
from finsight.security.user_security import get_current_user


@pytest.fixture
def db_session():
    """Provide a session bound to a fresh in-memory SQLite database."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    seed_categories(session)
    yield session
    session.close()
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def user(db_session):
    """Persist the user every client request is made as."""
    db_user = User(
        full_name="Test User",
        username="tester",
        email="tester@example.com",
        hashed_password="not-a-real-hash",
    )
    db_session.add(db_user)
    db_session.commit()
    db_session.refresh(db_user)
    return db_user


@pytest.fixture
def categories(db_session):
    """Map category names to ids."""
    return {c.name: c.category_id for c in db_session.query(Category).all()}


@pytest.fixture
def client(db_session, user):
    """TestClient with the database and the current user overridden."""

    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_current_user] = lambda: user
    yield TestClient(app)
    app.dependency_overrides.clear()
