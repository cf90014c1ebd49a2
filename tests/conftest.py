import os
import tempfile

# must be set before app.config is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["LOG_DIR"] = tempfile.mkdtemp(prefix="lms-logs-")
os.environ.pop("ADMIN_EMAIL", None)
os.environ.pop("ADMIN_PASSWORD", None)

import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.database import Base, engine, SessionLocal
from app.models.course import Course
from app.models.user import Role
from app.utils.accounts import create_user
from app.utils.auth import create_access_token
from app.utils.hashing import pwd_context

PASSWORD = "secret123"

# minimum cost keeps the suite fast
pwd_context.update(bcrypt__rounds=4)


@pytest.fixture(autouse=True)
def reset_db():
    """Fresh schema for every test."""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def make_user(db):
    counter = {"n": 0}

    def _make(role=Role.STUDENT, name=None, email=None, password=PASSWORD, is_active=True):
        counter["n"] += 1
        n = counter["n"]
        user = create_user(
            db,
            name or f"{role.value} {n}",
            email or f"{role.value.lower()}{n}@example.com",
            password,
            role,
        )
        if not is_active:
            user.is_active = False
            db.commit()
            db.refresh(user)
        return user

    return _make


@pytest.fixture
def admin(make_user):
    return make_user(Role.ADMIN, name="Ada Admin")


@pytest.fixture
def instructor(make_user):
    return make_user(Role.INSTRUCTOR, name="Ian Instructor")


@pytest.fixture
def student(make_user):
    return make_user(Role.STUDENT, name="Sam Student")


@pytest.fixture
def make_course(db):
    def _make(title="CS101", instructor=None, content=None, duration=10, price=99.99):
        course = Course(
            title=title,
            description=f"{title} description",
            duration=duration,
            price=price,
            content=content,
            instructor_id=instructor.id if instructor else None,
        )
        db.add(course)
        db.commit()
        db.refresh(course)
        return course

    return _make


def auth_headers(user):
    return {"Authorization": f"Bearer {create_access_token(user)}"}


@pytest.fixture
def headers():
    return auth_headers
