"""
Pytest configuration and fixtures for testing.
"""
import os

os.environ.setdefault("DATABASE_URL", "sqlite:///./test.db")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")
os.environ.setdefault("MEDIA_STORAGE_PATH", "./storage/test-media")

from datetime import datetime, timedelta
from uuid import uuid4

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from fastapi.testclient import TestClient

from app.main import app
from app.db.base import Base
from app.db.deps import get_db
from app.core.security import create_access_token
from app.modules.auth.models import User
from app.modules.courses.models import Category, Course, Lesson
from app.modules.enrollments.models import Enrollment


# Test database URL
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///./test.db"

engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False}
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db():
    """Create a fresh database for each test."""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db):
    """FastAPI test client with test database."""
    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def author_user(db):
    """Create a course author."""
    user = User(id=uuid4(), email="author@test.com", full_name="Test Author")
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def student_user(db):
    """Create a student."""
    user = User(id=uuid4(), email="student@test.com", full_name="Test Student")
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def web_category(db):
    category = Category(id=uuid4(), name="Web Development")
    db.add(category)
    db.commit()
    db.refresh(category)
    return category


@pytest.fixture
def data_category(db):
    category = Category(id=uuid4(), name="Data Science")
    db.add(category)
    db.commit()
    db.refresh(category)
    return category


@pytest.fixture
def make_course(db, author_user):
    """Factory persisting a course; keyword arguments override the defaults."""
    def _make(**overrides):
        fields = {
            "id": uuid4(),
            "title": f"Course {uuid4().hex[:8]}",
            "description": "A practical course",
            "price": 10.0,
            "author_id": author_user.id,
        }
        fields.update(overrides)
        course = Course(**fields)
        db.add(course)
        db.commit()
        db.refresh(course)
        return course

    return _make


@pytest.fixture
def basic_course(make_course, web_category):
    """An active course with a category."""
    return make_course(
        title="Python Basics",
        description="Introduction to Python",
        price=49.0,
        category_id=web_category.id,
    )


@pytest.fixture
def deleted_course(make_course):
    """A soft-deleted course."""
    return make_course(title="Retired Course", is_deleted=True)


@pytest.fixture
def add_lesson(db):
    def _add(course, title="Lesson", order_index=1):
        lesson = Lesson(id=uuid4(), course_id=course.id, title=title, order_index=order_index)
        db.add(lesson)
        db.commit()
        return lesson

    return _add


@pytest.fixture
def enroll(db):
    def _enroll(user, course):
        enrollment = Enrollment(id=uuid4(), user_id=user.id, course_id=course.id)
        db.add(enrollment)
        db.commit()
        return enrollment

    return _enroll


@pytest.fixture
def dated_courses(make_course):
    """Three courses priced 10, 30, 20 created one day apart, oldest first."""
    start = datetime(2026, 1, 1, 12, 0, 0)
    return [
        make_course(title=f"Dated {price}", price=price, created_at=start + timedelta(days=offset))
        for offset, price in enumerate([10.0, 30.0, 20.0])
    ]


@pytest.fixture
def auth_headers(author_user):
    """Bearer headers for the author."""
    token = create_access_token(str(author_user.id))
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def student_headers(student_user):
    """Bearer headers for the student."""
    token = create_access_token(str(student_user.id))
    return {"Authorization": f"Bearer {token}"}
