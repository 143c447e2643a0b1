from __future__ import annotations

import enum
import uuid
from typing import Any, Optional

from sqlalchemy import exists, false, func, or_, select
from sqlalchemy.orm import Session, joinedload, selectinload

from app.modules.courses.models import Category, Course, Lesson
from app.modules.enrollments.models import Enrollment


class CourseSort(str, enum.Enum):
    price_asc = "price-asc"
    price_desc = "price-desc"
    newest = "newest"

    @classmethod
    def resolve(cls, value: Optional[str]) -> "CourseSort":
        """Map a raw sort key to a known ordering; unknown keys sort newest first."""
        try:
            return cls(value)
        except ValueError:
            return cls.newest


def lessons_count_column():
    return (
        select(func.count(Lesson.id))
        .where(Lesson.course_id == Course.id)
        .correlate(Course)
        .scalar_subquery()
        .label("lessons_count")
    )


def enrollments_count_column():
    return (
        select(func.count(Enrollment.id))
        .where(Enrollment.course_id == Course.id)
        .correlate(Course)
        .scalar_subquery()
        .label("enrollments_count")
    )


def is_enrolled_column(user_id: Optional[uuid.UUID]):
    if user_id is None:
        return false().label("is_enrolled")
    return (
        exists()
        .where(Enrollment.course_id == Course.id, Enrollment.user_id == user_id)
        .correlate(Course)
        .label("is_enrolled")
    )


class CourseRepository:
    """Repository for Course entity: lookups, catalog queries and writes."""

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, course_id: uuid.UUID) -> Optional[Course]:
        """Get course by ID, deleted or not."""
        return self.db.query(Course).filter(Course.id == course_id).first()

    def exists_active(self, title: str, author_id: uuid.UUID) -> bool:
        """Check for a non-deleted course with the same title and author."""
        query = self.db.query(Course).filter(
            Course.title == title,
            Course.author_id == author_id,
            Course.is_deleted.is_(False),
        )
        return bool(self.db.query(query.exists()).scalar())

    def get_with_enrollment_flag(
        self, course_id: uuid.UUID, user_id: Optional[uuid.UUID]
    ) -> Optional[tuple[Course, int, bool]]:
        """Fetch a course with author, category, lesson count and the user's enrollment flag."""
        row = (
            self.db.query(Course, lessons_count_column(), is_enrolled_column(user_id))
            .options(joinedload(Course.author), joinedload(Course.category))
            .filter(Course.id == course_id)
            .first()
        )
        if row is None:
            return None
        course, lessons_count, is_enrolled = row
        return course, lessons_count or 0, bool(is_enrolled)

    def catalog_criteria(
        self,
        category: Optional[str] = None,
        search_term: Optional[str] = None,
    ) -> list[Any]:
        """Build the WHERE clauses for the public catalog.

        Only active courses qualify. ``category`` is a case-insensitive
        substring of the linked category's name; ``search_term`` matches the
        title or the description, case-insensitively. Wildcards in user
        input are matched literally.
        """
        criteria: list[Any] = [Course.is_deleted.is_(False)]
        if category:
            criteria.append(
                Course.category.has(Category.name.icontains(category, autoescape=True))
            )
        if search_term:
            criteria.append(
                or_(
                    Course.title.icontains(search_term, autoescape=True),
                    Course.description.icontains(search_term, autoescape=True),
                )
            )
        return criteria

    def count_matching(self, criteria: list[Any]) -> int:
        count = self.db.query(func.count(Course.id)).filter(*criteria).scalar()
        return count or 0

    def list_matching(
        self,
        criteria: list[Any],
        sort: CourseSort,
        offset: int,
        limit: int,
    ) -> list[tuple[Course, int, int]]:
        """Fetch one page of matching courses with their lesson and enrollment counts."""
        if sort is CourseSort.price_asc:
            order_by = Course.price.asc()
        elif sort is CourseSort.price_desc:
            order_by = Course.price.desc()
        else:
            order_by = Course.created_at.desc()

        rows = (
            self.db.query(Course, lessons_count_column(), enrollments_count_column())
            .options(joinedload(Course.author), joinedload(Course.category))
            .filter(*criteria)
            .order_by(order_by, Course.id)
            .offset(offset)
            .limit(limit)
            .all()
        )
        return [(course, lessons or 0, enrollments or 0) for course, lessons, enrollments in rows]

    def list_by_author(self, author_id: uuid.UUID) -> list[Course]:
        """List every course of an author, including deleted ones."""
        return (
            self.db.query(Course)
            .options(
                joinedload(Course.author),
                joinedload(Course.category),
                selectinload(Course.lessons),
            )
            .filter(Course.author_id == author_id)
            .order_by(Course.created_at.desc(), Course.id)
            .all()
        )

    def create(self, **fields: Any) -> Course:
        """Create a new course."""
        course = Course(**fields)
        self.db.add(course)
        self.db.flush()
        return course

    def update(self, course: Course, **kwargs: Any) -> Course:
        """Update course fields."""
        for key, value in kwargs.items():
            if hasattr(course, key):
                setattr(course, key, value)
        self.db.flush()
        return course
