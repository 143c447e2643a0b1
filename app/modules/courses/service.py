from __future__ import annotations

import math
import uuid
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from typing import Any, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.exceptions import AppError, ConflictError, NotFoundError
from app.core.logging import get_logger
from app.integrations.storage import MediaStorage
from app.modules.courses.models import Course
from app.modules.courses.repository import CourseRepository, CourseSort
from app.modules.enrollments.repository import EnrollmentRepository
from app.schemas.course import CourseDetail, CourseListItem, CoursePage, CourseSummary

logger = get_logger(__name__)

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 6

COURSE_NOT_FOUND = "Course not found"
DUPLICATE_COURSE = "Course with this title already exists for this author"

# postgres names the index; sqlite lists its columns
DUPLICATE_MARKERS = (
    "uq_courses_title_author_active",
    "unique constraint failed: courses.title, courses.author_id",
)
MEDIA_ID_FIELDS = ("thumbnail_public_id", "overview_video_public_id")


def parse_positive_int(value: Any, default: int) -> int:
    """Parse a page/limit value that may arrive as a string.

    Missing, non-integer and sub-1 values fall back to ``default``.
    """
    if value is None or isinstance(value, bool):
        return default
    try:
        number = int(str(value).strip())
    except ValueError:
        return default
    return number if number >= 1 else default


def coerce_price(value: Any) -> float:
    try:
        price = float(value)
    except (TypeError, ValueError):
        raise AppError("Price must be a number")
    if not math.isfinite(price) or price < 0:
        raise AppError("Price must be a non-negative number")
    return price


def _shape(course: Course, schema: type[CourseSummary], **derived: Any) -> Any:
    """Project an ORM course onto a response model, attaching derived fields."""
    summary = CourseSummary.model_validate(course)
    return schema(**summary.model_dump(), **derived)


class CourseService:
    """Catalog engine: course lifecycle rules and catalog queries."""

    def __init__(self, db: Session, storage: Optional[MediaStorage] = None):
        self.db = db
        self.storage = storage
        self.course_repo = CourseRepository(db)
        self.enrollment_repo = EnrollmentRepository(db)

    @contextmanager
    def _write(self) -> Iterator[None]:
        """Commit the enclosed writes; store constraint violations become AppErrors."""
        try:
            yield
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            message = str(exc.orig).lower()
            logger.warning("course write rejected by store", error=str(exc.orig))
            if any(marker in message for marker in DUPLICATE_MARKERS):
                raise ConflictError(DUPLICATE_COURSE) from exc
            if "foreign key" in message:
                raise AppError("Course references an unknown author or category") from exc
            raise AppError("Course data violates a store constraint") from exc

    def _get_active(self, course_id: uuid.UUID) -> Course:
        course = self.course_repo.get_by_id(course_id)
        if not course or course.is_deleted:
            raise NotFoundError(COURSE_NOT_FOUND)
        return course

    def create_course(
        self,
        *,
        title: str,
        author_id: uuid.UUID,
        price: Any = 0,
        is_free: Any = False,
        description: Optional[str] = None,
        category_id: Optional[uuid.UUID] = None,
        features: Optional[list[Any]] = None,
        stack: Optional[list[Any]] = None,
        overviews: Optional[list[Any]] = None,
        thumbnail: Optional[str] = None,
        thumbnail_public_id: Optional[str] = None,
        overview_video: Optional[str] = None,
        overview_video_public_id: Optional[str] = None,
    ) -> Course:
        """Create a course unless the author already has an active one with this title."""
        if self.course_repo.exists_active(title, author_id):
            logger.warning("duplicate course title", title=title, author_id=str(author_id))
            raise ConflictError(DUPLICATE_COURSE)

        price = coerce_price(price)
        with self._write():
            course = self.course_repo.create(
                title=title,
                description=description,
                price=price,
                is_free=bool(is_free),
                author_id=author_id,
                category_id=category_id,
                features=list(features or []),
                stack=list(stack or []),
                overviews=list(overviews or []),
                thumbnail=thumbnail,
                thumbnail_public_id=thumbnail_public_id,
                overview_video=overview_video,
                overview_video_public_id=overview_video_public_id,
                is_deleted=False,
            )
        self.db.refresh(course)

        logger.info("created course", course_id=str(course.id), title=course.title)
        return course

    def get_course(
        self, course_id: uuid.UUID, user_id: Optional[uuid.UUID] = None
    ) -> CourseDetail:
        """Get an active course with lesson/enrollment counts and the user's enrollment flag."""
        found = self.course_repo.get_with_enrollment_flag(course_id, user_id)
        if found is None or found[0].is_deleted:
            raise NotFoundError(COURSE_NOT_FOUND)

        course, lessons_count, is_enrolled = found
        return _shape(
            course,
            CourseDetail,
            lessons_count=lessons_count,
            enrollments_count=self.enrollment_repo.count_by_course(course_id),
            is_enrolled=is_enrolled,
        )

    def list_courses(self, query: Mapping[str, Any]) -> CoursePage:
        """List the public catalog.

        ``query`` carries the raw request values under ``category``,
        ``searchTerm``, ``sort``, ``page`` and ``limit``; all are optional.
        """
        page = parse_positive_int(query.get("page"), DEFAULT_PAGE)
        limit = parse_positive_int(query.get("limit"), DEFAULT_LIMIT)
        sort = CourseSort.resolve(query.get("sort"))

        criteria = self.course_repo.catalog_criteria(
            category=query.get("category"),
            search_term=query.get("searchTerm"),
        )
        total = self.course_repo.count_matching(criteria)
        rows = self.course_repo.list_matching(
            criteria, sort=sort, offset=(page - 1) * limit, limit=limit
        )

        return CoursePage(
            courses=[
                _shape(
                    course,
                    CourseListItem,
                    lessons_count=lessons_count,
                    enrollments_count=enrollments_count,
                )
                for course, lessons_count, enrollments_count in rows
            ],
            total_pages=math.ceil(total / limit),
            current_page=page,
            total_courses=total,
        )

    def list_courses_by_author(self, author_id: uuid.UUID) -> list[Course]:
        """List all of an author's courses, deleted ones included."""
        return self.course_repo.list_by_author(author_id)

    def update_course(self, course_id: uuid.UUID, **update_data: Any) -> Course:
        """Apply a partial update to an active course.

        Media objects whose public id is replaced are removed from storage
        once the update is committed.
        """
        course = self._get_active(course_id)
        replaced = [
            getattr(course, field)
            for field in MEDIA_ID_FIELDS
            if field in update_data
            and getattr(course, field)
            and getattr(course, field) != update_data[field]
        ]

        with self._write():
            course = self.course_repo.update(course, **update_data)
        self.db.refresh(course)

        if self.storage is not None:
            for key in replaced:
                self.storage.delete_object(key)

        logger.info("updated course", course_id=str(course_id), fields=sorted(update_data))
        return course

    def soft_delete_course(self, course_id: uuid.UUID) -> Course:
        """Mark an active course as deleted. Deleting twice is an error."""
        course = self._get_active(course_id)

        with self._write():
            course = self.course_repo.update(course, is_deleted=True)
        self.db.refresh(course)

        logger.info("soft deleted course", course_id=str(course_id))
        return course

    def restore_course(self, course_id: uuid.UUID) -> Course:
        """Clear the deleted flag. Restoring an active course is allowed."""
        course = self.course_repo.get_by_id(course_id)
        if not course:
            raise NotFoundError(COURSE_NOT_FOUND)

        with self._write():
            course = self.course_repo.update(course, is_deleted=False)
        self.db.refresh(course)

        logger.info("restored course", course_id=str(course_id))
        return course
