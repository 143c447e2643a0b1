# app/modules/courses/routes.py
from uuid import UUID
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.db.deps import get_db, get_current_active_user
from app.integrations.storage import MediaStorage, get_media_storage
from app.modules.auth.models import User
from app.modules.courses.service import CourseService
from app.schemas.course import (
    CourseAuthorView,
    CourseCreate,
    CourseDetail,
    CoursePage,
    CourseRead,
    CourseUpdate,
)

router = APIRouter(prefix="/courses", tags=["courses"])


@router.post(
    "",
    response_model=CourseRead,
    status_code=status.HTTP_201_CREATED,
)
def create_course(
    payload: CourseCreate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_active_user),
):
    """Create a new course. The author defaults to the authenticated user."""
    course_service = CourseService(db)
    data = payload.model_dump(exclude={"author_id"})
    return course_service.create_course(author_id=payload.author_id or user.id, **data)


@router.get("", response_model=CoursePage)
def list_courses(
    db: Session = Depends(get_db),
    category: Optional[str] = Query(default=None, description="Category name contains"),
    search_term: Optional[str] = Query(
        default=None,
        alias="searchTerm",
        description="Search by course title or description",
    ),
    sort: Optional[str] = Query(default=None, description="price-asc, price-desc or newest"),
    page: Optional[str] = Query(default=None, description="Page number for pagination"),
    limit: Optional[str] = Query(default=None, description="Number of courses per page"),
):
    """List active courses with filtering, search, sorting and pagination."""
    course_service = CourseService(db)
    return course_service.list_courses(
        {
            "category": category,
            "searchTerm": search_term,
            "sort": sort,
            "page": page,
            "limit": limit,
        }
    )


@router.get(
    "/author/{author_id}",
    response_model=List[CourseAuthorView],
    dependencies=[Depends(get_current_active_user)],
)
def list_courses_by_author(author_id: UUID, db: Session = Depends(get_db)):
    """List all courses of an author, deleted ones included."""
    course_service = CourseService(db)
    return course_service.list_courses_by_author(author_id)


@router.get("/{course_id}", response_model=CourseDetail)
def get_course(
    course_id: UUID,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_active_user),
):
    """Get a course by ID with lesson/enrollment counts and enrollment status."""
    course_service = CourseService(db)
    return course_service.get_course(course_id, user_id=user.id)


@router.patch(
    "/{course_id}",
    response_model=CourseRead,
    dependencies=[Depends(get_current_active_user)],
)
def update_course(
    course_id: UUID,
    payload: CourseUpdate,
    db: Session = Depends(get_db),
    storage: MediaStorage = Depends(get_media_storage),
):
    """Update a course. Replaced thumbnail / overview video objects are deleted."""
    course_service = CourseService(db, storage=storage)
    update_data = payload.model_dump(exclude_unset=True)
    return course_service.update_course(course_id, **update_data)


@router.patch(
    "/{course_id}/delete",
    response_model=CourseRead,
    dependencies=[Depends(get_current_active_user)],
)
def soft_delete_course(course_id: UUID, db: Session = Depends(get_db)):
    """Soft delete a course."""
    course_service = CourseService(db)
    return course_service.soft_delete_course(course_id)


@router.patch(
    "/{course_id}/restore",
    response_model=CourseRead,
    dependencies=[Depends(get_current_active_user)],
)
def restore_course(course_id: UUID, db: Session = Depends(get_db)):
    """Restore a soft-deleted course."""
    course_service = CourseService(db)
    return course_service.restore_course(course_id)
