from datetime import datetime
from uuid import UUID
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Serialises with camelCase keys and accepts either casing on input."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class AuthorRead(CamelModel):
    id: UUID
    email: str
    full_name: Optional[str] = None


class CategoryRead(CamelModel):
    id: UUID
    name: str


class LessonRead(CamelModel):
    id: UUID
    title: str
    order_index: int


class CourseBase(CamelModel):
    title: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    price: float = Field(default=0, ge=0)
    is_free: bool = False
    category_id: Optional[UUID] = None
    features: List[Any] = Field(default_factory=list)
    stack: List[Any] = Field(default_factory=list)
    overviews: List[Any] = Field(default_factory=list)
    thumbnail: Optional[str] = None
    thumbnail_public_id: Optional[str] = None
    overview_video: Optional[str] = None
    overview_video_public_id: Optional[str] = None


class CourseCreate(CourseBase):
    # defaults to the authenticated user
    author_id: Optional[UUID] = None


class CourseUpdate(CamelModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    price: Optional[float] = Field(default=None, ge=0)
    is_free: Optional[bool] = None
    category_id: Optional[UUID] = None
    features: Optional[List[Any]] = None
    stack: Optional[List[Any]] = None
    overviews: Optional[List[Any]] = None
    thumbnail: Optional[str] = None
    thumbnail_public_id: Optional[str] = None
    overview_video: Optional[str] = None
    overview_video_public_id: Optional[str] = None

    @field_validator("title", "price", "is_free", "features", "stack", "overviews", mode="before")
    @classmethod
    def reject_null(cls, value: Any) -> Any:
        # may be omitted, but not cleared
        if value is None:
            raise ValueError("must not be null")
        return value


class CourseRead(CourseBase):
    id: UUID
    author_id: UUID
    is_deleted: bool
    created_at: datetime
    updated_at: datetime


class CourseSummary(CourseRead):
    author: AuthorRead
    category: Optional[CategoryRead] = None


class CourseAuthorView(CourseSummary):
    lessons: List[LessonRead] = Field(default_factory=list)


class CourseListItem(CourseSummary):
    lessons_count: int
    enrollments_count: int


class CourseDetail(CourseListItem):
    is_enrolled: bool


class CoursePage(CamelModel):
    courses: List[CourseListItem]
    total_pages: int
    current_page: int
    total_courses: int
