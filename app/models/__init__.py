# app/models/__init__.py
# Importing every model registers its table on Base.metadata.

from app.modules.auth.models import User, UserStatus
from app.modules.courses.models import Category, Course, Lesson
from app.modules.enrollments.models import Enrollment

__all__ = [
    "User",
    "UserStatus",
    "Category",
    "Course",
    "Lesson",
    "Enrollment",
]
