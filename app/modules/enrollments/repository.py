from __future__ import annotations

import uuid

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.modules.enrollments.models import Enrollment


class EnrollmentRepository:
    """Repository for Enrollment entity."""

    def __init__(self, db: Session):
        self.db = db

    def count_by_course(self, course_id: uuid.UUID) -> int:
        """Count enrollments in a course across all users."""
        count = (
            self.db.query(func.count(Enrollment.id))
            .filter(Enrollment.course_id == course_id)
            .scalar()
        )
        return count or 0
