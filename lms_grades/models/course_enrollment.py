# lms_grades/models/course_enrollment.py
from sqlalchemy import Column, DateTime, ForeignKey, Integer, UniqueConstraint
from sqlalchemy.sql import func

from lms_grades.core.database import Base


class CourseEnrollment(Base):
    """
    A user's membership in a course.
    Maintained by the enrollment flow; the gradebook only reads it.
    """

    __tablename__ = "course_enrollments"
    __table_args__ = (
        UniqueConstraint("user_id", "course_id", name="uq_enrollment_user_course"),
    )

    id = Column(Integer, primary_key=True, index=True)

    # Users live in the identity provider; only the resolved id is stored
    user_id = Column(Integer, nullable=False, index=True)
    course_id = Column(
        Integer, ForeignKey("courses.id", ondelete="CASCADE"), nullable=False, index=True
    )

    # Progress tracking
    progress = Column(Integer, default=0, nullable=False)  # 0-100

    # Timestamps
    started_at = Column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    last_accessed_at = Column(DateTime(timezone=True), nullable=True)
    completed_at = Column(
        DateTime(timezone=True), nullable=True
    )  # When user completed the course

    def __repr__(self):
        return f"<CourseEnrollment(id={self.id}, user_id={self.user_id}, course_id={self.course_id}, progress={self.progress})>"
