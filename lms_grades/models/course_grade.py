# lms_grades/models/course_grade.py
from sqlalchemy import (
    Column,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
)

from lms_grades.core.database import Base
from lms_grades.models.types import JSONType


class CourseGrade(Base):
    """
    Final grade of a user in a course.
    One row per (user, course); rewritten wholesale on every recalculation.
    """

    __tablename__ = "course_grades"
    __table_args__ = (
        UniqueConstraint("user_id", "course_id", name="uq_course_grade_user_course"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, nullable=False, index=True)
    course_id = Column(
        Integer, ForeignKey("courses.id", ondelete="CASCADE"), nullable=False, index=True
    )

    quiz_scores = Column(
        JSONType, nullable=False
    )  # [{"quiz_id": 1, "score": 95, "weight": 30, "weighted_score": 28.5}, ...]
    assignment_scores = Column(JSONType, nullable=False)  # always [] for now

    final_grade = Column(Float, nullable=False, default=0.0)  # 0-100, 2 decimals
    letter_grade = Column(String(2), nullable=True)  # A, B, C, D, F

    updated_at = Column(DateTime(timezone=True), nullable=False)

    def __repr__(self):
        return f"<CourseGrade(id={self.id}, user_id={self.user_id}, course_id={self.course_id}, final_grade={self.final_grade}, letter={self.letter_grade})>"
