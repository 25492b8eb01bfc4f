# lms_grades/models/quiz.py
from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.sql import func

from lms_grades.core.database import Base


class Quiz(Base):
    __tablename__ = "quizzes"

    id = Column(Integer, primary_key=True, index=True)
    course_id = Column(
        Integer, ForeignKey("courses.id", ondelete="CASCADE"), nullable=False, index=True
    )
    lesson_id = Column(Integer, nullable=True, index=True)

    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)

    # Quiz settings
    passing_score = Column(Integer, nullable=False)  # 0-100 percentage
    time_limit = Column(Integer, nullable=True)  # seconds
    max_attempts = Column(Integer, nullable=True)  # None = unlimited
    weight = Column(Integer, nullable=True)  # share of the course final grade
    is_published = Column(Boolean, default=False, nullable=False)

    created_at = Column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    def __repr__(self):
        return f"<Quiz(id={self.id}, course_id={self.course_id}, title={self.title}, published={self.is_published})>"
