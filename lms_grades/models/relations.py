# lms_grades/models/relations.py

from sqlalchemy.orm import relationship

from .course import Course
from .course_enrollment import CourseEnrollment
from .course_grade import CourseGrade
from .quiz import Quiz
from .quiz_attempt import QuizAttempt
from .quiz_question import QuizQuestion


def setup_relationships():
    """
    Configure all SQLAlchemy relationships between models.
    """

    # --- Course Relationships ---

    # 1. Course to Quizzes (One-to-Many)
    Course.quizzes = relationship(
        "Quiz",
        back_populates="course",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    Quiz.course = relationship("Course", back_populates="quizzes")

    # 2. Course to Enrollments (One-to-Many)
    Course.enrollments = relationship(
        "CourseEnrollment",
        back_populates="course",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    CourseEnrollment.course = relationship("Course", back_populates="enrollments")

    # 3. Course to Grades (One-to-Many)
    Course.grades = relationship(
        "CourseGrade",
        back_populates="course",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    CourseGrade.course = relationship("Course", back_populates="grades")

    # --- Quiz Relationships ---

    # 4. Quiz to Questions (One-to-Many), deleted with the quiz
    Quiz.questions = relationship(
        "QuizQuestion",
        back_populates="quiz",
        order_by=QuizQuestion.order,
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    QuizQuestion.quiz = relationship("Quiz", back_populates="questions")

    # 5. Quiz to Attempts (One-to-Many)
    Quiz.attempts = relationship(
        "QuizAttempt",
        back_populates="quiz",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    QuizAttempt.quiz = relationship("Quiz", back_populates="attempts")
