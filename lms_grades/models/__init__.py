"""
Models package initialization
Import all models and setup relationships
"""

from .course import Course
from .course_enrollment import CourseEnrollment
from .course_grade import CourseGrade
from .quiz import Quiz
from .quiz_attempt import QuizAttempt
from .quiz_question import QuizQuestion

# Import and setup relationships
from .relations import setup_relationships

# Setup all relationships after models are imported
setup_relationships()

# Make models available at package level
__all__ = [
    "Course",
    "CourseEnrollment",
    "CourseGrade",
    "Quiz",
    "QuizAttempt",
    "QuizQuestion",
]
