# lms_grades/schemas/course_grade.py
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict


# ==================== Course Grade Schemas ====================


class QuizScoreEntry(BaseModel):
    quiz_id: int
    score: int
    weight: int
    weighted_score: float
    quiz_name: Optional[str] = None


class AssignmentScoreEntry(BaseModel):
    lesson_id: int
    score: float
    weight: int
    weighted_score: float
    assignment_name: Optional[str] = None


class CourseGradeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    course_id: int
    quiz_scores: List[QuizScoreEntry]
    assignment_scores: List[AssignmentScoreEntry]
    final_grade: float
    letter_grade: Optional[str] = None
    updated_at: datetime


class RecalculateResponse(BaseModel):
    course_grade_id: int


# ==================== Gradebook Schemas ====================


class GradebookCourse(BaseModel):
    id: int
    title: str


class GradebookEnrollment(BaseModel):
    progress: int
    started_at: datetime
    completed_at: Optional[datetime] = None


class GradebookQuiz(BaseModel):
    id: int
    title: str
    weight: int
    max_attempts: Optional[int] = None
    passing_score: int
    attempt_count: int
    best_score: Optional[int] = None
    passed: bool
    last_attempt_at: Optional[datetime] = None


class GradebookResponse(BaseModel):
    """Read-only report of one student in one course"""

    course: GradebookCourse
    enrollment: GradebookEnrollment
    quizzes: List[GradebookQuiz]
    assignments: List[AssignmentScoreEntry]
    final_grade: float
    letter_grade: str


class WeightedGrade(BaseModel):
    final_grade: float
    letter_grade: str
