# lms_grades/schemas/quiz_attempt.py
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class AnswerSubmission(BaseModel):
    """User's answer for a quiz question"""

    question_id: int
    answer: str = Field(default="", description="Submitted answer text")


class QuizAttemptCreate(BaseModel):
    """Submit quiz attempt"""

    user_id: int
    answers: List[AnswerSubmission] = []
    time_spent: int = Field(..., ge=0, description="Time spent in seconds")


class QuestionResult(BaseModel):
    """Outcome of one question inside an attempt"""

    question_id: int
    user_answer: str
    correct_answer: Optional[str] = None
    is_correct: bool
    points: int


class AttemptResult(BaseModel):
    """Returned right after a submission"""

    attempt_id: int
    score: int
    passed: bool
    earned_points: int
    total_points: int
    results: List[QuestionResult]
    course_grade_id: Optional[int] = None


class QuizAttemptResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    quiz_id: int
    user_id: int
    score: int
    passed: bool
    time_spent: int
    answers: List[QuestionResult]
    completed_at: datetime


class QuizAttemptListResponse(BaseModel):
    attempts: List[QuizAttemptResponse]
    total: int


class QuizAttemptStats(BaseModel):
    """Statistics for a user's quiz attempts"""

    quiz_id: int
    total_attempts: int
    best_score: Optional[int] = None
    average_score: Optional[float] = None
    last_attempt_at: Optional[datetime] = None
    passed: bool = False


class ScoreSummary(BaseModel):
    """Outcome of scoring a full answer sheet, before it is stored"""

    earned_points: int
    total_points: int
    score: int
    results: List[QuestionResult]
