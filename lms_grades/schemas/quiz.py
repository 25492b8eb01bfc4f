# lms_grades/schemas/quiz.py
from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

QuestionType = Literal["true_false", "single_choice", "multiple_choice", "short_answer"]


# ==================== Quiz Question Schemas ====================


class QuizQuestionCreate(BaseModel):
    """Schema for appending a question to a quiz - ADMIN ONLY (includes correct answer)"""

    type: QuestionType
    question: str = Field(..., min_length=1)
    options: Optional[List[str]] = None
    correct_answer: Optional[str] = Field(
        None, description="Exact answer text; compared case-sensitively"
    )
    explanation: Optional[str] = None
    points: int = Field(default=1, ge=0)


class QuizQuestionUpdate(BaseModel):
    """Partial update; only fields present in the payload are written"""

    question: Optional[str] = Field(None, min_length=1)
    options: Optional[List[str]] = None
    correct_answer: Optional[str] = None
    explanation: Optional[str] = None
    points: Optional[int] = Field(None, ge=0)

    @field_validator("question", "points")
    @classmethod
    def reject_null(cls, v):
        if v is None:
            raise ValueError("Field cannot be null")
        return v


class QuizQuestionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    quiz_id: int
    type: str
    question: str
    options: Optional[List[str]] = None
    correct_answer: Optional[str] = None
    explanation: Optional[str] = None
    points: int
    order: int


# ==================== Quiz Schemas ====================


class QuizBase(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    lesson_id: Optional[int] = None
    passing_score: int = Field(..., ge=0, le=100)
    time_limit: Optional[int] = Field(None, ge=1, description="Time limit in seconds")
    max_attempts: Optional[int] = Field(None, ge=1)
    weight: Optional[int] = Field(
        None, ge=0, description="Share of the course final grade"
    )


class QuizCreate(QuizBase):
    pass


class QuizUpdate(BaseModel):
    """Partial update; only fields present in the payload are written"""

    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    passing_score: Optional[int] = Field(None, ge=0, le=100)
    time_limit: Optional[int] = Field(None, ge=1)
    max_attempts: Optional[int] = Field(None, ge=1)
    weight: Optional[int] = Field(None, ge=0)

    @field_validator("title", "passing_score")
    @classmethod
    def reject_null(cls, v):
        if v is None:
            raise ValueError("Field cannot be null")
        return v


class QuizResponse(QuizBase):
    model_config = ConfigDict(from_attributes=True)

    id: int
    course_id: int
    is_published: bool
    created_at: datetime
    updated_at: datetime


class QuizWithQuestionsResponse(QuizResponse):
    course_name: str
    questions: List[QuizQuestionResponse] = []


class QuizListResponse(BaseModel):
    quizzes: List[QuizResponse]
    total: int
