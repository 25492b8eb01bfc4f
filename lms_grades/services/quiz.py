# lms_grades/services/quiz.py
import logging
from typing import List, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Session

from lms_grades.core.decorator import NotFoundError, db_exception
from lms_grades.models.quiz import Quiz
from lms_grades.models.quiz_question import QuizQuestion
from lms_grades.schemas.quiz import (
    QuizCreate,
    QuizQuestionCreate,
    QuizQuestionUpdate,
    QuizUpdate,
)
from lms_grades.services.course import CourseService

logger = logging.getLogger(__name__)


class QuizService:
    def __init__(self, db: Session):
        self.db = db

    # ==================== Quizzes ====================

    def get_quiz(self, quiz_id: int) -> Quiz:
        quiz = self.db.query(Quiz).filter(Quiz.id == quiz_id).first()
        if not quiz:
            raise NotFoundError("Quiz not found")
        return quiz

    def get_quiz_with_questions(self, quiz_id: int) -> Tuple[Quiz, List[QuizQuestion]]:
        quiz = self.get_quiz(quiz_id)
        return quiz, self.get_questions(quiz_id)

    def list_course_quizzes(
        self, course_id: int, published_only: bool = False
    ) -> List[Quiz]:
        query = self.db.query(Quiz).filter(Quiz.course_id == course_id)
        if published_only:
            query = query.filter(Quiz.is_published.is_(True))
        return query.order_by(Quiz.id).all()

    @db_exception
    def create_quiz(self, course_id: int, quiz_in: QuizCreate) -> Quiz:
        """Create a quiz in a course. New quizzes start unpublished."""
        CourseService(self.db).get_course(course_id)

        quiz = Quiz(course_id=course_id, is_published=False, **quiz_in.model_dump())
        self.db.add(quiz)
        self.db.commit()
        self.db.refresh(quiz)

        logger.info(f"Quiz {quiz.id} created in course {course_id}")
        return quiz

    @db_exception
    def update_quiz(self, quiz_id: int, quiz_in: QuizUpdate) -> Quiz:
        quiz = self.get_quiz(quiz_id)

        # Only touch fields the caller actually sent
        for field, value in quiz_in.model_dump(exclude_unset=True).items():
            setattr(quiz, field, value)

        self.db.commit()
        self.db.refresh(quiz)
        return quiz

    @db_exception
    def set_published(self, quiz_id: int, is_published: bool) -> Quiz:
        quiz = self.get_quiz(quiz_id)
        quiz.is_published = is_published
        self.db.commit()
        self.db.refresh(quiz)

        logger.info(f"Quiz {quiz_id} {'published' if is_published else 'unpublished'}")
        return quiz

    def publish_quiz(self, quiz_id: int) -> Quiz:
        return self.set_published(quiz_id, True)

    def unpublish_quiz(self, quiz_id: int) -> Quiz:
        return self.set_published(quiz_id, False)

    @db_exception
    def delete_quiz(self, quiz_id: int) -> None:
        """Delete a quiz together with its questions."""
        quiz = self.get_quiz(quiz_id)
        self.db.delete(quiz)
        self.db.commit()
        logger.info(f"Quiz {quiz_id} deleted")

    # ==================== Questions ====================

    def get_questions(self, quiz_id: int) -> List[QuizQuestion]:
        return (
            self.db.query(QuizQuestion)
            .filter(QuizQuestion.quiz_id == quiz_id)
            .order_by(QuizQuestion.order)
            .all()
        )

    def get_question(self, question_id: int) -> QuizQuestion:
        question = (
            self.db.query(QuizQuestion).filter(QuizQuestion.id == question_id).first()
        )
        if not question:
            raise NotFoundError("Question not found")
        return question

    @db_exception
    def add_question(self, quiz_id: int, question_in: QuizQuestionCreate) -> QuizQuestion:
        """Append a question; its order is the number of questions already present."""
        self.get_quiz(quiz_id)

        existing_count = (
            self.db.query(func.count(QuizQuestion.id))
            .filter(QuizQuestion.quiz_id == quiz_id)
            .scalar()
            or 0
        )

        question = QuizQuestion(
            quiz_id=quiz_id, order=existing_count, **question_in.model_dump()
        )
        self.db.add(question)
        self.db.commit()
        self.db.refresh(question)
        return question

    @db_exception
    def update_question(
        self, question_id: int, question_in: QuizQuestionUpdate
    ) -> QuizQuestion:
        question = self.get_question(question_id)

        for field, value in question_in.model_dump(exclude_unset=True).items():
            setattr(question, field, value)

        self.db.commit()
        self.db.refresh(question)
        return question

    @db_exception
    def delete_question(self, question_id: int) -> None:
        """Delete a question and close the gap it leaves in the quiz order."""
        question = self.get_question(question_id)
        quiz_id, removed_order = question.quiz_id, question.order

        self.db.delete(question)
        self.db.flush()

        later_questions = (
            self.db.query(QuizQuestion)
            .filter(
                QuizQuestion.quiz_id == quiz_id,
                QuizQuestion.order > removed_order,
            )
            .order_by(QuizQuestion.order)
            .all()
        )
        # One row at a time so (quiz_id, order) stays unique at every step
        for later in later_questions:
            later.order -= 1
            self.db.flush()

        self.db.commit()
