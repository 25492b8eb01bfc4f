# lms_grades/services/grading.py
"""
Grading policy shared by the attempt scorer, the course grade aggregator and
the gradebook report. Everything here is pure: no session, no I/O.
"""
import logging
import math
from typing import Iterable, List, Optional, Sequence

from lms_grades.models.quiz_attempt import QuizAttempt
from lms_grades.models.quiz_question import QuizQuestion
from lms_grades.schemas.course_grade import QuizScoreEntry, WeightedGrade
from lms_grades.schemas.quiz_attempt import (
    AnswerSubmission,
    QuestionResult,
    ScoreSummary,
)

logger = logging.getLogger(__name__)

# (minimum final grade, letter), checked top-down
LETTER_GRADE_CUTOFFS = (
    (90, "A"),
    (80, "B"),
    (70, "C"),
    (60, "D"),
)
FAILING_LETTER = "F"
NO_GRADE_LETTER = "N/A"


def round_half_up(value: float, digits: int = 0) -> float:
    factor = 10**digits
    return math.floor(value * factor + 0.5) / factor


def percentage(earned_points: int, total_points: int) -> int:
    """Rounded percentage; a quiz worth zero points scores 0."""
    if total_points <= 0:
        logger.warning(
            f"Quiz has no scorable points (total={total_points}); scoring attempt as 0"
        )
        return 0
    return int(round_half_up(earned_points / total_points * 100))


def letter_grade(final_grade: float) -> str:
    for cutoff, letter in LETTER_GRADE_CUTOFFS:
        if final_grade >= cutoff:
            return letter
    return FAILING_LETTER


def score_answers(
    questions: Sequence[QuizQuestion], answers: Iterable[AnswerSubmission]
) -> ScoreSummary:
    """
    Score an answer sheet against the quiz questions.

    Questions are visited in the order given. A question without a submitted
    answer is scored as the empty string. Answers are compared to the stored
    correct answer by exact string equality.
    """
    submitted = {}
    for answer in answers:
        # first submission for a question wins
        submitted.setdefault(answer.question_id, answer.answer)

    results: List[QuestionResult] = []
    for question in questions:
        user_answer = submitted.get(question.id, "")
        is_correct = (
            question.correct_answer is not None
            and user_answer == question.correct_answer
        )
        results.append(
            QuestionResult(
                question_id=question.id,
                user_answer=user_answer,
                correct_answer=question.correct_answer,
                is_correct=is_correct,
                points=question.points if is_correct else 0,
            )
        )

    total_points = sum(question.points for question in questions)
    earned_points = sum(result.points for result in results)

    return ScoreSummary(
        earned_points=earned_points,
        total_points=total_points,
        score=percentage(earned_points, total_points),
        results=results,
    )


def select_best_attempt(attempts: Sequence[QuizAttempt]) -> Optional[QuizAttempt]:
    """Highest score wins; on a tie the earliest attempt in the sequence is kept."""
    if not attempts:
        return None
    return max(attempts, key=lambda attempt: attempt.score)


def quiz_score_entry(quiz_id: int, score: int, weight: Optional[int]) -> QuizScoreEntry:
    weight = weight or 0
    return QuizScoreEntry(
        quiz_id=quiz_id,
        score=score,
        weight=weight,
        weighted_score=score * weight / 100,
    )


def compute_weighted_grade(quiz_scores: Sequence[QuizScoreEntry]) -> WeightedGrade:
    """
    Combine per-quiz best scores into a final course grade.

    Weighted mean when any weight is configured, plain mean of the raw scores
    when every weight is zero, and 0 when there is nothing to grade.
    """
    # Assignments carry no weight until assignment grading exists
    total_weight = sum(entry.weight for entry in quiz_scores)

    if total_weight > 0:
        weighted_total = sum(entry.weighted_score for entry in quiz_scores)
        final_grade = weighted_total / total_weight * 100
    elif quiz_scores:
        final_grade = sum(entry.score for entry in quiz_scores) / len(quiz_scores)
    else:
        final_grade = 0.0

    final_grade = round_half_up(final_grade, 2)
    return WeightedGrade(final_grade=final_grade, letter_grade=letter_grade(final_grade))
