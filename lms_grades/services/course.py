# lms_grades/services/course.py
import logging
from typing import Optional

from sqlalchemy import and_
from sqlalchemy.orm import Session

from lms_grades.core.decorator import NotFoundError, PersistenceError, db_exception
from lms_grades.models.course import Course
from lms_grades.models.course_enrollment import CourseEnrollment
from lms_grades.schemas.course import CourseCreate, CourseEnrollmentCreate

logger = logging.getLogger(__name__)


class CourseService:
    def __init__(self, db: Session):
        self.db = db

    @db_exception
    def create_course(self, course_in: CourseCreate) -> Course:
        course = Course(**course_in.model_dump())
        self.db.add(course)
        self.db.commit()
        self.db.refresh(course)
        return course

    def get_course(self, course_id: int) -> Course:
        course = self.db.query(Course).filter(Course.id == course_id).first()
        if not course:
            raise NotFoundError("Course not found")
        return course


class CourseEnrollmentService:
    """Minimal enrollment access; enrollment itself is owned by the LMS."""

    def __init__(self, db: Session):
        self.db = db

    def get_enrollment(self, user_id: int, course_id: int) -> Optional[CourseEnrollment]:
        return (
            self.db.query(CourseEnrollment)
            .filter(
                and_(
                    CourseEnrollment.user_id == user_id,
                    CourseEnrollment.course_id == course_id,
                )
            )
            .first()
        )

    @db_exception
    def enroll_user(
        self, course_id: int, enrollment_in: CourseEnrollmentCreate
    ) -> CourseEnrollment:
        CourseService(self.db).get_course(course_id)

        if self.get_enrollment(enrollment_in.user_id, course_id):
            raise PersistenceError("Already enrolled in this course", 409)

        enrollment = CourseEnrollment(
            user_id=enrollment_in.user_id,
            course_id=course_id,
            progress=enrollment_in.progress,
        )
        self.db.add(enrollment)
        self.db.commit()
        self.db.refresh(enrollment)

        logger.info(f"User {enrollment_in.user_id} enrolled in course {course_id}")
        return enrollment
