from .course import router as course_router
from .course_grade import router as course_grade_router
from .quiz import router as quiz_router

routes = [
    course_router,
    quiz_router,
    course_grade_router,
]
