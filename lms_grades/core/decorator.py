import logging
from functools import wraps

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

logger = logging.getLogger(__name__)


class GradingException(Exception):
    error_type = "grading_error"

    def __init__(self, message: str, status_code: int = 400):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class NotFoundError(GradingException):
    error_type = "not_found"

    def __init__(self, message: str):
        super().__init__(message, 404)


class MaxAttemptsReachedError(GradingException):
    error_type = "max_attempts_reached"

    def __init__(self, max_attempts: int):
        self.max_attempts = max_attempts
        super().__init__(f"Maximum attempts ({max_attempts}) reached", 400)


class PersistenceError(GradingException):
    error_type = "database_error"

    def __init__(self, message: str, status_code: int = 500):
        super().__init__(message, status_code)


def db_exception(func):
    """Roll back the service session and re-raise store failures as PersistenceError.

    Wraps methods of services that keep their session on ``self.db``.
    """

    @wraps(func)
    def wrapper(self, *args, **kwargs):
        try:
            return func(self, *args, **kwargs)
        except IntegrityError as e:
            self.db.rollback()
            logger.error(f"Integrity error in {func.__qualname__}: {e.orig}")
            raise PersistenceError("Duplicate entry: already exists", 409) from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Database error in {func.__qualname__}: {e}")
            raise PersistenceError("Database error occurred", 500) from e

    return wrapper
