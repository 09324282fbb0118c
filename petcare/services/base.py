from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
import logging

from ..core.exceptions import InternalError

logger = logging.getLogger(__name__)

class BaseService:
    def __init__(self, db: Session):
        self.db = db

    def _commit(self, *refresh) -> None:
        """Commit the unit of work, rolling back on storage failure.

        Constraint violations are re-raised for the caller to translate;
        anything else surfaces as InternalError.
        """
        try:
            self.db.commit()
            for instance in refresh:
                self.db.refresh(instance)
        except IntegrityError:
            self.db.rollback()
            raise
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error(f"Database error in {type(self).__name__}: {exc}")
            raise InternalError()
