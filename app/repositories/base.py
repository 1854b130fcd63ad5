import logging
from typing import Any, Dict, Generic, List, Optional, Type, TypeVar

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.database.session import Base

logger = logging.getLogger(__name__)

ModelType = TypeVar("ModelType", bound=Base)


class ConstraintViolationError(Exception):
    """Raised when a write violates a unique or foreign key constraint."""


class Repository(Generic[ModelType]):
    """
    Data access for a single model. Entities stay plain records; every
    query and write for them goes through here.
    """
    model: Type[ModelType]

    def __init__(self, db: Session):
        self.db = db

    def _query(self):
        return self.db.query(self.model)

    def find_by_id(self, record_id: int) -> Optional[ModelType]:
        return self._query().filter(self.model.id == record_id).first()

    def find_all(self) -> List[ModelType]:
        return self._query().order_by(self.model.id).all()

    def insert(self, values: Dict[str, Any]) -> ModelType:
        record = self.model(**values)
        self.db.add(record)
        self._commit()
        self.db.refresh(record)
        return record

    def update(self, record: ModelType, values: Dict[str, Any]) -> ModelType:
        for key, value in values.items():
            setattr(record, key, value)
        self._commit()
        self.db.refresh(record)
        return record

    def delete(self, record: ModelType) -> None:
        self.db.delete(record)
        self._commit()

    def _commit(self) -> None:
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.warning(f"Integrity error writing {self.model.__tablename__}: {e.orig}")
            raise ConstraintViolationError(str(e.orig)) from e
        except Exception:
            self.db.rollback()
            raise
