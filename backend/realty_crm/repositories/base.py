import logging
from typing import Generic, List, Optional, Type, TypeVar

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from realty_crm.core.errors import DuplicateResource, NotFound

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT")


class Repository(Generic[ModelT]):
    """Persistence for one model over an explicit session."""

    model: Type[ModelT]
    label = "Resource"
    owner_column = "assigned_agent_id"
    duplicate_message = "Resource already exists"

    def __init__(self, db: Session):
        self.db = db

    def get(self, obj_id: int) -> Optional[ModelT]:
        return self.db.get(self.model, obj_id)

    def get_or_404(self, obj_id: int) -> ModelT:
        obj = self.get(obj_id)
        if obj is None:
            raise NotFound(f"{self.label} not found")
        return obj

    def _newest_first(self, query):
        return query.order_by(self.model.created_at.desc(), self.model.id.desc())

    def list_all(self) -> List[ModelT]:
        return self._newest_first(self.db.query(self.model)).all()

    def list_by_owner(self, owner_id: int) -> List[ModelT]:
        query = self.db.query(self.model).filter(getattr(self.model, self.owner_column) == owner_id)
        return self._newest_first(query).all()

    def add(self, obj: ModelT) -> ModelT:
        """Stage ``obj`` and flush it so that it gets an id (no commit)."""
        self.db.add(obj)
        self._flush_or_raise()
        return obj

    def commit(self, *objs) -> None:
        """Commit the session and refresh ``objs``."""
        try:
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            logger.info("Unique constraint violated", extra={"model": self.label, "error": str(exc.orig)})
            raise DuplicateResource(self.duplicate_message)
        for obj in objs:
            self.db.refresh(obj)

    def create(self, obj: ModelT) -> ModelT:
        self.add(obj)
        self.commit(obj)
        return obj

    def delete(self, obj: ModelT) -> None:
        self.db.delete(obj)
        self.db.commit()

    def _flush_or_raise(self) -> None:
        try:
            self.db.flush()
        except IntegrityError as exc:
            self.db.rollback()
            logger.info("Unique constraint violated", extra={"model": self.label, "error": str(exc.orig)})
            raise DuplicateResource(self.duplicate_message)
