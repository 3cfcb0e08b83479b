# app/repositories/base.py
from __future__ import annotations
import logging
from contextlib import contextmanager
from typing import Callable, Generic, Iterator, TypeVar

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.errors import DataError, StorageFailure

T = TypeVar("T")  # SQLAlchemy model type

log = logging.getLogger(__name__)

def require_user_id(user_id: str) -> str:
    """
    Every public repository method starts here. The id must come from a
    verified token (see app.deps.auth), never from a request body.
    """
    if not isinstance(user_id, str) or not user_id.strip():
        raise ValueError("an authenticated user id is required")
    return user_id

class BaseRepository(Generic[T]):
    """Lightweight base for repositories using SQLAlchemy 2.0 style."""
    def __init__(self, db: Session):
        self.db = db

    @contextmanager
    def atomic(
        self,
        *,
        on_integrity_error: Callable[[IntegrityError], DataError] | None = None,
    ) -> Iterator[Session]:
        """
        One transaction: commit when the block finishes, roll back on any error.

        IntegrityErrors are translated by `on_integrity_error` when the caller
        knows which constraint can fire; everything else from SQLAlchemy
        becomes StorageFailure.
        """
        try:
            yield self.db
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            if on_integrity_error is not None:
                raise on_integrity_error(exc) from exc
            log.exception("unclassified integrity error")
            raise StorageFailure() from exc
        except SQLAlchemyError as exc:
            self.db.rollback()
            log.exception("database error")
            raise StorageFailure() from exc
        except Exception:
            self.db.rollback()
            raise

    def guarded_read(self, fn: Callable[[], T]) -> T:
        try:
            return fn()
        except SQLAlchemyError as exc:
            self.db.rollback()
            log.exception("database error during read")
            raise StorageFailure() from exc
