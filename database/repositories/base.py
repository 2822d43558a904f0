from typing import Optional, Type, TypeVar

from sqlalchemy.orm import Session

from database.models import Base

ModelT = TypeVar('ModelT', bound=Base)


class BaseRepository:
    """Repositories borrow a session; the caller's unit of work commits or rolls back."""

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, model: Type[ModelT], pk: str) -> Optional[ModelT]:
        if not pk:
            return None
        return self.db.get(model, pk)
