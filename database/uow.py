import contextlib
import logging
from typing import Optional

from sqlalchemy.orm import sessionmaker

from database.database import SessionLocal
from database.repositories.saved_match import SavedMatchRepository

logger = logging.getLogger(__name__)


@contextlib.contextmanager
def recommendation_uow(session_factory: Optional[sessionmaker] = None):
    """Per-unit-of-work transaction scope for saved matches.

    Yields a SavedMatchRepository bound to a fresh Session. Commits on success,
    rolls back on exception, always closes.

    Usage:
        with recommendation_uow() as repo:
            repo.add(lead_id, property_id)
        # commit happens automatically on successful exit
    """
    session = (session_factory or SessionLocal)()
    try:
        repo = SavedMatchRepository(session)
        yield repo
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
