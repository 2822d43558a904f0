import os
import contextlib
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from database.models import Base

DATABASE_URL = os.environ.get("DATABASE_URL", "sqlite:///matching.db")

engine = create_engine(DATABASE_URL)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def make_session_factory(url: str) -> sessionmaker:
    """Build a session factory for a database other than DATABASE_URL."""
    return sessionmaker(autocommit=False, autoflush=False, bind=create_engine(url))


def init_db(bind=None) -> None:
    """Create missing tables."""
    Base.metadata.create_all(bind=bind or engine)


@contextlib.contextmanager
def db_session_scope(session_factory: sessionmaker = None):
    """Provide a transactional scope around a series of operations."""
    session: Session = (session_factory or SessionLocal)()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
