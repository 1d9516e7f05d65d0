"""Generate database session"""

from typing import Generator

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker

from jokerchess.core.config import Settings
from jokerchess.db.schema import Base


def make_engine(settings: Settings) -> Engine:
    engine = create_engine(settings.database_url, echo=settings.database_echo)
    # Ensure all tables are created
    Base.metadata.create_all(bind=engine)
    return engine


def make_session_factory(settings: Settings) -> sessionmaker[Session]:
    return sessionmaker(bind=make_engine(settings))


def get_db(session_factory: sessionmaker[Session]) -> Generator[Session, None, None]:
    db = session_factory()
    try:
        yield db
    finally:
        db.close()
