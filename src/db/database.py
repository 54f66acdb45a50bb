"""Generate database session"""

from typing import Generator, Optional

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker

from src.core.config import Settings
from src.db.schema import Base


def build_engine(settings: Optional[Settings] = None) -> Engine:
    """Engine for the configured database. Ensures all tables are created."""
    settings = settings or Settings.from_env()
    engine = create_engine(settings.database_url, echo=settings.sql_echo)
    Base.metadata.create_all(bind=engine)
    return engine


def session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(bind=engine)


def get_db(factory: sessionmaker[Session]) -> Generator[Session, None, None]:
    db = factory()
    try:
        yield db
    finally:
        db.close()
