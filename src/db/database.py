"""Generate database session"""

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import sessionmaker

from src.core.config import Config
from src.db.schema import Base

engine = create_engine(Config.DATABASE_URL, echo=Config.DB_ECHO)
SessionLocal = sessionmaker(bind=engine)


def init_db(bind: Engine = engine) -> None:
    """Ensure all tables are created"""
    Base.metadata.create_all(bind=bind)
