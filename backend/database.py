# backend/database.py
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

from config import settings

Base = declarative_base()


def normalize_url(url: str) -> str:
    # Heroku/Azure style URLs use postgres://, SQLAlchemy requires postgresql://
    if url and url.startswith("postgres://"):
        return url.replace("postgres://", "postgresql://", 1)
    return url


def make_engine(url: str, **kwargs) -> Engine:
    url = normalize_url(url)
    if "sqlite" in url:
        connect_args = {"check_same_thread": False} # SQLite only
    else:
        connect_args = {}
    return create_engine(url, connect_args=connect_args, **kwargs)


def make_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


engine = make_engine(settings.DATABASE_URL)

SessionLocal = make_session_factory(engine)


def init_db(bind: Engine = engine):
    # Register tables on Base.metadata before creating them
    import models.product  # noqa: F401
    import models.log  # noqa: F401

    Base.metadata.create_all(bind=bind)
