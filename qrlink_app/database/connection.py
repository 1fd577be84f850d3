"""
Database connection setup.

One pooled engine per process; each request gets its own session via get_db().
"""

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker
from qrlink_app.config import settings


def build_engine(database_url: str) -> Engine:
    """Create an engine, relaxing SQLite's same-thread check for FastAPI workers"""
    connect_args = {}
    if database_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
    return create_engine(database_url, connect_args=connect_args, pool_pre_ping=True)


engine = build_engine(settings.database_url)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    """Yield a database session and close it when the request is done"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def check_connection(bind: Engine = engine) -> None:
    """Run a trivial query; raises if the database is unreachable"""
    with bind.connect() as conn:
        conn.execute(text("SELECT 1"))
