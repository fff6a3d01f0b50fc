from __future__ import annotations
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from .settings import settings


DATABASE_URL = settings.database_url or "sqlite:///./simulation.db"

_connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}
# The simulator database sits behind a small pool; the dashboard only reads.
_pool_args = {} if DATABASE_URL.startswith("sqlite") else {"pool_size": 5, "pool_pre_ping": True, "pool_recycle": 1800}

engine = create_engine(DATABASE_URL, connect_args=_connect_args, future=True, **_pool_args)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine, future=True)
Base = declarative_base()


def get_db():
	db = SessionLocal()
	try:
		yield db
	finally:
		db.close()


def ensure_schema() -> None:
	"""Create the simulator tables on a local SQLite file for development.

	Production points DATABASE_URL at the simulator's own database, whose schema
	is owned elsewhere, so nothing is created there.
	"""
	if not DATABASE_URL.startswith("sqlite"):
		return
	from . import models  # noqa: F401  (registers the mappings on Base)
	Base.metadata.create_all(bind=engine)
