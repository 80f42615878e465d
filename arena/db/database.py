from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base

from arena.config import settings

connect_args = {"check_same_thread": False} if settings.DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(settings.DATABASE_URL, connect_args=connect_args)
SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)
Base = declarative_base()

mongo_client = settings.MONGO_CONFIG if settings.STORAGE_BACKEND == "mongo" else None
