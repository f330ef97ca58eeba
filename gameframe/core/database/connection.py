# File: gameframe/core/database/connection.py

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from gameframe.core.config.settings import settings

# check_same_thread=False lets pipeline runs on transport threads share the SQLite engine
connect_args = {"check_same_thread": False} if "sqlite" in settings.DATABASE_URL else {}

engine = create_engine(
    settings.DATABASE_URL,
    echo=False,
    pool_pre_ping=True,
    connect_args=connect_args
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
