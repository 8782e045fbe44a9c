"""
Database configuration and session management for the Products service.
"""
from sqlalchemy.orm import declarative_base, sessionmaker

from services.common.db import build_engine
from .config import DATABASE_URL

engine = build_engine(DATABASE_URL)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()

def get_db():
    """
    Dependency function that provides a database session.
    
    Yields:
        Session: SQLAlchemy database session
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
