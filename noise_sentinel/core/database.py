from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from noise_sentinel.core.config import settings

connect_args = {}
if settings.DATABASE_URL.startswith("sqlite"):
    # FastAPI runs sync endpoints in a threadpool
    connect_args = {"check_same_thread": False}

engine = create_engine(settings.DATABASE_URL, connect_args=connect_args)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()

def get_db():
    """One session per request"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
