"""
Database connection and session management.
"""
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
import os
from dotenv import load_dotenv

load_dotenv()

# Get settings from environment
database_url = os.getenv("DATABASE_URL", "sqlite:///./movements.db")
database_echo = os.getenv("DATABASE_ECHO", "false").lower() in ("1", "true", "yes")
export_dir = os.getenv("EXPORT_DIR", "./exports")

class Settings:
    database_url = database_url
    database_echo = database_echo
    export_dir = export_dir

settings = Settings()

# SQLite connections are shared with the FastAPI threadpool
connect_args = {"check_same_thread": False} if settings.database_url.startswith("sqlite") else {}

engine = create_engine(settings.database_url, echo=settings.database_echo, connect_args=connect_args)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()
