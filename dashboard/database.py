### Description ###
# SmartStay-Dashboard - Guest Portal Administration
# - App Database Setup -
# Author: Bailey Dixon
# Date: 10/19/2026
# Python: 3.11
####################

"""
App Database Setup

Relational durable store for:
- hotels (one row per tenant, keyed by the auth user id)
- links (ordered guest-portal link directory per hotel)

Activities and user profiles are session-local and never stored here.
Uses synchronous SQLAlchemy (no greenlet dependency).
"""

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from dashboard.config import get_api_settings, get_project_root

# Database file location (default SQLite lives under data/)
DATA_DIR = get_project_root() / "data"
DATA_DIR.mkdir(exist_ok=True)
DATABASE_URL = get_api_settings().database_url

# SQLite needs cross-thread access for the threadpool FastAPI runs sync code in
_connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}

# Create engine (synchronous)
engine = create_engine(
    DATABASE_URL,
    connect_args=_connect_args,
    echo=False,  # Set True for SQL debugging
)

# Session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Base class for models
Base = declarative_base()


def init_db():
    """
    Initialize the database - create all tables.

    Call this on application startup.
    """
    # Import models to register them with Base
    from dashboard.models import hotel, link  # noqa: F401

    Base.metadata.create_all(bind=engine)
    print(f"Database initialized at: {DATABASE_URL}")
