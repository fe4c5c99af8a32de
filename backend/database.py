# backend/database.py
from sqlalchemy import create_engine, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import declarative_base
from sqlalchemy.orm import sessionmaker

from config import settings

# 1. Database URL from settings (local SQLite by default)
SQLALCHEMY_DATABASE_URL = settings.DATABASE_URL

# 2. SQLAlchemy needs the postgresql:// scheme
if SQLALCHEMY_DATABASE_URL.startswith("postgres://"):
    SQLALCHEMY_DATABASE_URL = SQLALCHEMY_DATABASE_URL.replace("postgres://", "postgresql://", 1)


def make_engine(url: str):
    # check_same_thread is SQLite only
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    return create_engine(url, connect_args=connect_args, pool_pre_ping=True)


engine = make_engine(SQLALCHEMY_DATABASE_URL)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def init_db():
    # Register every model on Base.metadata before creating tables
    import models.users, models.product, models.category, models.email  # noqa: F401
    import models.content, models.media, models.log  # noqa: F401
    Base.metadata.create_all(bind=engine)

def check_db_health(db) -> dict:
    """Run a trivial query and report whether the database answered."""
    try:
        db.execute(text("SELECT 1"))
        return {"connected": True, "dialect": db.get_bind().dialect.name}
    except SQLAlchemyError as e:
        db.rollback()
        return {"connected": False, "dialect": db.get_bind().dialect.name, "error": str(e)}
