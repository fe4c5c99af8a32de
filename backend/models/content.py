from sqlalchemy import Column, Integer, String, DateTime, JSON, func
from database import Base


# Structured page document (about, homepage, theme, ...) keyed by content type
class Content(Base):
    __tablename__ = "content"

    id = Column(Integer, primary_key=True, index=True)
    type = Column(String(50), unique=True, nullable=False, index=True)
    data = Column(JSON, nullable=False)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())
