from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, ForeignKey, JSON, func
from sqlalchemy.orm import relationship
from database import Base


# Reusable message with {firstName}-style placeholders
class EmailTemplate(Base):
    __tablename__ = "email_templates"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    subject = Column(String, nullable=False)
    body = Column(Text, nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)

    created_at = Column(DateTime, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())


# One row per dispatch call, never per recipient
class EmailLog(Base):
    __tablename__ = "email_logs"

    id = Column(Integer, primary_key=True, index=True)
    to = Column(JSON, nullable=False, default=list)
    subject = Column(String, nullable=False)
    body = Column(Text, nullable=False)
    # sent | failed | pending
    status = Column(String(20), nullable=False, default="pending", index=True)
    template_id = Column(Integer, ForeignKey("email_templates.id", ondelete="SET NULL"), nullable=True)
    error = Column(Text, nullable=True)
    sent_at = Column(DateTime, server_default=func.now(), nullable=False, index=True)

    template = relationship("EmailTemplate", lazy="joined", uselist=False)
