"""SQLAlchemy models for database-backed template sources."""
from datetime import datetime

from sqlalchemy import Column, DateTime, Integer, String, Text
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class CommandTemplate(Base):
    __tablename__ = "command_templates"

    id = Column(Integer, primary_key=True)
    # not unique: load() rejects duplicate names
    name = Column(String(255), nullable=False, index=True)
    body = Column(Text, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)
