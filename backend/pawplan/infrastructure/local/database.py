"""
SQLite database configuration and ORM models.

This module defines the SQLAlchemy ORM models and database initialization.
"""

from uuid import uuid4

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Index,
    Integer,
    String,
    Text,
)
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker

from pawplan.core.config import get_settings
from pawplan.utils.datetime_utils import now_utc


class Base(DeclarativeBase):
    """SQLAlchemy declarative base."""

    pass


# ===========================================
# ORM Models
# ===========================================


class PetORM(Base):
    """Pet ORM model."""

    __tablename__ = "pets"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))
    user_id = Column(String(255), nullable=False, index=True)
    name = Column(String(200), nullable=False)
    created_at = Column(DateTime, default=now_utc)


class TrainingTaskORM(Base):
    """Training task ORM model."""

    __tablename__ = "training_tasks"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))
    pet_id = Column(String(36), nullable=False, index=True)
    user_id = Column(String(255), nullable=False)
    day_of_week = Column(String(2), nullable=False)
    title = Column(String(500), nullable=False)
    category = Column(String(20), nullable=False, default="obedience")
    description = Column(Text, nullable=False, default="")
    time = Column(String(5), nullable=False)
    duration_minutes = Column(Integer, nullable=False)
    completed = Column(Boolean, nullable=False, default=False)
    # Not unique: deletes leave gaps and an interrupted reorder can
    # leave duplicates until the partition is repaired.
    order = Column("order", Integer, nullable=False, default=0)
    created_at = Column(DateTime, default=now_utc)

    __table_args__ = (Index("ix_training_tasks_partition", "pet_id", "day_of_week"),)


# ===========================================
# Database Session Management
# ===========================================


def get_engine():
    """Get async engine instance."""
    settings = get_settings()
    return create_async_engine(settings.DATABASE_URL, echo=settings.DEBUG)


def get_session_factory():
    """Get async session factory."""
    engine = get_engine()
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def init_db():
    """Initialize database tables."""
    engine = get_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    await engine.dispose()
