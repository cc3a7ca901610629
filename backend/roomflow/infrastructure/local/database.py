"""
SQLite database configuration and ORM models.

This module defines the SQLAlchemy ORM models and database initialization.
"""

from datetime import datetime
from uuid import uuid4

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    JSON,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker

from roomflow.core.config import get_settings


class Base(DeclarativeBase):
    """SQLAlchemy declarative base."""

    pass


# ===========================================
# ORM Models
# ===========================================


class TeamMemberORM(Base):
    """Team member ORM model."""

    __tablename__ = "team_members"

    id = Column(String(255), primary_key=True, default=lambda: str(uuid4()))
    name = Column(String(200), nullable=False)
    email = Column(String(320), nullable=False, unique=True)
    role = Column(String(20), nullable=False, default="DESIGNER", index=True)
    image = Column(String(1000), nullable=True)
    created_at = Column(DateTime(timezone=True), default=datetime.utcnow)


class RoomORM(Base):
    """Room ORM model."""

    __tablename__ = "rooms"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))
    project_id = Column(String(255), nullable=False, index=True)
    type = Column(String(50), nullable=False)
    name = Column(String(200), nullable=True)
    created_at = Column(DateTime(timezone=True), default=datetime.utcnow)


class StageORM(Base):
    """Stage ORM model. One row per (room, phase type)."""

    __tablename__ = "stages"
    __table_args__ = (UniqueConstraint("room_id", "type", name="uq_stage_room_type"),)

    id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))
    room_id = Column(String(36), ForeignKey("rooms.id"), nullable=False, index=True)
    type = Column(String(30), nullable=False)
    status = Column(String(30), nullable=False, default="NOT_STARTED", index=True)
    assigned_to = Column(String(255), ForeignKey("team_members.id"), nullable=True, index=True)
    due_date = Column(DateTime(timezone=True), nullable=True)
    started_at = Column(DateTime(timezone=True), nullable=True)
    completed_at = Column(DateTime(timezone=True), nullable=True)
    completed_by_id = Column(String(255), nullable=True)
    updated_by_id = Column(String(255), nullable=True)
    created_at = Column(DateTime(timezone=True), default=datetime.utcnow)
    updated_at = Column(DateTime(timezone=True), default=datetime.utcnow, onupdate=datetime.utcnow)


class ActivityLogORM(Base):
    """Activity log ORM model."""

    __tablename__ = "activity_logs"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))
    actor_id = Column(String(255), nullable=True)
    action = Column(String(50), nullable=False)
    entity = Column(String(50), nullable=False)
    entity_id = Column(String(36), nullable=False, index=True)
    room_id = Column(String(36), nullable=True, index=True)
    details = Column(JSON, nullable=True, default=dict)
    created_at = Column(DateTime(timezone=True), default=datetime.utcnow, index=True)


class NotificationORM(Base):
    """Notification ORM model."""

    __tablename__ = "notifications"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))
    user_id = Column(String(255), nullable=False, index=True)
    type = Column(String(30), nullable=False)
    title = Column(String(200), nullable=False)
    message = Column(Text, nullable=False)
    read = Column(Boolean, default=False, nullable=False)
    related_id = Column(String(36), nullable=True, index=True)
    related_type = Column(String(50), nullable=True)
    created_at = Column(DateTime(timezone=True), default=datetime.utcnow, index=True)


# ===========================================
# Database Session Management
# ===========================================


def get_engine():
    """Get async engine instance."""
    settings = get_settings()
    return create_async_engine(settings.DATABASE_URL, echo=False)


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
