"""SQLAlchemy ORM models for research projects and user profiles."""
from __future__ import annotations

import datetime
import uuid
from datetime import timezone

from sqlalchemy import JSON, Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()


def _utcnow() -> datetime.datetime:
    """Get current UTC timezone-aware datetime."""
    return datetime.datetime.now(timezone.utc)


def _new_id() -> str:
    return str(uuid.uuid4())


class Project(Base):
    """A research project: questionnaire, company analysis, collected responses and report."""

    __tablename__ = "projects"

    id = Column(String, primary_key=True, default=_new_id)
    user_id = Column(String, nullable=False, index=True)
    company_name = Column(String, nullable=False)
    research_goal = Column(String, nullable=False)
    status = Column(String, nullable=False, default="Draft")
    questions = Column(JSON, nullable=False, default=list)
    company_analysis = Column(JSON)
    report = Column(JSON)
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False)

    response_rows = relationship(
        "ProjectResponse",
        order_by="ProjectResponse.id",
        lazy="selectin",
        cascade="all, delete-orphan",
    )

    @property
    def responses(self) -> list:
        return [row.payload for row in self.response_rows]


class ProjectResponse(Base):
    """One submitted response. Rows are only ever inserted, never rewritten."""

    __tablename__ = "project_responses"

    id = Column(Integer, primary_key=True, autoincrement=True)
    project_id = Column(String, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True)
    payload = Column(JSON, nullable=False)
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)


class Profile(Base):
    """User profile keyed by the auth subject id."""

    __tablename__ = "profiles"

    id = Column(String, primary_key=True)
    email = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)
