"""SQLAlchemy ORM models for Repository Tracker."""

import uuid
from datetime import datetime

from sqlalchemy import BigInteger, DateTime, ForeignKey, String, Uuid, func
from sqlalchemy.orm import (
    DeclarativeBase,
    Mapped,
    mapped_column,
    relationship,
)
from sqlalchemy.types import JSON


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


# ------------------------------------------------------------------------------
# Repository model
# ------------------------------------------------------------------------------
class Repository(Base):
    """Tracked GitHub repository."""

    __tablename__ = "repositories"

    repository_id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    url: Mapped[str] = mapped_column(String(500), unique=True)  # "https://github.com/owner/repo"

    # --------------------------------------------------------------------------
    # GitHub data (refreshed by the tracker when the digest changes)
    # --------------------------------------------------------------------------
    topics: Mapped[list[str] | None] = mapped_column(JSON, nullable=True)
    languages: Mapped[list[str] | None] = mapped_column(JSON, nullable=True)
    stars: Mapped[int | None] = mapped_column(nullable=True)
    digest: Mapped[str | None] = mapped_column(String(64), nullable=True)

    # --------------------------------------------------------------------------
    # Metadata
    # --------------------------------------------------------------------------
    last_tracked_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=func.now())

    # Relationships
    issues: Mapped[list["Issue"]] = relationship(
        back_populates="repository",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<Repository(id={self.repository_id}, url='{self.url}')>"


# ------------------------------------------------------------------------------
# Issue model
# ------------------------------------------------------------------------------
class Issue(Base):
    """Open GitHub issue of a tracked repository.

    Only currently open issues are stored: rows are removed as soon as the
    issue disappears from the repository's open issues on GitHub.
    """

    __tablename__ = "issues"

    # GitHub database id, not generated locally
    issue_id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=False)

    repository_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("repositories.repository_id", ondelete="CASCADE")
    )

    title: Mapped[str] = mapped_column(String(1000))
    url: Mapped[str] = mapped_column(String(500))
    number: Mapped[int] = mapped_column()
    labels: Mapped[list[str]] = mapped_column(JSON, default=list)
    published_at: Mapped[datetime] = mapped_column(DateTime)
    digest: Mapped[str | None] = mapped_column(String(64), nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=func.now(), onupdate=func.now())

    repository: Mapped["Repository"] = relationship(back_populates="issues")

    def __repr__(self) -> str:
        return f"<Issue(id={self.issue_id}, repo='{self.repository_id}', number={self.number})>"
