"""Database models for the Content Guard backend."""

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, Integer, String, Text, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base model class with common fields."""

    __abstract__ = True

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )


class AnalysisResult(Base):
    """A flagged page passage and the replacement shown to the user. Rows are never updated."""

    __tablename__ = "analysis_result"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    # Content type: 'warning', 'negative', 'info'
    type: Mapped[str] = mapped_column(String(20), nullable=False, index=True)

    original_content: Mapped[str] = mapped_column(Text, nullable=False)
    rephrased_content: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Page the passage was found on
    url: Mapped[str] = mapped_column(Text, nullable=False)
    domain: Mapped[str] = mapped_column(String(255), nullable=False, index=True)

    timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
        index=True,
    )
