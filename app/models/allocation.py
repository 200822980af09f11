"""
Allocation model — a user's stocks / funds / bonds split (percentages).
"""

from __future__ import annotations

from sqlalchemy import Column, ForeignKey, Integer

from app.db.base import Base


class Allocation(Base):
    __tablename__ = "allocations"

    id: int = Column(Integer, primary_key=True, index=True)  # type: ignore[assignment]
    user_id: int = Column(  # type: ignore[assignment]
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )
    stocks: int = Column(Integer, nullable=False)  # type: ignore[assignment]
    funds: int = Column(Integer, nullable=False)  # type: ignore[assignment]
    bonds: int = Column(Integer, nullable=False)  # type: ignore[assignment]
