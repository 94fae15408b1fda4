"""Bill model"""
import enum
import uuid
from datetime import datetime

from sqlalchemy import (BigInteger, CheckConstraint, Column, DateTime, Enum,
                        String, Text)
from sqlalchemy.orm import relationship

from vasooly.database import Base


class BillStatus(str, enum.Enum):
    """Lifecycle of a bill"""
    ACTIVE = "ACTIVE"
    SETTLED = "SETTLED"
    DELETED = "DELETED"


class ExpenseCategory(str, enum.Enum):
    """Enum for bill categories"""
    FOOD = "FOOD"
    TRAVEL = "TRAVEL"
    SHOPPING = "SHOPPING"
    ENTERTAINMENT = "ENTERTAINMENT"
    OTHER = "OTHER"


class Bill(Base):
    """Shared bill split among participants"""

    __tablename__ = "bills"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    title = Column(String(255), nullable=False)
    total_amount_paise = Column(BigInteger, nullable=False)
    category = Column(Enum(ExpenseCategory), nullable=True)
    description = Column(Text, nullable=True)
    status = Column(Enum(BillStatus), default=BillStatus.ACTIVE, nullable=False, index=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)
    deleted_at = Column(DateTime, nullable=True)

    # Constraints
    __table_args__ = (
        CheckConstraint('total_amount_paise > 0', name='check_total_amount_paise_positive'),
    )

    # Relationships
    participants = relationship(
        "Participant",
        back_populates="bill",
        cascade="all, delete-orphan",
        order_by="Participant.position",
    )

    def __repr__(self) -> str:
        return f"<Bill(id={self.id}, title={self.title}, total_amount_paise={self.total_amount_paise})>"
