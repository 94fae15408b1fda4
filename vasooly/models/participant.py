"""Participant model"""
import enum
import uuid
from datetime import datetime

from sqlalchemy import (BigInteger, CheckConstraint, Column, DateTime, Enum,
                        ForeignKey, Integer, String)
from sqlalchemy.orm import relationship

from vasooly.database import Base


class PaymentStatus(str, enum.Enum):
    """Whether a participant has paid their share"""
    PENDING = "PENDING"
    PAID = "PAID"


class Participant(Base):
    """Participant owing a share of a bill"""

    __tablename__ = "participants"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    bill_id = Column(String(36), ForeignKey("bills.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    phone = Column(String(32), nullable=True)
    amount_paise = Column(BigInteger, nullable=False)
    status = Column(Enum(PaymentStatus), default=PaymentStatus.PENDING, nullable=False)
    paid_at = Column(DateTime, nullable=True)
    # Input order; the remainder paise sit with the lowest positions
    position = Column(Integer, nullable=False, default=0)

    # Constraints
    __table_args__ = (
        CheckConstraint('amount_paise >= 0', name='check_amount_paise_non_negative'),
    )

    # Relationships
    bill = relationship("Bill", back_populates="participants")

    def __repr__(self) -> str:
        return f"<Participant(bill_id={self.bill_id}, name={self.name}, amount_paise={self.amount_paise}, status={self.status})>"
