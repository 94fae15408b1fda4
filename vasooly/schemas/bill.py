"""Bill schemas"""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import ConfigDict, Field, field_validator

from vasooly.models.bill import BillStatus, ExpenseCategory
from vasooly.models.participant import PaymentStatus
from vasooly.schemas.common import CamelModel, PaginationMeta
from vasooly.schemas.split import AmountInput


class ParticipantInput(CamelModel):
    """Input schema for a bill participant"""

    id: Optional[str] = Field(default=None, max_length=36)
    name: str = Field(..., max_length=255)
    phone: Optional[str] = Field(default=None, max_length=32)

    @field_validator("phone")
    @classmethod
    def strip_phone(cls, v):
        """Normalize blank phone numbers to None"""
        if v is None:
            return v
        return v.strip() or None


class BillCreate(AmountInput):
    """Schema for creating a bill"""

    title: str = Field(..., min_length=1, max_length=255)
    category: Optional[ExpenseCategory] = None
    description: Optional[str] = Field(default=None, max_length=2000)
    participants: List[ParticipantInput]

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        """Reject whitespace-only titles"""
        if not v.strip():
            raise ValueError("Title must not be blank")
        return v.strip()


class ParticipantResponse(CamelModel):
    """Response schema for a bill participant"""

    id: str
    name: str
    phone: Optional[str] = None
    amount_paise: int
    status: PaymentStatus
    paid_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class BillResponse(CamelModel):
    """Complete bill response schema"""

    id: str
    title: str
    total_amount_paise: int
    category: Optional[ExpenseCategory] = None
    description: Optional[str] = None
    status: BillStatus
    participants: List[ParticipantResponse]
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class BillListResponse(CamelModel):
    """Response schema for bill list"""

    items: List[BillResponse]
    pagination: PaginationMeta


class PaymentStatusUpdate(CamelModel):
    """Request body for changing a participant's payment status"""

    status: PaymentStatus


class SettlementSummary(CamelModel):
    """Aggregated payment state of a bill"""

    total_amount_paise: int
    paid_amount_paise: int
    pending_amount_paise: int
    paid_percentage: float
    pending_percentage: float
    paid_count: int
    pending_count: int
    total_count: int
    is_fully_settled: bool
    is_partially_settled: bool


class RemainderCalculation(CamelModel):
    """Amount still owed on a bill and who owes it"""

    remaining_amount_paise: int
    remaining_amount_rupees: Decimal
    pending_participants: List[ParticipantResponse]
    pending_count: int


class StatusTransitionResult(CamelModel):
    """Outcome of validating a payment status change"""

    is_valid: bool
    error: Optional[str] = None
    new_status: Optional[PaymentStatus] = None


class SettlementResponse(CamelModel):
    """Settlement summary together with the outstanding remainder"""

    bill_id: str
    status: BillStatus
    summary: SettlementSummary
    remainder: RemainderCalculation


class BillStatistics(CamelModel):
    """Counts and pending paise across all non-deleted bills"""

    total_bills: int
    active_bills: int
    settled_bills: int
    pending_amount_paise: int
