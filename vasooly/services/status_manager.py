"""Payment status tracking for bills

Pure functions over anything shaped like a bill: an object with
``total_amount_paise``, ``status`` and ``participants``, where each
participant has ``id``, ``amount_paise`` and ``status``. ORM rows and
plain objects both work.
"""

from typing import Any, List

from vasooly.core.exceptions import ValidationError
from vasooly.models.bill import BillStatus
from vasooly.models.participant import PaymentStatus
from vasooly.schemas.bill import (ParticipantResponse, RemainderCalculation,
                                  SettlementSummary, StatusTransitionResult)
from vasooly.utils.money import paise_to_rupees


def validate_status_transition(current_status: Any, new_status: Any) -> StatusTransitionResult:
    """
    Validate a payment status change.

    PENDING -> PAID, PAID -> PENDING (refund/revert) and no-op transitions
    are all allowed; unknown status values are not.

    Args:
        current_status: Current payment status
        new_status: Proposed payment status

    Returns:
        StatusTransitionResult describing whether the change is allowed
    """
    try:
        current = PaymentStatus(current_status)
    except ValueError:
        return StatusTransitionResult(
            is_valid=False, error=f"Invalid current status: {current_status}"
        )

    try:
        new = PaymentStatus(new_status)
    except ValueError:
        return StatusTransitionResult(
            is_valid=False, error=f"Invalid new status: {new_status}"
        )

    if current == new:
        return StatusTransitionResult(is_valid=True, new_status=current)

    return StatusTransitionResult(is_valid=True, new_status=new)


def _require_participants(bill: Any) -> List[Any]:
    if bill is None:
        raise ValidationError("Bill is required")

    participants = list(getattr(bill, "participants", None) or [])
    if not participants:
        raise ValidationError("Bill must have at least one participant")
    return participants


def compute_settlement_summary(bill: Any) -> SettlementSummary:
    """
    Compute paid/pending totals, counts and percentages for a bill.

    Args:
        bill: Bill with participants

    Returns:
        SettlementSummary

    Raises:
        ValidationError: If the bill is missing or has no participants
    """
    participants = _require_participants(bill)
    total_amount_paise = bill.total_amount_paise

    paid = [p for p in participants if p.status == PaymentStatus.PAID]
    paid_amount_paise = sum(p.amount_paise for p in paid)
    pending_amount_paise = total_amount_paise - paid_amount_paise

    paid_percentage = (
        paid_amount_paise / total_amount_paise * 100 if total_amount_paise > 0 else 0.0
    )

    paid_count = len(paid)
    is_fully_settled = paid_count == len(participants) and pending_amount_paise == 0

    return SettlementSummary(
        total_amount_paise=total_amount_paise,
        paid_amount_paise=paid_amount_paise,
        pending_amount_paise=pending_amount_paise,
        paid_percentage=paid_percentage,
        pending_percentage=100 - paid_percentage,
        paid_count=paid_count,
        pending_count=len(participants) - paid_count,
        total_count=len(participants),
        is_fully_settled=is_fully_settled,
        is_partially_settled=paid_count > 0 and not is_fully_settled,
    )


def calculate_remainder(bill: Any) -> RemainderCalculation:
    """
    Work out what is still owed on a bill and by whom.

    Args:
        bill: Bill with participants

    Returns:
        RemainderCalculation listing pending participants

    Raises:
        ValidationError: If the bill is missing or has no participants
    """
    participants = _require_participants(bill)
    pending = [p for p in participants if p.status == PaymentStatus.PENDING]
    remaining_amount_paise = sum(p.amount_paise for p in pending)

    return RemainderCalculation(
        remaining_amount_paise=remaining_amount_paise,
        remaining_amount_rupees=paise_to_rupees(remaining_amount_paise),
        pending_participants=[ParticipantResponse.model_validate(p) for p in pending],
        pending_count=len(pending),
    )


def determine_bill_status(bill: Any) -> BillStatus:
    """SETTLED once everyone has paid, ACTIVE otherwise; DELETED is kept."""
    if bill is None:
        raise ValidationError("Bill is required")

    if bill.status == BillStatus.DELETED:
        return BillStatus.DELETED

    summary = compute_settlement_summary(bill)
    return BillStatus.SETTLED if summary.is_fully_settled else BillStatus.ACTIVE


def has_pending_payments(bill: Any) -> bool:
    if bill is None or not getattr(bill, "participants", None):
        return False
    return any(p.status == PaymentStatus.PENDING for p in bill.participants)


def is_fully_paid(bill: Any) -> bool:
    if bill is None or not getattr(bill, "participants", None):
        return False
    return all(p.status == PaymentStatus.PAID for p in bill.participants)
