"""Bill endpoints"""
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from vasooly.database import get_db
from vasooly.schemas.bill import (BillCreate, BillListResponse, BillResponse,
                                  BillStatistics, PaymentStatusUpdate,
                                  SettlementResponse)
from vasooly.schemas.common import PaginationMeta
from vasooly.services.bill_service import BillService

router = APIRouter(prefix="/bills", tags=["Bills"])


@router.post("", response_model=BillResponse, status_code=status.HTTP_201_CREATED)
async def create_bill(
    bill_data: BillCreate,
    db: AsyncSession = Depends(get_db)
):
    """
    Create a bill split equally among its participants.

    Participants earlier in the list absorb any leftover paise.

    Raises:
        400: If the amount or participants are invalid
        409: If a supplied participant ID is already taken
    """
    bill = await BillService.create_bill(bill_data, db)
    return BillResponse.model_validate(bill)


@router.get("", response_model=BillListResponse)
async def list_bills(
    page: int = Query(1, ge=1, description="Page number (1-indexed)"),
    page_size: int = Query(20, ge=1, le=100, description="Items per page"),
    search: Optional[str] = Query(None, description="Filter by title"),
    db: AsyncSession = Depends(get_db)
):
    """Get bills, newest first, with pagination and an optional title search."""
    bills, total_count = await BillService.list_bills(
        db, page=page, page_size=page_size, search=search
    )

    total_pages = (total_count + page_size - 1) // page_size if total_count > 0 else 0

    return BillListResponse(
        items=[BillResponse.model_validate(bill) for bill in bills],
        pagination=PaginationMeta(
            page=page,
            page_size=page_size,
            total_items=total_count,
            total_pages=total_pages
        )
    )


@router.get("/stats", response_model=BillStatistics)
async def get_statistics(db: AsyncSession = Depends(get_db)):
    """Get bill counts by status and the total amount still pending."""
    return await BillService.get_statistics(db)


@router.get("/{bill_id}", response_model=BillResponse)
async def get_bill(bill_id: str, db: AsyncSession = Depends(get_db)):
    """
    Get a bill with its participants.

    Raises:
        404: If bill not found or deleted
    """
    bill = await BillService.get_bill(bill_id, db)
    return BillResponse.model_validate(bill)


@router.delete("/{bill_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_bill(bill_id: str, db: AsyncSession = Depends(get_db)):
    """
    Delete a bill. The row is kept with status DELETED.

    Raises:
        404: If bill not found or already deleted
    """
    await BillService.delete_bill(bill_id, db)
    return None


@router.post(
    "/{bill_id}/duplicate",
    response_model=BillResponse,
    status_code=status.HTTP_201_CREATED,
)
async def duplicate_bill(bill_id: str, db: AsyncSession = Depends(get_db)):
    """
    Copy a bill with everyone reset to PENDING.

    Raises:
        404: If bill not found or deleted
    """
    bill = await BillService.duplicate_bill(bill_id, db)
    return BillResponse.model_validate(bill)


@router.patch("/{bill_id}/participants/{participant_id}", response_model=BillResponse)
async def update_participant_status(
    bill_id: str,
    participant_id: str,
    update: PaymentStatusUpdate,
    db: AsyncSession = Depends(get_db)
):
    """
    Mark a participant as PAID or PENDING.

    The bill becomes SETTLED once every participant has paid and goes
    back to ACTIVE if a payment is reverted.

    Raises:
        404: If bill or participant not found
    """
    bill = await BillService.update_participant_status(
        bill_id, participant_id, update.status, db
    )
    return BillResponse.model_validate(bill)


@router.get("/{bill_id}/settlement", response_model=SettlementResponse)
async def get_settlement(bill_id: str, db: AsyncSession = Depends(get_db)):
    """
    Get paid/pending totals and the list of participants yet to pay.

    Raises:
        404: If bill not found or deleted
    """
    return await BillService.get_settlement(bill_id, db)
