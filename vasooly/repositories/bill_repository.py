"""Bill data access"""

from datetime import datetime
from typing import List, Optional

from sqlalchemy import case, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from vasooly.models.bill import Bill, BillStatus
from vasooly.models.participant import Participant, PaymentStatus


class BillRepository:
    """Repository for Bill database operations"""

    @staticmethod
    async def create(db: AsyncSession, bill: Bill) -> Bill:
        """
        Create a new bill.

        Args:
            db: Database session
            bill: Bill object to create

        Returns:
            Created bill
        """
        db.add(bill)
        await db.flush()
        await db.refresh(bill)
        return bill

    @staticmethod
    async def get_by_id(db: AsyncSession, bill_id: str) -> Optional[Bill]:
        """
        Get a bill by ID, ignoring deleted bills.

        Args:
            db: Database session
            bill_id: Bill ID

        Returns:
            Bill if found, None otherwise
        """
        result = await db.execute(
            select(Bill).where(Bill.id == bill_id, Bill.status != BillStatus.DELETED)
        )
        return result.scalar_one_or_none()

    @staticmethod
    async def get_with_participants(db: AsyncSession, bill_id: str) -> Optional[Bill]:
        """
        Get a bill with its participants eagerly loaded.

        Args:
            db: Database session
            bill_id: Bill ID

        Returns:
            Bill with participants if found and not deleted, None otherwise
        """
        result = await db.execute(
            select(Bill)
            .where(Bill.id == bill_id, Bill.status != BillStatus.DELETED)
            .options(selectinload(Bill.participants))
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    @staticmethod
    async def list_bills(
        db: AsyncSession,
        skip: int = 0,
        limit: int = 20,
        search: Optional[str] = None,
    ) -> List[Bill]:
        """
        List non-deleted bills, newest first.

        Args:
            db: Database session
            skip: Number of records to skip
            limit: Maximum number of records to return
            search: Optional case-insensitive title filter

        Returns:
            List of bills with participants loaded
        """
        query = select(Bill).where(Bill.status != BillStatus.DELETED)

        if search:
            query = query.where(Bill.title.ilike(f"%{search}%"))

        query = (
            query.order_by(Bill.created_at.desc())
            .offset(skip)
            .limit(limit)
            .options(selectinload(Bill.participants))
        )

        result = await db.execute(query)
        return list(result.scalars().all())

    @staticmethod
    async def count_bills(db: AsyncSession, search: Optional[str] = None) -> int:
        """Count non-deleted bills matching the optional title filter."""
        query = select(func.count(Bill.id)).where(Bill.status != BillStatus.DELETED)
        if search:
            query = query.where(Bill.title.ilike(f"%{search}%"))

        result = await db.execute(query)
        return result.scalar_one()

    @staticmethod
    async def update_status(db: AsyncSession, bill: Bill, status: BillStatus) -> Bill:
        """Set a bill's status."""
        bill.status = status
        bill.updated_at = datetime.utcnow()
        await db.flush()
        return bill

    @staticmethod
    async def soft_delete(db: AsyncSession, bill_id: str) -> bool:
        """
        Mark a bill as deleted without removing its rows.

        Args:
            db: Database session
            bill_id: Bill ID

        Returns:
            True if deleted, False if not found
        """
        bill = await BillRepository.get_by_id(db, bill_id)
        if not bill:
            return False

        now = datetime.utcnow()
        bill.status = BillStatus.DELETED
        bill.deleted_at = now
        bill.updated_at = now
        await db.flush()
        return True

    @staticmethod
    async def hard_delete(db: AsyncSession, bill_id: str) -> bool:
        """Remove a bill and its participants permanently."""
        result = await db.execute(select(Bill).where(Bill.id == bill_id))
        bill = result.scalar_one_or_none()
        if not bill:
            return False

        await db.delete(bill)
        await db.flush()
        return True

    @staticmethod
    async def get_statistics(db: AsyncSession) -> dict:
        """
        Aggregate bill counts and pending paise across non-deleted bills.

        Returns:
            Dict with total_bills, active_bills, settled_bills, pending_amount_paise
        """
        counts = await db.execute(
            select(
                func.count(Bill.id),
                func.sum(case((Bill.status == BillStatus.ACTIVE, 1), else_=0)),
                func.sum(case((Bill.status == BillStatus.SETTLED, 1), else_=0)),
            ).where(Bill.status != BillStatus.DELETED)
        )
        total, active, settled = counts.one()

        pending = await db.execute(
            select(func.sum(Participant.amount_paise))
            .join(Bill, Participant.bill_id == Bill.id)
            .where(
                Bill.status != BillStatus.DELETED,
                Participant.status == PaymentStatus.PENDING,
            )
        )

        return {
            "total_bills": total or 0,
            "active_bills": active or 0,
            "settled_bills": settled or 0,
            "pending_amount_paise": pending.scalar_one() or 0,
        }
