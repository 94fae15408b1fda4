"""Participant data access"""
from datetime import datetime
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from vasooly.models.participant import Participant, PaymentStatus


class ParticipantRepository:
    """Repository for Participant database operations"""

    @staticmethod
    async def create_batch(db: AsyncSession, participants: List[Participant]) -> List[Participant]:
        """
        Create multiple participants in a batch.

        Args:
            db: Database session
            participants: List of Participant objects

        Returns:
            List of created participants
        """
        db.add_all(participants)
        await db.flush()
        return participants

    @staticmethod
    async def get_by_id(
        db: AsyncSession, bill_id: str, participant_id: str
    ) -> Optional[Participant]:
        """
        Get a participant of a specific bill.

        Args:
            db: Database session
            bill_id: Bill ID
            participant_id: Participant ID

        Returns:
            Participant if found on that bill, None otherwise
        """
        result = await db.execute(
            select(Participant).where(
                Participant.id == participant_id,
                Participant.bill_id == bill_id,
            )
        )
        return result.scalar_one_or_none()

    @staticmethod
    async def update_status(
        db: AsyncSession, participant: Participant, status: PaymentStatus
    ) -> Participant:
        """Set a participant's payment status, stamping or clearing paid_at."""
        participant.status = status
        participant.paid_at = datetime.utcnow() if status == PaymentStatus.PAID else None
        await db.flush()
        return participant
