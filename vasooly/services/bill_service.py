"""Bill business logic"""
import logging
import uuid
from typing import List, Optional, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from vasooly.core.exceptions import (ConflictError,
                                     InvalidStatusTransitionError,
                                     NotFoundError, SplitError)
from vasooly.models.bill import Bill, BillStatus
from vasooly.models.participant import Participant, PaymentStatus
from vasooly.repositories.bill_repository import BillRepository
from vasooly.repositories.participant_repository import ParticipantRepository
from vasooly.schemas.bill import (BillCreate, BillStatistics,
                                  SettlementResponse)
from vasooly.schemas.split import DetailedSplitResult, SplitPreviewRequest
from vasooly.services.split_engine import (calculate_detailed_split,
                                           validate_split_inputs,
                                           verify_split_integrity)
from vasooly.services.status_manager import (calculate_remainder,
                                             compute_settlement_summary,
                                             determine_bill_status,
                                             validate_status_transition)

logger = logging.getLogger(__name__)


class BillService:
    """Service for bill operations"""

    @staticmethod
    def preview_split(request: SplitPreviewRequest) -> DetailedSplitResult:
        """
        Validate a split request and compute the shares without saving.

        Args:
            request: Total and participants

        Returns:
            Detailed split

        Raises:
            SplitValidationError: If the amount or participants are invalid
        """
        total_paise = request.resolve_total_paise()
        validate_split_inputs(total_paise, request.participants)
        return calculate_detailed_split(total_paise, request.participants)

    @staticmethod
    async def create_bill(bill_data: BillCreate, db: AsyncSession) -> Bill:
        """
        Split a bill equally and save it with its participants.

        Args:
            bill_data: Bill creation data
            db: Database session

        Returns:
            Created bill with participants

        Raises:
            SplitValidationError: If the amount or participants are invalid
        """
        total_paise = bill_data.resolve_total_paise()
        validate_split_inputs(total_paise, bill_data.participants)

        identities = [
            {"id": p.id or str(uuid.uuid4()), "name": p.name.strip()}
            for p in bill_data.participants
        ]
        split = calculate_detailed_split(total_paise, identities)
        if not verify_split_integrity(split):
            raise SplitError(f"Split of {total_paise} paise does not add up")

        bill = Bill(
            title=bill_data.title,
            total_amount_paise=total_paise,
            category=bill_data.category,
            description=bill_data.description,
            status=BillStatus.ACTIVE,
        )
        created_bill = await BillRepository.create(db, bill)

        participants = [
            Participant(
                id=share.participant_id,
                bill_id=created_bill.id,
                name=share.participant_name,
                phone=participant_input.phone,
                amount_paise=share.amount_paise,
                status=PaymentStatus.PENDING,
                position=position,
            )
            for position, (participant_input, share) in enumerate(
                zip(bill_data.participants, split.splits)
            )
        ]
        try:
            await ParticipantRepository.create_batch(db, participants)
        except IntegrityError:
            await db.rollback()
            raise ConflictError("Participant ID already exists")

        await db.commit()
        logger.info(
            "Created bill %s for %d paise split among %d participants (remainder %d)",
            created_bill.id,
            total_paise,
            split.participant_count,
            split.remainder_paise,
        )

        return await BillRepository.get_with_participants(db, created_bill.id)

    @staticmethod
    async def get_bill(bill_id: str, db: AsyncSession) -> Bill:
        """
        Get a bill with its participants.

        Raises:
            NotFoundError: If bill doesn't exist or was deleted
        """
        bill = await BillRepository.get_with_participants(db, bill_id)
        if not bill:
            raise NotFoundError("Bill not found")
        return bill

    @staticmethod
    async def list_bills(
        db: AsyncSession,
        page: int = 1,
        page_size: int = 20,
        search: Optional[str] = None,
    ) -> Tuple[List[Bill], int]:
        """
        Get a page of bills, newest first.

        Args:
            db: Database session
            page: Page number (1-indexed)
            page_size: Number of items per page
            search: Optional title filter

        Returns:
            Tuple of (bills, total_count)
        """
        skip = (page - 1) * page_size
        bills = await BillRepository.list_bills(db, skip=skip, limit=page_size, search=search)
        total_count = await BillRepository.count_bills(db, search=search)
        return bills, total_count

    @staticmethod
    async def delete_bill(bill_id: str, db: AsyncSession) -> None:
        """
        Soft delete a bill.

        Raises:
            NotFoundError: If bill doesn't exist or was already deleted
        """
        deleted = await BillRepository.soft_delete(db, bill_id)
        if not deleted:
            raise NotFoundError("Bill not found")

        await db.commit()
        logger.info("Deleted bill %s", bill_id)

    @staticmethod
    async def duplicate_bill(bill_id: str, db: AsyncSession) -> Bill:
        """
        Copy a bill with fresh IDs, ACTIVE status and every participant PENDING.

        Shares are copied as-is so the copy keeps the same remainder placement.

        Raises:
            NotFoundError: If bill doesn't exist or was deleted
        """
        source = await BillService.get_bill(bill_id, db)

        copy = Bill(
            title=source.title,
            total_amount_paise=source.total_amount_paise,
            category=source.category,
            description=source.description,
            status=BillStatus.ACTIVE,
        )
        created_bill = await BillRepository.create(db, copy)

        await ParticipantRepository.create_batch(
            db,
            [
                Participant(
                    bill_id=created_bill.id,
                    name=p.name,
                    phone=p.phone,
                    amount_paise=p.amount_paise,
                    status=PaymentStatus.PENDING,
                    position=p.position,
                )
                for p in source.participants
            ],
        )

        await db.commit()
        logger.info("Duplicated bill %s as %s", bill_id, created_bill.id)

        return await BillRepository.get_with_participants(db, created_bill.id)

    @staticmethod
    async def update_participant_status(
        bill_id: str,
        participant_id: str,
        new_status: PaymentStatus,
        db: AsyncSession,
    ) -> Bill:
        """
        Mark a participant as paid or pending and re-derive the bill status.

        Args:
            bill_id: Bill ID
            participant_id: Participant ID
            new_status: Payment status to apply
            db: Database session

        Returns:
            Updated bill with participants

        Raises:
            NotFoundError: If bill or participant doesn't exist
            InvalidStatusTransitionError: If the status change is not allowed
        """
        bill = await BillService.get_bill(bill_id, db)

        participant = await ParticipantRepository.get_by_id(db, bill_id, participant_id)
        if not participant:
            raise NotFoundError("Participant not found")

        transition = validate_status_transition(participant.status, new_status)
        if not transition.is_valid:
            raise InvalidStatusTransitionError(transition.error)

        if transition.new_status == participant.status:
            return bill

        await ParticipantRepository.update_status(db, participant, transition.new_status)

        bill_status = determine_bill_status(bill)
        if bill_status != bill.status:
            await BillRepository.update_status(db, bill, bill_status)

        await db.commit()
        logger.info(
            "Participant %s on bill %s is now %s (bill %s)",
            participant_id,
            bill_id,
            transition.new_status.value,
            bill_status.value,
        )

        return await BillRepository.get_with_participants(db, bill_id)

    @staticmethod
    async def get_settlement(bill_id: str, db: AsyncSession) -> SettlementResponse:
        """
        Summarize who has paid on a bill and what is still owed.

        Raises:
            NotFoundError: If bill doesn't exist or was deleted
        """
        bill = await BillService.get_bill(bill_id, db)

        return SettlementResponse(
            bill_id=bill.id,
            status=bill.status,
            summary=compute_settlement_summary(bill),
            remainder=calculate_remainder(bill),
        )

    @staticmethod
    async def get_statistics(db: AsyncSession) -> BillStatistics:
        """Get bill counts and total pending paise."""
        stats = await BillRepository.get_statistics(db)
        return BillStatistics(**stats)
