"""Unit tests for bill business logic"""

from types import SimpleNamespace
from unittest.mock import AsyncMock, patch

import pytest

from vasooly.core.exceptions import (InvalidStatusTransitionError,
                                     NotFoundError, SplitField,
                                     SplitValidationError)
from vasooly.models.bill import Bill, BillStatus
from vasooly.models.participant import PaymentStatus
from vasooly.schemas.bill import BillCreate, ParticipantInput
from vasooly.schemas.split import SplitParticipant, SplitPreviewRequest
from vasooly.services.bill_service import BillService


@pytest.fixture
def mock_db():
    """Create mock database session"""
    return AsyncMock()


class TestPreviewSplit:
    """Test split preview"""

    def test_preview_from_paise(self):
        request = SplitPreviewRequest(
            total_amount_paise=100,
            participants=[
                SplitParticipant(id="a", name="A"),
                SplitParticipant(id="b", name="B"),
                SplitParticipant(id="c", name="C"),
            ],
        )

        result = BillService.preview_split(request)

        assert [s.amount_paise for s in result.splits] == [34, 33, 33]
        assert result.remainder_paise == 1

    def test_preview_from_rupees(self):
        """Test a typed rupee amount is converted to paise once"""
        request = SplitPreviewRequest.model_validate(
            {
                "totalAmount": "123.45",
                "participants": [{"id": "a", "name": "A"}, {"id": "b", "name": "B"}],
            }
        )

        result = BillService.preview_split(request)

        assert result.total_amount_paise == 12345
        assert [s.amount_paise for s in result.splits] == [6173, 6172]

    def test_preview_without_amount(self):
        request = SplitPreviewRequest(
            participants=[SplitParticipant(id="a", name="A"), SplitParticipant(id="b", name="B")]
        )

        with pytest.raises(SplitValidationError) as exc_info:
            BillService.preview_split(request)
        assert exc_info.value.field == SplitField.AMOUNT

    def test_preview_single_participant(self):
        request = SplitPreviewRequest(
            total_amount_paise=100, participants=[SplitParticipant(id="a", name="A")]
        )

        with pytest.raises(SplitValidationError) as exc_info:
            BillService.preview_split(request)
        assert exc_info.value.field == SplitField.PARTICIPANTS


class TestCreateBill:
    """Test bill creation"""

    @pytest.mark.asyncio
    @patch("vasooly.services.bill_service.ParticipantRepository")
    @patch("vasooly.services.bill_service.BillRepository")
    async def test_create_bill_persists_split(self, mock_bill_repo, mock_participant_repo, mock_db):
        """Test participants are stored with their shares in input order"""
        async def create_side_effect(db, bill):
            bill.id = "bill-1"
            return bill

        mock_bill_repo.create = AsyncMock(side_effect=create_side_effect)
        mock_bill_repo.get_with_participants = AsyncMock(return_value="loaded")
        mock_participant_repo.create_batch = AsyncMock()

        bill_data = BillCreate(
            title="Cab",
            total_amount_paise=1000,
            participants=[
                ParticipantInput(name=" Asha "),
                ParticipantInput(name="Ravi", phone="  "),
                ParticipantInput(id="fixed-id", name="Meera"),
            ],
        )

        result = await BillService.create_bill(bill_data, mock_db)

        assert result == "loaded"
        created_bill = mock_bill_repo.create.call_args.args[1]
        assert isinstance(created_bill, Bill)
        assert created_bill.total_amount_paise == 1000
        assert created_bill.status == BillStatus.ACTIVE

        participants = mock_participant_repo.create_batch.call_args.args[1]
        assert [p.amount_paise for p in participants] == [334, 333, 333]
        assert [p.name for p in participants] == ["Asha", "Ravi", "Meera"]
        assert [p.position for p in participants] == [0, 1, 2]
        assert participants[1].phone is None
        assert participants[2].id == "fixed-id"
        assert all(p.bill_id == "bill-1" for p in participants)
        assert all(p.status == PaymentStatus.PENDING for p in participants)
        mock_db.commit.assert_awaited_once()

    @pytest.mark.asyncio
    @patch("vasooly.services.bill_service.BillRepository")
    async def test_create_bill_invalid_amount(self, mock_bill_repo, mock_db):
        """Test nothing is written when validation fails"""
        mock_bill_repo.create = AsyncMock()

        bill_data = BillCreate(
            title="Cab",
            total_amount_paise=0,
            participants=[ParticipantInput(name="A"), ParticipantInput(name="B")],
        )

        with pytest.raises(SplitValidationError) as exc_info:
            await BillService.create_bill(bill_data, mock_db)

        assert exc_info.value.field == SplitField.AMOUNT
        mock_bill_repo.create.assert_not_called()
        mock_db.commit.assert_not_called()


class TestUpdateParticipantStatus:
    """Test payment status updates"""

    @pytest.mark.asyncio
    @patch("vasooly.services.bill_service.BillRepository")
    async def test_bill_not_found(self, mock_bill_repo, mock_db):
        mock_bill_repo.get_with_participants = AsyncMock(return_value=None)

        with pytest.raises(NotFoundError, match="Bill not found"):
            await BillService.update_participant_status("missing", "p1", PaymentStatus.PAID, mock_db)

    @pytest.mark.asyncio
    @patch("vasooly.services.bill_service.ParticipantRepository")
    @patch("vasooly.services.bill_service.BillRepository")
    async def test_participant_not_found(self, mock_bill_repo, mock_participant_repo, mock_db):
        mock_bill_repo.get_with_participants = AsyncMock(return_value=SimpleNamespace(id="b1"))
        mock_participant_repo.get_by_id = AsyncMock(return_value=None)

        with pytest.raises(NotFoundError, match="Participant not found"):
            await BillService.update_participant_status("b1", "nope", PaymentStatus.PAID, mock_db)

    @pytest.mark.asyncio
    @patch("vasooly.services.bill_service.ParticipantRepository")
    @patch("vasooly.services.bill_service.BillRepository")
    async def test_invalid_status(self, mock_bill_repo, mock_participant_repo, mock_db):
        mock_bill_repo.get_with_participants = AsyncMock(return_value=SimpleNamespace(id="b1"))
        mock_participant_repo.get_by_id = AsyncMock(
            return_value=SimpleNamespace(id="p1", status=PaymentStatus.PENDING)
        )

        with pytest.raises(InvalidStatusTransitionError, match="Invalid new status"):
            await BillService.update_participant_status("b1", "p1", "FORGIVEN", mock_db)

    @pytest.mark.asyncio
    @patch("vasooly.services.bill_service.ParticipantRepository")
    @patch("vasooly.services.bill_service.BillRepository")
    async def test_last_payment_settles_bill(self, mock_bill_repo, mock_participant_repo, mock_db):
        """Test the bill flips to SETTLED when the final participant pays"""
        paid = SimpleNamespace(id="p0", amount_paise=50, status=PaymentStatus.PAID)
        pending = SimpleNamespace(id="p1", amount_paise=50, status=PaymentStatus.PENDING)
        bill = SimpleNamespace(
            id="b1", total_amount_paise=100, status=BillStatus.ACTIVE, participants=[paid, pending]
        )

        async def mark(db, participant, status):
            participant.status = status
            return participant

        mock_bill_repo.get_with_participants = AsyncMock(return_value=bill)
        mock_bill_repo.update_status = AsyncMock()
        mock_participant_repo.get_by_id = AsyncMock(return_value=pending)
        mock_participant_repo.update_status = AsyncMock(side_effect=mark)

        await BillService.update_participant_status("b1", "p1", PaymentStatus.PAID, mock_db)

        mock_bill_repo.update_status.assert_awaited_once_with(mock_db, bill, BillStatus.SETTLED)
        mock_db.commit.assert_awaited_once()

    @pytest.mark.asyncio
    @patch("vasooly.services.bill_service.ParticipantRepository")
    @patch("vasooly.services.bill_service.BillRepository")
    async def test_same_status_is_noop(self, mock_bill_repo, mock_participant_repo, mock_db):
        bill = SimpleNamespace(id="b1")
        mock_bill_repo.get_with_participants = AsyncMock(return_value=bill)
        mock_participant_repo.get_by_id = AsyncMock(
            return_value=SimpleNamespace(id="p1", status=PaymentStatus.PAID)
        )
        mock_participant_repo.update_status = AsyncMock()

        result = await BillService.update_participant_status("b1", "p1", PaymentStatus.PAID, mock_db)

        assert result is bill
        mock_participant_repo.update_status.assert_not_called()
        mock_db.commit.assert_not_called()


class TestDeleteBill:
    """Test bill deletion"""

    @pytest.mark.asyncio
    @patch("vasooly.services.bill_service.BillRepository")
    async def test_delete_missing_bill(self, mock_bill_repo, mock_db):
        mock_bill_repo.soft_delete = AsyncMock(return_value=False)

        with pytest.raises(NotFoundError):
            await BillService.delete_bill("missing", mock_db)
        mock_db.commit.assert_not_called()
