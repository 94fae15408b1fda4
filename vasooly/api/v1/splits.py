"""Split preview endpoints"""
from fastapi import APIRouter

from vasooly.schemas.split import DetailedSplitResult, SplitPreviewRequest
from vasooly.services.bill_service import BillService

router = APIRouter(prefix="/splits", tags=["Splits"])


@router.post("/preview", response_model=DetailedSplitResult)
async def preview_split(request: SplitPreviewRequest):
    """
    Compute an equal split without saving anything.

    Called as the user edits the bill form, so it does no I/O.

    Raises:
        400: If the amount or participants are invalid; the error body
            names the offending field ("amount" or "participants")
    """
    return BillService.preview_split(request)
