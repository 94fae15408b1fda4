"""Split schemas"""
from decimal import Decimal
from typing import List, Optional, Union

from pydantic import ConfigDict, Field, StrictFloat, StrictInt

from vasooly.config import get_settings
from vasooly.core.exceptions import SplitField, SplitValidationError
from vasooly.schemas.common import CamelModel
from vasooly.utils.money import rupees_to_paise


class FrozenModel(CamelModel):
    """Immutable split result"""

    model_config = ConfigDict(frozen=True)


class SplitParticipant(FrozenModel):
    """Participant identity used when splitting"""

    id: str
    name: str


class ParticipantShare(FrozenModel):
    """One participant's share of a split"""

    participant_id: str
    participant_name: str
    amount_paise: int


class SplitResult(FrozenModel):
    """Bare partition of a total into integer shares"""

    shares: List[int]
    total: int
    remainder: int


class DetailedSplitResult(FrozenModel):
    """Split with per-participant attribution and remainder metadata"""

    splits: List[ParticipantShare]
    total_amount_paise: int
    participant_count: int
    average_amount_paise: int
    remainder_paise: int
    is_exactly_split: bool


class AmountInput(CamelModel):
    """Bill total given either in paise or as a typed rupee amount"""

    # Fractional paise get through here and are rejected as an amount error
    total_amount_paise: Optional[Union[StrictInt, StrictFloat]] = None
    total_amount: Optional[Decimal] = Field(
        default=None, description="Rupee amount as typed, e.g. 123.45"
    )

    def resolve_total_paise(self) -> Union[int, float]:
        """
        Return the total in paise, converting a rupee amount once.

        Raises:
            SplitValidationError: If neither amount is given, or the rupee
                amount is beyond the largest storable total
        """
        if self.total_amount_paise is not None:
            return self.total_amount_paise
        if self.total_amount is not None:
            max_total_paise = get_settings().max_total_amount_paise
            if self.total_amount.copy_abs() > Decimal(max_total_paise) / 100:
                raise SplitValidationError(
                    f"Total amount must not exceed {max_total_paise} paise", SplitField.AMOUNT
                )
            return rupees_to_paise(self.total_amount)
        raise SplitValidationError("Total amount is required", SplitField.AMOUNT)


class SplitPreviewRequest(AmountInput):
    """Request body for previewing a split before saving a bill"""

    participants: List[SplitParticipant]
