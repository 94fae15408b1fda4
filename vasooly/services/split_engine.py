"""Equal bill splitting in integer paise

Shares never differ by more than one paisa and always sum to the total.
When the total does not divide evenly, the first ``total % count``
participants each carry one extra paisa.
"""

from typing import Any, List, Optional, Sequence

from vasooly.config import get_settings
from vasooly.core.exceptions import (InvalidCountError, InvalidTotalError,
                                     SplitField, SplitValidationError)
from vasooly.schemas.split import (DetailedSplitResult, ParticipantShare,
                                   SplitResult)
from vasooly.utils.money import format_paise


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _attr(participant: Any, key: str) -> Any:
    if isinstance(participant, dict):
        return participant.get(key)
    return getattr(participant, key, None)


def _text(participant: Any, key: str) -> str:
    value = _attr(participant, key)
    return "" if value is None else str(value)


def split_equal(total_paise: int, count: int) -> List[int]:
    """
    Split a total into ``count`` integer shares.

    Args:
        total_paise: Non-negative total in paise
        count: Number of shares, at least 1

    Returns:
        Shares in paise; the first ``total_paise % count`` are one paisa larger

    Raises:
        InvalidCountError: If count is not a positive integer
        InvalidTotalError: If total is not a non-negative integer
    """
    if not _is_int(count) or count <= 0:
        raise InvalidCountError()

    if not _is_int(total_paise) or total_paise < 0:
        raise InvalidTotalError()

    base, remainder = divmod(total_paise, count)
    return [base + 1] * remainder + [base] * (count - remainder)


def calculate_split(total_paise: int, count: int) -> SplitResult:
    """Partition a total and report the remainder alongside the shares."""
    shares = split_equal(total_paise, count)
    return SplitResult(shares=shares, total=sum(shares), remainder=total_paise % count)


def calculate_detailed_split(
    total_paise: int, participants: Sequence[Any]
) -> DetailedSplitResult:
    """
    Split a total equally and attribute each share to a participant.

    Share ``i`` belongs to ``participants[i]``, so the participants at the
    front of the list are the ones who absorb the remainder.

    Args:
        total_paise: Non-negative total in paise
        participants: Objects or dicts with ``id`` and ``name``

    Returns:
        DetailedSplitResult with per-participant shares

    Raises:
        InvalidCountError: If participants is empty
        InvalidTotalError: If total is negative or not an integer
    """
    count = len(participants)
    shares = split_equal(total_paise, count)
    base, remainder = divmod(total_paise, count)

    splits = [
        ParticipantShare(
            participant_id=_text(participant, "id"),
            participant_name=_text(participant, "name"),
            amount_paise=share,
        )
        for participant, share in zip(participants, shares)
    ]

    return DetailedSplitResult(
        splits=splits,
        total_amount_paise=total_paise,
        participant_count=count,
        average_amount_paise=base,
        remainder_paise=remainder,
        is_exactly_split=remainder == 0,
    )


def validate_split_inputs(
    total_paise: Any,
    participants: Sequence[Any],
    min_participants: Optional[int] = None,
    max_total_paise: Optional[int] = None,
) -> None:
    """
    Validate a bill split request before it reaches the partitioner.

    Checks run in order: amount, participant count, participant names,
    participant id uniqueness.

    Args:
        total_paise: Bill total in paise
        participants: Objects or dicts with ``name`` (and optionally ``id``)
        min_participants: Minimum participants, defaults to settings
        max_total_paise: Largest accepted total, defaults to settings

    Raises:
        SplitValidationError: Tagged with the field the problem belongs to
    """
    settings = get_settings()
    if min_participants is None:
        min_participants = settings.min_split_participants
    if max_total_paise is None:
        max_total_paise = settings.max_total_amount_paise

    if not _is_int(total_paise):
        raise SplitValidationError(
            "Total amount must be a whole number of paise", SplitField.AMOUNT
        )
    if total_paise <= 0:
        raise SplitValidationError(
            "Total amount must be greater than zero", SplitField.AMOUNT
        )
    if total_paise > max_total_paise:
        raise SplitValidationError(
            f"Total amount must not exceed {max_total_paise} paise", SplitField.AMOUNT
        )

    if participants is None or len(participants) < min_participants:
        raise SplitValidationError(
            f"At least {min_participants} participants are required",
            SplitField.PARTICIPANTS,
        )

    for index, participant in enumerate(participants):
        name = _attr(participant, "name")
        if not isinstance(name, str) or not name.strip():
            raise SplitValidationError(
                f"Participant {index + 1} must have a name", SplitField.PARTICIPANTS
            )

    ids = [_attr(p, "id") for p in participants if _attr(p, "id") is not None]
    if len(ids) != len(set(ids)):
        raise SplitValidationError(
            "Participant IDs must be unique", SplitField.PARTICIPANTS
        )


def verify_split_integrity(result: DetailedSplitResult) -> bool:
    """Check that a split neither lost nor created money."""
    amounts = [split.amount_paise for split in result.splits]

    if sum(amounts) != result.total_amount_paise:
        return False
    if any(not _is_int(amount) or amount < 0 for amount in amounts):
        return False
    return len(amounts) == result.participant_count


def format_split_result(result: DetailedSplitResult, symbol: Optional[str] = None) -> str:
    """
    Format a split as a multi-line summary.

    Example::

        Split ₹100.00 among 3 participant(s):
          Alice: ₹33.34
          Bob: ₹33.33
          Charlie: ₹33.33
          (1 paise remainder distributed to first participant(s))
    """
    if symbol is None:
        symbol = get_settings().currency_symbol

    lines = [
        f"Split {format_paise(result.total_amount_paise, symbol)} "
        f"among {result.participant_count} participant(s):"
    ]
    lines.extend(
        f"  {split.participant_name}: {format_paise(split.amount_paise, symbol)}"
        for split in result.splits
    )
    if not result.is_exactly_split:
        lines.append(
            f"  ({result.remainder_paise} paise remainder distributed to first participant(s))"
        )
    return "\n".join(lines)