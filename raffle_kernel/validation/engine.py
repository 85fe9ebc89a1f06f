"""
Validation Engine — checks raffle creation parameters before calldata is built.

Behavioral Contract:
- Mirrors the factory contract's acceptance rules, so a parameter set
  accepted here is accepted on chain
- Every rule is evaluated; all violations are returned together
- Pure: `now` is passed in, never read from a clock
- Shared by the client-side pre-check and the server-side calldata endpoint
"""

from typing import List

from raffle_kernel.models.money import Money
from raffle_kernel.models.validation import (
    CreateRaffleParams,
    ValidationIssue,
    ValidationResult,
)

TITLE_MIN_LENGTH = 3
TITLE_MAX_LENGTH = 100
DESCRIPTION_MIN_LENGTH = 10
DESCRIPTION_MAX_LENGTH = 500

MIN_ENTRY_FEE = Money(minor=10_000)                 # $0.01
MAX_ENTRY_FEE = Money(minor=10_000_000_000)         # $10,000

MIN_LIMITED_PARTICIPANTS = 2
MAX_PARTICIPANTS = 10_000

MAX_DEADLINE_SECONDS = 365 * 86_400

MAX_CREATOR_COMMISSION_BPS = 1_000                  # 10%


def _check_length(
    field: str, label: str, value: str, minimum: int, maximum: int
) -> List[ValidationIssue]:
    length = len(value)
    if length < minimum:
        return [ValidationIssue(
            field=field,
            code=f"{label}TooShort",
            message=f"{label}TooShort: {label} must be at least {minimum} characters",
        )]
    if length > maximum:
        return [ValidationIssue(
            field=field,
            code=f"{label}TooLong",
            message=f"{label}TooLong: {label} must be at most {maximum} characters",
        )]
    return []


def _check_entry_fee(entry_fee: Money) -> List[ValidationIssue]:
    if entry_fee < MIN_ENTRY_FEE:
        return [ValidationIssue(
            field="entry_fee",
            code="EntryFeeTooLow",
            message=(
                f"EntryFeeTooLow: Entry fee must be at least "
                f"{MIN_ENTRY_FEE.format_usdc()}"
            ),
        )]
    if entry_fee > MAX_ENTRY_FEE:
        return [ValidationIssue(
            field="entry_fee",
            code="EntryFeeTooHigh",
            message=(
                f"EntryFeeTooHigh: Entry fee cannot exceed "
                f"{MAX_ENTRY_FEE.format_usdc()}"
            ),
        )]
    return []


def _check_max_participants(max_participants: int) -> List[ValidationIssue]:
    if max_participants < 0:
        return [ValidationIssue(
            field="max_participants",
            code="InvalidMaxParticipants",
            message="InvalidMaxParticipants: Max participants must be 0 (unlimited) or a positive number",
        )]
    if max_participants == 0:
        return []
    if max_participants < MIN_LIMITED_PARTICIPANTS:
        return [ValidationIssue(
            field="max_participants",
            code="MinParticipantsTooLow",
            message=(
                "MinParticipantsTooLow: Cannot create raffle with only 1 participant. "
                "Use 0 for unlimited or 2+ for limited"
            ),
        )]
    if max_participants > MAX_PARTICIPANTS:
        return [ValidationIssue(
            field="max_participants",
            code="MaxParticipantsTooHigh",
            message=f"MaxParticipantsTooHigh: Max participants cannot exceed {MAX_PARTICIPANTS:,}",
        )]
    return []


def _check_deadline(deadline: int, now: int) -> List[ValidationIssue]:
    if deadline <= now:
        return [ValidationIssue(
            field="deadline",
            code="DeadlineMustBeInFuture",
            message="DeadlineMustBeInFuture: Deadline must be in the future",
        )]
    if deadline > now + MAX_DEADLINE_SECONDS:
        return [ValidationIssue(
            field="deadline",
            code="DeadlineTooFar",
            message="DeadlineTooFar: Deadline cannot exceed 365 days from now",
        )]
    return []


def _check_commission(creator_commission_bps: int) -> List[ValidationIssue]:
    if 0 <= creator_commission_bps <= MAX_CREATOR_COMMISSION_BPS:
        return []
    return [ValidationIssue(
        field="creator_commission_bps",
        code="InvalidCommission",
        message=(
            f"InvalidCommission: Creator commission must be between 0 and "
            f"{MAX_CREATOR_COMMISSION_BPS} basis points"
        ),
    )]


def validate_create_params(
    title: str,
    description: str,
    entry_fee: Money,
    deadline: int,
    max_participants: int,
    creator_commission_bps: int,
    now: int,
) -> ValidationResult:
    """Validate creation parameters. Collects every violation, in rule order."""
    errors: List[ValidationIssue] = []
    errors += _check_length(
        "title", "Title", title, TITLE_MIN_LENGTH, TITLE_MAX_LENGTH
    )
    errors += _check_length(
        "description", "Description", description,
        DESCRIPTION_MIN_LENGTH, DESCRIPTION_MAX_LENGTH,
    )
    errors += _check_entry_fee(entry_fee)
    errors += _check_max_participants(max_participants)
    errors += _check_deadline(deadline, now)
    errors += _check_commission(creator_commission_bps)
    return ValidationResult(ok=not errors, errors=errors)


def validate_params(params: CreateRaffleParams, now: int) -> ValidationResult:
    """Convenience wrapper over `validate_create_params` for a params model."""
    return validate_create_params(
        title=params.title,
        description=params.description,
        entry_fee=params.entry_fee,
        deadline=params.deadline,
        max_participants=params.max_participants,
        creator_commission_bps=params.creator_commission_bps,
        now=now,
    )


def creation_arguments(params: CreateRaffleParams, now: int) -> list:
    """
    Ordered createRaffle arguments for the calldata encoder.

    Raises ValueError when the parameters would be rejected on chain.
    """
    result = validate_params(params, now)
    if not result.ok:
        raise ValueError(
            "Invalid raffle parameters: " + ", ".join(result.codes())
        )
    return [
        params.title,
        params.description,
        params.prize_description,
        params.entry_fee.minor,
        params.deadline,
        params.max_participants,
        params.creator_commission_bps,
    ]


# Machine-readable form of the rules above, for programmatic clients.
VALIDATION_RULES = {
    "title": {
        "type": "string",
        "min_length": TITLE_MIN_LENGTH,
        "max_length": TITLE_MAX_LENGTH,
    },
    "description": {
        "type": "string",
        "min_length": DESCRIPTION_MIN_LENGTH,
        "max_length": DESCRIPTION_MAX_LENGTH,
    },
    "entry_fee": {
        "type": "integer",
        "unit": "USDC minor units (6 decimals)",
        "minimum": MIN_ENTRY_FEE.minor,
        "maximum": MAX_ENTRY_FEE.minor,
        "errors": ["EntryFeeTooLow", "EntryFeeTooHigh"],
    },
    "max_participants": {
        "type": "integer",
        "zero_means_unlimited": True,
        "minimum": 0,
        "maximum": MAX_PARTICIPANTS,
        "forbidden": [1],
        "errors": ["MinParticipantsTooLow", "MaxParticipantsTooHigh"],
    },
    "deadline": {
        "type": "unix timestamp (seconds)",
        "minimum": "now + 1 second",
        "maximum": f"now + {MAX_DEADLINE_SECONDS} seconds (365 days)",
        "errors": ["DeadlineMustBeInFuture", "DeadlineTooFar"],
    },
    "creator_commission_bps": {
        "type": "integer",
        "minimum": 0,
        "maximum": MAX_CREATOR_COMMISSION_BPS,
        "description": "Basis points of the pool after the platform fee. 1000 = 10%.",
    },
}
