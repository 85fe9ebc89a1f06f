"""Raffle Kernel data models."""

from raffle_kernel.models.actions import (
    ACTION_FUNCTIONS,
    ActionDecision,
    ActionSet,
    RaffleAction,
    UnavailableReason,
)
from raffle_kernel.models.fees import FeeBreakdown
from raffle_kernel.models.listing import (
    ListedRaffle,
    ListPage,
    ListQuery,
    SortField,
    SortOrder,
    StatusTab,
)
from raffle_kernel.models.money import Money, Underflow
from raffle_kernel.models.raffle import (
    ZERO_ADDRESS,
    CanonicalStatus,
    RaffleEntry,
    RaffleSnapshot,
    RawRaffle,
)
from raffle_kernel.models.validation import (
    CreateRaffleParams,
    ValidationIssue,
    ValidationResult,
)

__all__ = [
    "ACTION_FUNCTIONS",
    "ActionDecision",
    "ActionSet",
    "CanonicalStatus",
    "CreateRaffleParams",
    "FeeBreakdown",
    "ListedRaffle",
    "ListPage",
    "ListQuery",
    "Money",
    "RaffleAction",
    "RaffleEntry",
    "RaffleSnapshot",
    "RawRaffle",
    "SortField",
    "SortOrder",
    "StatusTab",
    "UnavailableReason",
    "Underflow",
    "ValidationIssue",
    "ValidationResult",
    "ZERO_ADDRESS",
]
